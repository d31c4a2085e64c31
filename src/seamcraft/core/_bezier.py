"""Internal curve sampling helpers.

Segments are measured, hit-tested and flattened by evaluating them at
equal parameter steps. Not intended for public use.
"""

import math

from seamcraft.domain import CubicSegment, PathSegment, Point


def sample_segment(segment: PathSegment, steps: int) -> list[Point]:
    """Evaluate a segment at ``steps + 1`` equally spaced parameters.

    Args:
        segment: Line or cubic segment
        steps: Number of parameter intervals

    Returns:
        Points at t = 0, 1/steps, ..., 1 (both endpoints included)
    """
    return [segment.point_at(i / steps) for i in range(steps + 1)]


def interior_samples(segment: CubicSegment, steps: int) -> list[Point]:
    """Curve samples strictly between the two endpoints.

    Args:
        segment: Cubic segment to flatten
        steps: Number of parameter intervals

    Returns:
        ``steps - 1`` points at t = 1/steps, ..., (steps-1)/steps
    """
    return [segment.point_at(i / steps) for i in range(1, steps)]


def polyline_length(points: list[Point]) -> float:
    """Sum of the distances between consecutive points."""
    length = 0.0
    for i in range(len(points) - 1):
        a = points[i]
        b = points[i + 1]
        length += math.hypot(b.x - a.x, b.y - a.y)
    return length


def cubic_length(segment: CubicSegment, steps: int) -> float:
    """Approximate arc length of a cubic segment.

    Samples the curve at equal parameter steps and sums the chord lengths.

    Args:
        segment: Cubic segment to measure
        steps: Number of chords

    Returns:
        Approximate arc length
    """
    return polyline_length(sample_segment(segment, steps))


def nearest_sample(segment: PathSegment, point: Point, steps: int) -> tuple[Point, float]:
    """Closest of the ``steps + 1`` curve samples to a point.

    Args:
        segment: Segment to sample
        point: Query point
        steps: Number of parameter intervals

    Returns:
        Tuple of (nearest_sample, distance)
    """
    best = segment.start
    best_distance = math.inf
    for sample in sample_segment(segment, steps):
        distance = math.hypot(point.x - sample.x, point.y - sample.y)
        if distance < best_distance:
            best_distance = distance
            best = sample
    return best, best_distance
