"""Geometric operations for contours and seam allowances.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Point-in-polygon testing (ray casting algorithm)
- Nearest point on a line segment
- Perpendicular vector computation
- Rotation and mirroring of points and direction vectors

All functions are pure and stateless.
"""

import math

from seamcraft.domain import Point


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding (y axis pointing up)
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0)]
        >>> signed_area(square)
        1.0
        >>> signed_area(list(reversed(square)))
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def point_in_polygon(point: Point, polygon: list[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def nearest_point_on_segment(
    point: Point, seg_start: Point, seg_end: Point
) -> tuple[Point, float, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps the line
    parameter to [0, 1].

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance, t) where t is the clamped
        segment parameter of the nearest point

    Examples:
        >>> nearest, dist, t = nearest_point_on_segment(
        ...     Point(1.0, 1.0), Point(0.0, 0.0), Point(2.0, 0.0)
        ... )
        >>> nearest, dist, t
        (Point(x=1.0, y=0.0), 1.0, 0.5)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    # Handle zero-length segment
    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-10:
        distance = math.hypot(point.x - seg_start.x, point.y - seg_start.y)
        return seg_start, distance, 0.0

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest = Point(seg_start.x + t * dx, seg_start.y + t * dy)
    distance = math.hypot(point.x - nearest.x, point.y - nearest.y)

    return nearest, distance, t


def perpendicular_direction(p1: Point, p2: Point) -> Point:
    """Calculate the unit perpendicular vector to a line from p1 to p2.

    The perpendicular is rotated 90 degrees counter-clockwise from the
    direction vector (p2 - p1). A zero-length line has no direction and
    yields the zero vector.

    Args:
        p1: Start point of line
        p2: End point of line

    Returns:
        Unit perpendicular vector (or the zero vector)

    Examples:
        >>> perpendicular_direction(Point(0.0, 0.0), Point(1.0, 0.0))
        Point(x=-0.0, y=1.0)
    """
    return (p2 - p1).normalized().perpendicular()


def rotate_point(point: Point, angle_degrees: float, center: Point) -> Point:
    """Rotate a point counter-clockwise around a center."""
    rotated = rotate_vector(point - center, angle_degrees)
    return center + rotated


def rotate_vector(vector: Point, angle_degrees: float) -> Point:
    """Rotate a direction vector counter-clockwise (no translation)."""
    angle = math.radians(angle_degrees)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return Point(
        vector.x * cos_a - vector.y * sin_a,
        vector.x * sin_a + vector.y * cos_a,
    )


def mirror_point(point: Point, axis_start: Point, axis_end: Point) -> Point:
    """Reflect a point across the line through two axis points.

    A degenerate axis (coincident points) leaves the point unchanged.
    """
    axis = axis_end - axis_start
    if axis.length() < 1e-10:
        return point
    unit = axis.normalized()
    projection = (point - axis_start).dot(unit)
    closest = axis_start + unit * projection
    return closest * 2.0 - point


def mirror_vector(vector: Point, axis_start: Point, axis_end: Point) -> Point:
    """Reflect a direction vector across an axis direction (no translation)."""
    axis = axis_end - axis_start
    if axis.length() < 1e-10:
        return vector
    unit = axis.normalized()
    projection = vector.dot(unit)
    return unit * (2.0 * projection) - vector


def bounding_box(points: list[Point]) -> tuple[float, float, float, float]:
    """Calculate the bounding box of a set of points.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y); all zeros for no points
    """
    if not points:
        return (0.0, 0.0, 0.0, 0.0)

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs), min(ys), max(xs), max(ys))
