"""Path segment types produced from a contour.

A contour path is a list of segments, one per vertex pair along the
topology. Each segment is either a straight line or a cubic Bezier curve:

- LineSegment: Both endpoints are sharp vertices
- CubicSegment: At least one endpoint is a smooth vertex
"""

from dataclasses import dataclass

from seamcraft.domain.geometry import Point


@dataclass(frozen=True, slots=True)
class LineSegment:
    """Straight segment between two sharp vertices.

    Attributes:
        index: Segment index (equals the index of its start vertex)
        start: Start vertex position
        end: End vertex position
    """

    index: int
    start: Point
    end: Point

    def point_at(self, t: float) -> Point:
        """Point at parameter t in [0, 1]."""
        return Point(
            self.start.x + (self.end.x - self.start.x) * t,
            self.start.y + (self.end.y - self.start.y) * t,
        )


@dataclass(frozen=True, slots=True)
class CubicSegment:
    """Cubic Bezier segment touching at least one smooth vertex.

    Attributes:
        index: Segment index (equals the index of its start vertex)
        start: Start vertex position
        control1: Control point near the start vertex
        control2: Control point near the end vertex
        end: End vertex position
    """

    index: int
    start: Point
    control1: Point
    control2: Point
    end: Point

    def point_at(self, t: float) -> Point:
        """Point at parameter t in [0, 1].

        B(t) = (1-t)^3 P0 + 3(1-t)^2 t C1 + 3(1-t) t^2 C2 + t^3 P1
        """
        u = 1.0 - t
        uu = u * u
        tt = t * t
        a = uu * u
        b = 3.0 * uu * t
        c = 3.0 * u * tt
        d = tt * t
        return Point(
            a * self.start.x + b * self.control1.x + c * self.control2.x + d * self.end.x,
            a * self.start.y + b * self.control1.y + c * self.control2.y + d * self.end.y,
        )


PathSegment = LineSegment | CubicSegment
