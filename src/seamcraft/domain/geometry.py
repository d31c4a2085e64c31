"""Two-dimensional point/vector type.

This module defines the single value type used for every coordinate in
seamcraft: vertex positions, tangent directions, control points and the
points of computed offset polygons.
"""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or free vector) in 2D space.

    Immutable and hashable for use in sets/dicts. Supports the vector
    arithmetic needed by the curve and offset code.

    Attributes:
        x: X coordinate in drawing units
        y: Y coordinate in drawing units
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Point":
        return Point(self.x / divisor, self.y / divisor)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def dot(self, other: "Point") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        """Z component of the 3D cross product with another vector."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        """Euclidean norm of the vector."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_null(self) -> bool:
        """True for the exact zero vector (used as "unset" for tangents)."""
        return self.x == 0.0 and self.y == 0.0

    def normalized(self) -> "Point":
        """Unit vector with the same direction.

        The zero vector has no direction and is returned unchanged.
        """
        length = self.length()
        if length == 0.0:
            return Point(0.0, 0.0)
        return Point(self.x / length, self.y / length)

    def perpendicular(self) -> "Point":
        """Vector rotated 90 degrees counter-clockwise: (x, y) -> (-y, x)."""
        return Point(-self.y, self.x)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


ORIGIN = Point(0.0, 0.0)
