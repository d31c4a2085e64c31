"""Contour vertex types.

This module defines the vertices that make up a contour:
- VertexType: Enum tagging a vertex as a corner or a tangent-continuous point
- Vertex: Position plus curve metadata (tensions and tangent)
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from seamcraft.domain.geometry import ORIGIN, Point
from seamcraft.exceptions import ContourError, RecordError

DEFAULT_TENSION = 0.5


class VertexType(str, Enum):
    """Vertex type on a contour.

    - SHARP: A corner; joins to another sharp vertex are straight lines
    - SMOOTH: A tangent-continuous point; adjacent segments are cubic curves
    """

    SHARP = "sharp"
    SMOOTH = "smooth"


@dataclass(frozen=True, slots=True)
class Vertex:
    """A contour vertex with position and curve metadata.

    Vertices are immutable; edits replace the vertex in the contour.

    Attributes:
        position: Location of the vertex
        vertex_type: Sharp corner or smooth point
        incoming_tension: Pull of the control point on the curve arriving here
        outgoing_tension: Pull of the control point on the curve leaving here
        tangent: Outgoing tangent direction; the zero vector means "derive
            from the neighbouring vertices". Only used by smooth vertices.
    """

    position: Point
    vertex_type: VertexType = VertexType.SHARP
    incoming_tension: float = DEFAULT_TENSION
    outgoing_tension: float = DEFAULT_TENSION
    tangent: Point = field(default=ORIGIN)

    def __post_init__(self) -> None:
        if self.incoming_tension <= 0.0 or self.outgoing_tension <= 0.0:
            raise ContourError(
                f"Vertex tensions must be positive, got "
                f"{self.incoming_tension} / {self.outgoing_tension}"
            )

    @property
    def is_smooth(self) -> bool:
        return self.vertex_type == VertexType.SMOOTH

    @property
    def has_tangent(self) -> bool:
        """True when an explicit tangent direction is set."""
        return not self.tangent.is_null()

    def with_position(self, position: Point) -> "Vertex":
        """Copy of this vertex moved to a new position."""
        return replace(self, position=position)

    def with_type(self, vertex_type: VertexType) -> "Vertex":
        """Copy of this vertex with a different type."""
        return replace(self, vertex_type=vertex_type)

    @classmethod
    def from_drag(cls, press: Point, release: Point) -> "Vertex":
        """Build a smooth vertex from a press-and-drag gesture.

        The vertex sits at the press point. The drag direction becomes the
        tangent and the drag distance sets both tensions: a short drag gives
        a subtle curve, a long drag a pronounced one.

        Args:
            press: Where the pointer went down
            release: Where the pointer was released

        Returns:
            Smooth vertex at the press point
        """
        drag = release - press
        distance = drag.length()
        tension = min(max(distance / 100.0, 0.1), 1.0)
        tangent = drag / distance if distance > 0.01 else ORIGIN
        return cls(
            position=press,
            vertex_type=VertexType.SMOOTH,
            incoming_tension=tension,
            outgoing_tension=tension,
            tangent=tangent,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with position, type, tensions and tangent fields
        """
        return {
            "x": self.position.x,
            "y": self.position.y,
            "type": self.vertex_type.value,
            "incoming_tension": self.incoming_tension,
            "outgoing_tension": self.outgoing_tension,
            "tangent_x": self.tangent.x,
            "tangent_y": self.tangent.y,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vertex":
        """Deserialize from dictionary.

        Records holding a single ``tension`` value apply it to both sides.

        Args:
            data: Dictionary representation of a vertex

        Returns:
            Vertex instance

        Raises:
            RecordError: If required fields are missing or invalid
        """
        if not isinstance(data, dict):
            raise RecordError("vertex", "expected a mapping")
        try:
            legacy_tension = float(data.get("tension", DEFAULT_TENSION))
            return cls(
                position=Point(float(data["x"]), float(data["y"])),
                vertex_type=VertexType(data.get("type", VertexType.SHARP.value)),
                incoming_tension=float(data.get("incoming_tension", legacy_tension)),
                outgoing_tension=float(data.get("outgoing_tension", legacy_tension)),
                tangent=Point(
                    float(data.get("tangent_x", 0.0)),
                    float(data.get("tangent_y", 0.0)),
                ),
            )
        except KeyError as e:
            raise RecordError("vertex", f"missing field {e}") from e
        except (TypeError, ValueError, ContourError) as e:
            raise RecordError("vertex", str(e)) from e
