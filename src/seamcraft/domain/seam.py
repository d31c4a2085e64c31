"""Seam allowance range types.

This module defines the records stored by a seam allowance:
- CornerJoin: How offset corners are joined
- SeamRange: One allowanced arc of a contour (or the whole contour)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from seamcraft.exceptions import RecordError


class CornerJoin(str, Enum):
    """Corner-join style used when offsetting a polygon."""

    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


@dataclass(frozen=True, slots=True)
class SeamRange:
    """A seam allowance applied to part or all of a contour.

    A partial range covers the forward (increasing, wrapping) arc of the
    contour from ``start_vertex_index`` to ``end_vertex_index``; both
    vertices are the two ends of the allowance strip. A full-contour range
    ignores the indices and offsets the whole closed outline.

    Attributes:
        start_vertex_index: First vertex of the arc
        end_vertex_index: Last vertex of the arc
        width: Allowance width in drawing units
        is_full_contour: Whether the range covers the whole contour
    """

    start_vertex_index: int
    end_vertex_index: int
    width: float
    is_full_contour: bool = False

    @classmethod
    def full(cls, width: float) -> "SeamRange":
        """Range covering the whole contour."""
        return cls(start_vertex_index=0, end_vertex_index=0, width=width, is_full_contour=True)

    def edges(self, vertex_count: int) -> list[int]:
        """Indices of the contour edges covered, in forward order.

        Edge ``i`` joins vertex ``i`` to vertex ``i + 1``.

        Args:
            vertex_count: Number of vertices in the contour

        Returns:
            Edge indices, starting at the range's start vertex
        """
        if vertex_count <= 0:
            return []
        if self.is_full_contour:
            return list(range(vertex_count))
        span = (self.end_vertex_index - self.start_vertex_index) % vertex_count
        return [(self.start_vertex_index + k) % vertex_count for k in range(span)]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the range
        """
        return {
            "start": self.start_vertex_index,
            "end": self.end_vertex_index,
            "width": self.width,
            "full_contour": self.is_full_contour,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeamRange":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a range

        Returns:
            SeamRange instance

        Raises:
            RecordError: If required fields are missing or invalid
        """
        if not isinstance(data, dict):
            raise RecordError("seam range", "expected a mapping")
        try:
            return cls(
                start_vertex_index=int(data.get("start", 0)),
                end_vertex_index=int(data.get("end", 0)),
                width=float(data["width"]),
                is_full_contour=bool(data.get("full_contour", False)),
            )
        except KeyError as e:
            raise RecordError("seam range", f"missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise RecordError("seam range", str(e)) from e
