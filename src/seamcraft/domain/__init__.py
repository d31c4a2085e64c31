"""Domain models for seamcraft.

This module contains the value types describing a pattern piece outline and
its seam allowance. All models are:

- Immutable (frozen dataclasses); edits replace values
- Serializable to plain dictionaries
- Free of any computation beyond point evaluation

Key classes:
- Point: A 2D point / vector
- Vertex: A contour vertex with type, tensions and tangent
- LineSegment / CubicSegment: The segments of a contour path
- SeamRange: An allowanced arc (or the whole contour)
"""

from seamcraft.domain.geometry import ORIGIN, Point
from seamcraft.domain.path import CubicSegment, LineSegment, PathSegment
from seamcraft.domain.seam import CornerJoin, SeamRange
from seamcraft.domain.vertex import DEFAULT_TENSION, Vertex, VertexType

__all__: list[str] = [
    # Enums
    "CornerJoin",
    "VertexType",
    # Core types
    "DEFAULT_TENSION",
    "ORIGIN",
    "CubicSegment",
    "LineSegment",
    "PathSegment",
    "Point",
    "SeamRange",
    "Vertex",
]
