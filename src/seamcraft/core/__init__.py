"""Core geometry algorithms for seamcraft.

This module contains the editable contour and the seam allowance engine,
along with the pure helpers they are built on:

- Geometry operations (signed area, point-in-polygon, projections)
- Curve sampling (arc length, nearest sample, flattening)
- Polygon inflation (pyclipper)

Key classes:
- Contour: Sharp/smooth vertex outline with path, length and hit queries
- SeamAllowance: Range-based seam allowance offsets over a contour

Key functions:
- signed_area: Calculate polygon area using shoelace formula
- point_in_polygon: Test if point is inside polygon
- nearest_point_on_segment: Find closest point on line segment
- perpendicular_direction: Calculate perpendicular unit vector
- inflate_polygon: Offset a closed polygon with a corner-join style
"""

from seamcraft.core.contour import Contour
from seamcraft.core.events import ChangeNotifier
from seamcraft.core.geometry import (
    bounding_box,
    mirror_point,
    mirror_vector,
    nearest_point_on_segment,
    perpendicular_direction,
    point_in_polygon,
    rotate_point,
    rotate_vector,
    signed_area,
)
from seamcraft.core.inflate import inflate_polygon
from seamcraft.core.seam_allowance import SeamAllowance

__all__ = [
    # Events
    "ChangeNotifier",
    # Contour
    "Contour",
    # Seam allowance
    "SeamAllowance",
    # Geometry functions
    "bounding_box",
    "inflate_polygon",
    "mirror_point",
    "mirror_vector",
    "nearest_point_on_segment",
    "perpendicular_direction",
    "point_in_polygon",
    "rotate_point",
    "rotate_vector",
    "signed_area",
]
