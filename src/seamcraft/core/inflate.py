"""Polygon inflation backed by pyclipper.

Given a closed polygon, a signed distance and a corner-join style, returns
the inflated ring(s). Clipper works on integer coordinates, so points are
scaled by ``OffsetConfig.clipper_scale`` and rounded before offsetting.
"""

import pyclipper
import structlog

from seamcraft.config import OffsetConfig
from seamcraft.domain import CornerJoin, Point

logger = structlog.get_logger(__name__)

# Clipper has no bevel join; its square join is the closest equivalent.
_JOIN_TYPES = {
    CornerJoin.MITER: pyclipper.JT_MITER,
    CornerJoin.ROUND: pyclipper.JT_ROUND,
    CornerJoin.BEVEL: pyclipper.JT_SQUARE,
}


def _to_clipper(points: list[Point], scale: float) -> list[tuple[int, int]]:
    return [(int(round(p.x * scale)), int(round(p.y * scale))) for p in points]


def _from_clipper(path: list[list[int]], scale: float) -> list[Point]:
    return [Point(x / scale, y / scale) for x, y in path]


def inflate_polygon(
    points: list[Point],
    distance: float,
    join: CornerJoin,
    config: OffsetConfig | None = None,
) -> list[list[Point]]:
    """Offset a closed polygon by a signed distance.

    Positive distances grow the polygon whatever its winding; negative
    distances shrink it.

    Args:
        points: Polygon vertices (closing point not repeated)
        distance: Offset distance in drawing units
        join: Corner-join style
        config: Offset settings (scale, miter limit, arc tolerance)

    Returns:
        Resulting rings; empty for fewer than three points or when the
        polygon vanishes
    """
    if len(points) < 3:
        return []
    if config is None:
        config = OffsetConfig()

    scale = config.clipper_scale
    offsetter = pyclipper.PyclipperOffset(
        config.clipper_miter_limit, config.clipper_arc_tolerance * scale
    )
    offsetter.AddPath(_to_clipper(points, scale), _JOIN_TYPES[join], pyclipper.ET_CLOSEDPOLYGON)
    solution = offsetter.Execute(distance * scale)

    logger.debug(
        "Polygon inflated",
        input_points=len(points),
        distance=distance,
        join=join.value,
        rings=len(solution),
    )
    return [_from_clipper(ring, scale) for ring in solution]
