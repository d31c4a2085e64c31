"""Seam allowance generation for pattern pieces.

A seam allowance holds a list of non-overlapping ranges over a contour's
circular vertex index space. Each range yields its own offset polygon:

- Full-contour range: the flattened outline is inflated by the range width
  with the configured corner join (see ``seamcraft.core.inflate``)
- Partial range: a closed ribbon built directly from the flattened arc and
  its offset, with perpendicular cuts at both ends and mitered interior
  corners

Nothing is cached; every call recomputes from the contour's current
vertices.

Key classes:
- SeamAllowance: Range bookkeeping and offset computation
"""

import weakref
from collections.abc import Callable
from typing import Any

import structlog

from seamcraft.config import OffsetConfig
from seamcraft.core.contour import Contour
from seamcraft.core.events import ChangeNotifier
from seamcraft.core.geometry import perpendicular_direction
from seamcraft.core.inflate import inflate_polygon
from seamcraft.domain import CornerJoin, Point, SeamRange
from seamcraft.exceptions import DetachedContourError, RecordError

logger = structlog.get_logger(__name__)


def _outward_normal(a: Point, b: Point, outside_sign: float) -> Point:
    """Unit normal of edge a->b pointing away from the polygon interior."""
    return perpendicular_direction(a, b) * outside_sign


class SeamAllowance:
    """Offset outlines for a contour.

    The seam allowance refers to its contour weakly: it never keeps the
    contour alive and raises ``DetachedContourError`` once the contour is
    gone.

    Attributes:
        config: Offsetting settings
    """

    def __init__(
        self,
        contour: Contour,
        corner_join: CornerJoin | None = None,
        config: OffsetConfig | None = None,
    ) -> None:
        self.config = config if config is not None else OffsetConfig()
        self._contour_ref = weakref.ref(contour)
        self._corner_join = corner_join if corner_join is not None else self.config.corner_join
        self._enabled = True
        self._ranges: list[SeamRange] = []
        self._notifier = ChangeNotifier()

    def __repr__(self) -> str:
        return (
            f"SeamAllowance(ranges={len(self._ranges)}, "
            f"corner_join={self._corner_join.value}, enabled={self._enabled})"
        )

    @property
    def contour(self) -> Contour:
        """The contour being offset.

        Raises:
            DetachedContourError: If the contour no longer exists
        """
        contour = self._contour_ref()
        if contour is None:
            raise DetachedContourError()
        return contour

    def subscribe(self, listener: Callable[["SeamAllowance"], None]) -> None:
        """Call ``listener(seam_allowance)`` after every change."""
        self._notifier.subscribe(listener)

    def unsubscribe(self, listener: Callable[["SeamAllowance"], None]) -> None:
        self._notifier.unsubscribe(listener)

    def _changed(self) -> None:
        self._notifier.notify(self)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def corner_join(self) -> CornerJoin:
        return self._corner_join

    def set_corner_join(self, corner_join: CornerJoin) -> None:
        """Set the join style used by every range."""
        if self._corner_join != corner_join:
            self._corner_join = corner_join
            self._changed()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        if self._enabled != enabled:
            self._enabled = enabled
            self._changed()

    # ------------------------------------------------------------------
    # Ranges
    # ------------------------------------------------------------------

    @property
    def ranges(self) -> tuple[SeamRange, ...]:
        return tuple(self._ranges)

    def range_count(self) -> int:
        return len(self._ranges)

    def range_at(self, index: int) -> SeamRange | None:
        if 0 <= index < len(self._ranges):
            return self._ranges[index]
        return None

    def covers_edge(self, edge_index: int) -> bool:
        """Whether any stored range covers contour edge ``edge_index``."""
        n = self.contour.vertex_count()
        return any(edge_index in r.edges(n) for r in self._ranges)

    def add_range(self, start: int, end: int, width: float) -> None:
        """Give the forward arc from ``start`` to ``end`` an allowance width.

        Coverage already held by other ranges on that arc is removed first:
        a range inside the arc is dropped, a range containing it is split in
        two, a partly overlapping range is trimmed, and a full-contour range
        becomes its complement ``(end, start)``. The new range is stored
        only if ``width > 0``, so a zero width erases the arc.

        Invalid indices and ``start == end`` leave the ranges unchanged.

        Args:
            start: First vertex of the arc
            end: Last vertex of the arc
            width: Allowance width
        """
        n = self.contour.vertex_count()
        if not (0 <= start < n and 0 <= end < n) or start == end:
            logger.debug("Seam range ignored", start=start, end=end, vertex_count=n)
            return

        new_range = SeamRange(start_vertex_index=start, end_vertex_index=end, width=width)
        covered = set(new_range.edges(n))

        reconciled: list[SeamRange] = []
        for existing in self._ranges:
            reconciled.extend(self._subtract_coverage(existing, covered, end, n))

        if width > 0:
            reconciled.append(new_range)

        logger.debug(
            "Seam range added",
            start=start,
            end=end,
            width=width,
            ranges_before=len(self._ranges),
            ranges_after=len(reconciled),
        )
        self._ranges = reconciled
        self._changed()

    @staticmethod
    def _subtract_coverage(
        existing: SeamRange, covered: set[int], resume_at: int, n: int
    ) -> list[SeamRange]:
        """What remains of ``existing`` once ``covered`` edges are taken away.

        The uncovered edges are regrouped into contiguous forward runs, each
        becoming a range. A full-contour range is walked from ``resume_at``
        so its remainder comes out as a single range.
        """
        if existing.is_full_contour:
            edges = [(resume_at + k) % n for k in range(n)]
        elif 0 <= existing.start_vertex_index < n and 0 <= existing.end_vertex_index < n:
            edges = existing.edges(n)
        else:
            return [existing]

        runs: list[list[int]] = []
        run: list[int] = []
        for edge in edges:
            if edge in covered:
                if run:
                    runs.append(run)
                    run = []
            else:
                run.append(edge)
        if run:
            runs.append(run)

        if not existing.is_full_contour and runs and len(runs[0]) == len(edges):
            return [existing]

        return [
            SeamRange(
                start_vertex_index=r[0],
                end_vertex_index=(r[-1] + 1) % n,
                width=existing.width,
            )
            for r in runs
        ]

    def add_full_contour(self, width: float | None = None) -> None:
        """Append a range offsetting the whole contour.

        Existing partial ranges are left as they are. A non-positive width
        is ignored; no width means ``config.default_width``.
        """
        if width is None:
            width = self.config.default_width
        if width <= 0:
            return
        self._ranges.append(SeamRange.full(width))
        logger.debug("Full contour seam added", width=width)
        self._changed()

    def remove_range(self, index: int) -> None:
        if 0 <= index < len(self._ranges):
            del self._ranges[index]
            self._changed()

    def clear_ranges(self) -> None:
        if self._ranges:
            self._ranges.clear()
            self._changed()

    # ------------------------------------------------------------------
    # Offset computation
    # ------------------------------------------------------------------

    def compute_all_offsets(self) -> list[list[Point]]:
        """Offset polygon of every range, in range order.

        Ranges that cannot produce geometry (too few vertices, indices no
        longer valid for the contour) are skipped.

        Returns:
            One point list per usable range; empty when disabled
        """
        if not self._enabled:
            return []

        offsets: list[list[Point]] = []
        for index, seam_range in enumerate(self._ranges):
            polygon = self.compute_range_offset(seam_range)
            if polygon:
                offsets.append(polygon)
            else:
                logger.warning("Seam range produced no geometry", range_index=index)
        return offsets

    def compute_range_offset(self, seam_range: SeamRange) -> list[Point]:
        """Offset polygon for a single range.

        Args:
            seam_range: Range to offset (need not be stored)

        Returns:
            Closed polygon as a point list (closing point not repeated)
        """
        if seam_range.width <= 0:
            return []
        if seam_range.is_full_contour:
            return self._full_contour_offset(seam_range.width)
        return self._partial_offset(seam_range)

    def _full_contour_offset(self, width: float) -> list[Point]:
        """Inflated outline of a closed contour; open contours have none."""
        contour = self.contour
        if not contour.closed or contour.vertex_count() < 3:
            return []
        rings = inflate_polygon(contour.flatten(), width, self._corner_join, self.config)
        return rings[0] if rings else []

    def _partial_offset(self, seam_range: SeamRange) -> list[Point]:
        """Ribbon between an arc and its offset.

        The offset side is built point by point. The first and last points
        move along their single edge's normal, giving square end cuts;
        interior points move along the bisector of the two edge normals by
        the miter length ``width / cos(half angle)``.
        """
        contour = self.contour
        arc = contour.flatten_arc(seam_range.start_vertex_index, seam_range.end_vertex_index)
        if len(arc) < 2:
            return []

        # Winding comes from the vertices, not the arc, so every range of a
        # contour offsets to the same side.
        outside_sign = -1.0 if contour.signed_area() > 0 else 1.0
        width = seam_range.width

        offset_points = [
            self._offset_point(arc, i, width, outside_sign) for i in range(len(arc))
        ]
        return arc + offset_points[::-1]

    def _offset_point(
        self, arc: list[Point], i: int, width: float, outside_sign: float
    ) -> Point:
        point = arc[i]
        last = len(arc) - 1

        if i == 0:
            return point + _outward_normal(arc[0], arc[1], outside_sign) * width
        if i == last:
            return point + _outward_normal(arc[last - 1], arc[last], outside_sign) * width

        normal_in = _outward_normal(arc[i - 1], point, outside_sign)
        normal_out = _outward_normal(point, arc[i + 1], outside_sign)

        # Zero-length edge on one side: offset along the other edge only
        if normal_in.is_null() or normal_out.is_null():
            normal = normal_out if normal_in.is_null() else normal_in
            return point + normal * width

        bisector = normal_in + normal_out
        if bisector.length() < self.config.bisector_epsilon:
            return point + normal_in * width
        bisector = bisector.normalized()

        cos_half = normal_in.dot(bisector)
        min_cos = self.config.min_miter_cosine
        if abs(cos_half) < min_cos:
            cos_half = min_cos if cos_half >= 0 else -min_cos

        limit = self.config.max_miter_ratio * width
        miter = max(-limit, min(limit, width / cos_half))
        return point + bisector * miter

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with corner join, enabled flag and range records
        """
        return {
            "corner_join": self._corner_join.value,
            "enabled": self._enabled,
            "ranges": [r.to_dict() for r in self._ranges],
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        contour: Contour,
        config: OffsetConfig | None = None,
    ) -> "SeamAllowance":
        """Deserialize from dictionary.

        Ranges are restored as stored, without reconciliation.

        Args:
            data: Dictionary representation of a seam allowance
            contour: Contour the allowance applies to
            config: Offsetting settings

        Returns:
            SeamAllowance instance

        Raises:
            RecordError: If the record is malformed
        """
        if not isinstance(data, dict):
            raise RecordError("seam allowance", "expected a mapping")

        try:
            corner_join = CornerJoin(data.get("corner_join", CornerJoin.ROUND.value))
        except ValueError as e:
            raise RecordError("seam allowance", str(e)) from e

        raw_ranges = data.get("ranges", [])
        if not isinstance(raw_ranges, list):
            raise RecordError("seam allowance", "'ranges' must be a list")

        seam = cls(contour, corner_join=corner_join, config=config)
        seam._enabled = bool(data.get("enabled", True))
        seam._ranges = [
            r for r in (SeamRange.from_dict(item) for item in raw_ranges) if r.width > 0
        ]
        return seam
