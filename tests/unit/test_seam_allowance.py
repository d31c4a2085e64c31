"""Unit tests for the SeamAllowance class.

Tests cover:
- Range reconciliation (split, trim, drop, erase, full-contour complement)
- Partial-range ribbons: square end cuts, miters and their limits
- Full-contour offsets for each corner join
- Lazy recomputation after contour edits
- Weak reference to the contour
"""

import gc
import math

import pytest

from seamcraft.config import OffsetConfig
from seamcraft.core import Contour, SeamAllowance
from seamcraft.core.geometry import nearest_point_on_segment
from seamcraft.domain import CornerJoin, Point, SeamRange, Vertex, VertexType
from seamcraft.exceptions import DetachedContourError, RecordError


def polygon_contour(*coords):
    return Contour([Vertex(Point(float(x), float(y))) for x, y in coords])


def rectangle():
    """Counter-clockwise 100 x 50 rectangle with sharp corners."""
    return polygon_contour((0, 0), (100, 0), (100, 50), (0, 50))


def octagon(radius=100.0):
    return Contour(
        [
            Vertex(Point(radius * math.cos(math.pi * k / 4), radius * math.sin(math.pi * k / 4)))
            for k in range(8)
        ]
    )


def spans(seam):
    return [(r.start_vertex_index, r.end_vertex_index, r.width) for r in seam.ranges]


def rounded(points, digits=6):
    return {(round(p.x, digits) + 0.0, round(p.y, digits) + 0.0) for p in points}


def assert_points(actual, expected):
    assert len(actual) == len(expected)
    for point, (x, y) in zip(actual, expected):
        assert point.x == pytest.approx(x, abs=1e-9)
        assert point.y == pytest.approx(y, abs=1e-9)


class TestRangeReconciliation:
    """Tests for add_range overlap handling."""

    def test_full_contour_becomes_complement(self):
        """Adding a range over a full-contour range leaves its complement."""
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_full_contour(5.0)
        seam.add_range(2, 5, 10.0)

        assert spans(seam) == [(5, 2, 5.0), (2, 5, 10.0)]
        assert not any(r.is_full_contour for r in seam.ranges)

        offsets = seam.compute_all_offsets()
        assert len(offsets) == 2
        complement, added = offsets
        assert complement[0].distance_to(complement[-1]) == pytest.approx(5.0)
        assert added[0].distance_to(added[-1]) == pytest.approx(10.0)

    def test_range_inside_existing_splits_it(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(0, 6, 4.0)
        seam.add_range(2, 3, 8.0)
        assert spans(seam) == [(0, 2, 4.0), (3, 6, 4.0), (2, 3, 8.0)]

    def test_range_containing_existing_drops_it(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(2, 3, 4.0)
        seam.add_range(1, 5, 6.0)
        assert spans(seam) == [(1, 5, 6.0)]

    def test_partial_overlap_trims_end(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(0, 4, 4.0)
        seam.add_range(2, 6, 8.0)
        assert spans(seam) == [(0, 2, 4.0), (2, 6, 8.0)]

    def test_partial_overlap_trims_start(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(4, 7, 4.0)
        seam.add_range(2, 5, 8.0)
        assert spans(seam) == [(5, 7, 4.0), (2, 5, 8.0)]

    def test_wrapping_range_split(self):
        """Ranges crossing vertex 0 reconcile like any other."""
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(6, 2, 3.0)
        seam.add_range(0, 1, 5.0)
        assert spans(seam) == [(6, 0, 3.0), (1, 2, 3.0), (0, 1, 5.0)]

    def test_zero_width_erases(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(0, 4, 4.0)
        seam.add_range(1, 3, 0.0)
        assert spans(seam) == [(0, 1, 4.0), (3, 4, 4.0)]

    def test_disjoint_ranges_unchanged(self):
        """Ranges sharing only an endpoint vertex do not overlap."""
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(0, 2, 4.0)
        seam.add_range(4, 6, 5.0)
        seam.add_range(2, 4, 6.0)
        assert spans(seam) == [(0, 2, 4.0), (4, 6, 5.0), (2, 4, 6.0)]

    def test_reapplying_range_replaces_width(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(1, 4, 4.0)
        seam.add_range(1, 4, 9.0)
        assert spans(seam) == [(1, 4, 9.0)]

    def test_invalid_ranges_ignored(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        calls = []
        seam.subscribe(calls.append)
        seam.add_range(3, 3, 5.0)
        seam.add_range(0, 8, 5.0)
        seam.add_range(-1, 2, 5.0)
        assert seam.range_count() == 0
        assert calls == []

    def test_full_contour_not_reconciled(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(0, 2, 4.0)
        seam.add_full_contour(6.0)
        assert seam.range_count() == 2
        assert seam.range_at(1).is_full_contour

    def test_full_contour_default_width(self):
        contour = octagon()
        seam = SeamAllowance(contour, config=OffsetConfig(default_width=7.5))
        seam.add_full_contour()
        assert seam.range_at(0) == SeamRange.full(7.5)

    def test_full_contour_non_positive_width_ignored(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_full_contour(0.0)
        assert seam.range_count() == 0

    def test_covers_edge(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(6, 1, 3.0)
        assert seam.covers_edge(7)
        assert seam.covers_edge(0)
        assert not seam.covers_edge(1)


class TestRangeManagement:
    """Tests for range storage and settings."""

    def test_defaults(self):
        contour = rectangle()
        seam = SeamAllowance(contour)
        assert seam.enabled
        assert seam.corner_join == CornerJoin.ROUND
        assert seam.ranges == ()
        assert seam.range_at(0) is None

    def test_remove_and_clear(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_range(0, 2, 4.0)
        seam.add_range(4, 6, 4.0)
        seam.remove_range(0)
        assert spans(seam) == [(4, 6, 4.0)]
        seam.clear_ranges()
        assert seam.range_count() == 0

    def test_listener_notified_once_per_change(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        calls = []
        seam.subscribe(calls.append)
        seam.add_range(0, 2, 4.0)
        seam.set_corner_join(CornerJoin.MITER)
        seam.set_corner_join(CornerJoin.MITER)
        seam.set_enabled(False)
        seam.set_enabled(False)
        assert calls == [seam, seam, seam]

    def test_disabled_produces_no_offsets(self):
        contour = rectangle()
        seam = SeamAllowance(contour)
        seam.add_full_contour(10.0)
        seam.set_enabled(False)
        assert seam.compute_all_offsets() == []


class TestPartialOffsets:
    """Tests for offsets of partial ranges."""

    def test_ribbon_geometry(self):
        """End cuts are square; interior corners are mitered."""
        contour = rectangle()
        seam = SeamAllowance(contour)
        seam.add_range(0, 2, 10.0)
        (polygon,) = seam.compute_all_offsets()
        assert_points(
            polygon,
            [(0, 0), (100, 0), (100, 50), (110, 50), (110, -10), (0, -10)],
        )

    def test_clockwise_contour_offsets_outward(self):
        contour = polygon_contour((0, 0), (0, 50), (100, 50), (100, 0))
        seam = SeamAllowance(contour)
        seam.add_range(3, 0, 10.0)
        (polygon,) = seam.compute_all_offsets()
        assert_points(polygon, [(100, 0), (0, 0), (0, -10), (100, -10)])

    def test_collinear_point_offsets_perpendicular(self):
        contour = polygon_contour((0, 0), (50, 0), (100, 0), (100, 50), (0, 50))
        seam = SeamAllowance(contour)
        seam.add_range(0, 2, 10.0)
        (polygon,) = seam.compute_all_offsets()
        assert_points(polygon, [(0, 0), (50, 0), (100, 0), (100, -10), (50, -10), (0, -10)])

    def test_sharp_spike_miter_is_limited(self):
        """Miters never exceed five times the width."""
        contour = polygon_contour((0, 0), (100, 0), (0, 5))
        seam = SeamAllowance(contour)
        seam.add_range(0, 2, 10.0)
        (polygon,) = seam.compute_all_offsets()
        assert len(polygon) == 6
        assert polygon[4].distance_to(Point(100.0, 0.0)) == pytest.approx(50.0)

    def test_zero_length_edge_uses_neighbour_normal(self):
        contour = polygon_contour((0, 0), (100, 0), (100, 0), (100, 50), (0, 50))
        seam = SeamAllowance(contour)
        seam.add_range(0, 3, 10.0)
        (polygon,) = seam.compute_all_offsets()
        offsets = polygon[4:][::-1]
        assert_points(offsets, [(0, -10), (100, -10), (110, 0), (110, 50)])

    def test_curved_range_is_flattened(self):
        contour = rectangle()
        contour.set_vertex_type(1, VertexType.SMOOTH)
        seam = SeamAllowance(contour)
        seam.add_range(0, 2, 5.0)
        (polygon,) = seam.compute_all_offsets()
        assert len(polygon) == 2 * (3 + 2 * 19)
        assert polygon[0].distance_to(polygon[-1]) == pytest.approx(5.0)
        assert polygon[40].distance_to(polygon[41]) == pytest.approx(5.0)

    def test_stale_range_skipped(self):
        """Ranges left invalid by vertex removal produce nothing."""
        contour = polygon_contour((0, 0), (50, 0), (100, 0), (100, 50), (50, 50), (0, 50))
        seam = SeamAllowance(contour)
        seam.add_range(4, 5, 5.0)
        contour.remove_vertex(5)
        contour.remove_vertex(4)
        assert seam.range_count() == 1
        assert seam.compute_all_offsets() == []

    def test_compute_unstored_range(self):
        contour = rectangle()
        seam = SeamAllowance(contour)
        polygon = seam.compute_range_offset(SeamRange(1, 2, 4.0))
        assert_points(polygon, [(100, 0), (100, 50), (104, 50), (104, 0)])
        assert seam.compute_range_offset(SeamRange(1, 2, 0.0)) == []


class TestFullContourOffsets:
    """Tests for offsets of full-contour ranges."""

    def test_rectangle_miter(self):
        contour = rectangle()
        seam = SeamAllowance(contour, corner_join=CornerJoin.MITER)
        seam.add_full_contour(10.0)
        (polygon,) = seam.compute_all_offsets()
        assert rounded(polygon) == {(-10.0, -10.0), (110.0, -10.0), (110.0, 60.0), (-10.0, 60.0)}

    def test_rectangle_round_adds_arc_points(self):
        contour = rectangle()
        seam = SeamAllowance(contour, corner_join=CornerJoin.ROUND)
        seam.add_full_contour(10.0)
        (polygon,) = seam.compute_all_offsets()
        assert len(polygon) > 4

    def test_rectangle_bevel_cuts_corners(self):
        contour = rectangle()
        seam = SeamAllowance(contour, corner_join=CornerJoin.BEVEL)
        seam.add_full_contour(10.0)
        (polygon,) = seam.compute_all_offsets()
        assert len(polygon) > 4
        assert (-10.0, -10.0) not in rounded(polygon)

    def test_round_offset_keeps_distance(self):
        """Every offset point lies at the allowance width from the outline."""
        contour = octagon()
        seam = SeamAllowance(contour, corner_join=CornerJoin.ROUND)
        seam.add_full_contour(10.0)
        (polygon,) = seam.compute_all_offsets()
        outline = contour.flatten()
        for point in polygon:
            distance = min(
                nearest_point_on_segment(point, outline[i], outline[(i + 1) % len(outline)])[1]
                for i in range(len(outline))
            )
            assert distance == pytest.approx(10.0, abs=0.3)

    def test_offsets_follow_contour_edits(self):
        contour = rectangle()
        seam = SeamAllowance(contour, corner_join=CornerJoin.MITER)
        seam.add_full_contour(10.0)
        contour.translate(Point(5.0, 5.0))
        (polygon,) = seam.compute_all_offsets()
        assert rounded(polygon) == {(-5.0, -5.0), (115.0, -5.0), (115.0, 65.0), (-5.0, 65.0)}

    def test_open_contour_has_no_full_offset(self):
        contour = rectangle()
        contour.set_closed(False)
        seam = SeamAllowance(contour, corner_join=CornerJoin.MITER)
        seam.add_full_contour(10.0)
        assert seam.compute_all_offsets() == []

        contour.set_closed(True)
        assert len(seam.compute_all_offsets()) == 1

    def test_repeated_computation_is_stable(self):
        contour = octagon()
        seam = SeamAllowance(contour)
        seam.add_full_contour(5.0)
        seam.add_range(2, 5, 10.0)
        assert seam.compute_all_offsets() == seam.compute_all_offsets()

    def test_too_few_vertices(self):
        contour = polygon_contour((0, 0), (10, 0))
        seam = SeamAllowance(contour)
        seam.add_full_contour(5.0)
        assert seam.compute_all_offsets() == []


class TestContourReference:
    """Tests for the weak contour reference."""

    def test_detached_contour_raises(self):
        contour = rectangle()
        seam = SeamAllowance(contour)
        seam.add_full_contour(10.0)
        del contour
        gc.collect()
        with pytest.raises(DetachedContourError):
            seam.compute_all_offsets()
        with pytest.raises(DetachedContourError):
            _ = seam.contour

    def test_contour_available_while_referenced(self):
        contour = rectangle()
        seam = SeamAllowance(contour)
        assert seam.contour is contour


class TestSerialization:
    """Tests for seam allowance records."""

    def test_round_trip(self):
        contour = octagon()
        seam = SeamAllowance(contour, corner_join=CornerJoin.BEVEL)
        seam.add_full_contour(5.0)
        seam.add_range(2, 5, 10.0)
        seam.set_enabled(False)

        restored = SeamAllowance.from_dict(seam.to_dict(), contour)
        assert restored.ranges == seam.ranges
        assert restored.corner_join == CornerJoin.BEVEL
        assert not restored.enabled

    def test_non_positive_widths_dropped(self):
        data = {
            "corner_join": "round",
            "ranges": [
                {"start": 0, "end": 2, "width": 0.0},
                {"start": 2, "end": 4, "width": 3.0},
            ],
        }
        seam = SeamAllowance.from_dict(data, octagon())
        assert spans(seam) == [(2, 4, 3.0)]

    def test_invalid_corner_join(self):
        with pytest.raises(RecordError):
            SeamAllowance.from_dict({"corner_join": "zigzag"}, octagon())
