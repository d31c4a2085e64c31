"""Editable contour with sharp and smooth vertices.

A contour is an ordered, optionally closed sequence of vertices. Segment
``i`` joins vertex ``i`` to vertex ``(i + 1) mod n``; an open contour has no
segment from the last vertex back to the first.

A segment is straight when both of its vertices are sharp and a cubic
Bezier curve otherwise. All curve-related queries (path construction,
lengths, hit testing, flattening) go through ``Contour._segment`` so that
they agree on the control points.

Key classes:
- Contour: Vertex storage, mutators, transforms and geometric queries
"""

from collections.abc import Callable
from typing import Any

import structlog

from seamcraft.config import GeometryConfig
from seamcraft.core._bezier import cubic_length, interior_samples, nearest_sample
from seamcraft.core.events import ChangeNotifier
from seamcraft.core.geometry import (
    bounding_box,
    mirror_point,
    mirror_vector,
    nearest_point_on_segment,
    point_in_polygon,
    rotate_point,
    rotate_vector,
    signed_area,
)
from seamcraft.domain import (
    ORIGIN,
    CubicSegment,
    LineSegment,
    PathSegment,
    Point,
    Vertex,
    VertexType,
)
from seamcraft.exceptions import RecordError

logger = structlog.get_logger(__name__)

MIN_CLOSED_VERTICES = 3


class Contour:
    """A pattern piece outline made of sharp and smooth vertices.

    Every mutator that changes the contour notifies subscribers afterwards.
    Operations given an out-of-range index leave the contour unchanged and
    do not notify.

    Attributes:
        config: Sampling and hit-testing settings
    """

    def __init__(
        self,
        vertices: list[Vertex] | None = None,
        closed: bool = True,
        config: GeometryConfig | None = None,
    ) -> None:
        self._vertices: list[Vertex] = list(vertices) if vertices else []
        self._closed = closed
        self.config = config if config is not None else GeometryConfig()
        self._notifier = ChangeNotifier()

    def __repr__(self) -> str:
        return f"Contour(vertices={len(self._vertices)}, closed={self._closed})"

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[["Contour"], None]) -> None:
        """Call ``listener(contour)`` after every change."""
        self._notifier.subscribe(listener)

    def unsubscribe(self, listener: Callable[["Contour"], None]) -> None:
        self._notifier.unsubscribe(listener)

    def _changed(self) -> None:
        self._notifier.notify(self)

    # ------------------------------------------------------------------
    # Vertices
    # ------------------------------------------------------------------

    @property
    def vertices(self) -> list[Vertex]:
        """Copy of the vertex list in drawing order."""
        return list(self._vertices)

    @property
    def closed(self) -> bool:
        return self._closed

    def vertex_count(self) -> int:
        return len(self._vertices)

    def vertex_at(self, index: int) -> Vertex | None:
        """Vertex at ``index``, or None when the index is out of range."""
        if 0 <= index < len(self._vertices):
            return self._vertices[index]
        return None

    def set_vertices(self, vertices: list[Vertex]) -> None:
        """Replace all vertices."""
        self._vertices = list(vertices)
        self._changed()

    def add_vertex(self, vertex: Vertex) -> None:
        """Append a vertex after the current last vertex."""
        self._vertices.append(vertex)
        self._changed()

    def insert_vertex(self, index: int, vertex: Vertex) -> None:
        """Insert a vertex before position ``index`` (0 <= index <= count)."""
        if 0 <= index <= len(self._vertices):
            self._vertices.insert(index, vertex)
            self._changed()

    def remove_vertex(self, index: int) -> None:
        """Remove a vertex, keeping at least three.

        Removal from a contour with three or fewer vertices is rejected.
        """
        if not 0 <= index < len(self._vertices):
            return
        if len(self._vertices) <= MIN_CLOSED_VERTICES:
            logger.debug(
                "Vertex removal rejected",
                index=index,
                vertex_count=len(self._vertices),
            )
            return
        del self._vertices[index]
        self._changed()

    def update_vertex(self, index: int, position: Point) -> None:
        """Move a vertex to a new position."""
        if 0 <= index < len(self._vertices):
            self._vertices[index] = self._vertices[index].with_position(position)
            self._changed()

    def set_vertex_type(self, index: int, vertex_type: VertexType) -> None:
        if 0 <= index < len(self._vertices):
            self._vertices[index] = self._vertices[index].with_type(vertex_type)
            self._changed()

    def toggle_vertex_type(self, index: int) -> None:
        """Switch a vertex between sharp and smooth."""
        vertex = self.vertex_at(index)
        if vertex is None:
            return
        new_type = VertexType.SHARP if vertex.is_smooth else VertexType.SMOOTH
        self.set_vertex_type(index, new_type)

    def set_vertex_handle(
        self,
        index: int,
        tangent: Point,
        incoming_tension: float | None = None,
        outgoing_tension: float | None = None,
    ) -> None:
        """Set the tangent (and optionally the tensions) of a vertex.

        This is what dragging a curve handle does. A zero tangent switches
        the vertex back to a tangent derived from its neighbours.

        Raises:
            ContourError: If a tension is not positive
        """
        vertex = self.vertex_at(index)
        if vertex is None:
            return
        self._vertices[index] = Vertex(
            position=vertex.position,
            vertex_type=vertex.vertex_type,
            incoming_tension=(
                incoming_tension if incoming_tension is not None else vertex.incoming_tension
            ),
            outgoing_tension=(
                outgoing_tension if outgoing_tension is not None else vertex.outgoing_tension
            ),
            tangent=tangent,
        )
        self._changed()

    def insert_vertex_on_contour(self, point: Point) -> int:
        """Split the segment closest to ``point`` with a new sharp vertex.

        The new vertex is placed at the closest point on the contour.

        Args:
            point: Location picked by the user

        Returns:
            Index of the inserted vertex, or -1 if the contour has no segments
        """
        segment_index, closest = self.find_closest_segment(point)
        if segment_index < 0 or closest is None:
            return -1
        new_index = segment_index + 1
        self.insert_vertex(
            new_index,
            Vertex(
                position=closest,
                incoming_tension=self.config.default_tension,
                outgoing_tension=self.config.default_tension,
            ),
        )
        return new_index

    def clear(self) -> None:
        self._vertices.clear()
        self._changed()

    def set_closed(self, closed: bool) -> None:
        if self._closed != closed:
            self._closed = closed
            self._changed()

    # ------------------------------------------------------------------
    # Whole-contour transforms
    # ------------------------------------------------------------------

    def _transform(
        self,
        position_fn: Callable[[Point], Point],
        tangent_fn: Callable[[Point], Point],
    ) -> None:
        transformed = []
        for vertex in self._vertices:
            tangent = tangent_fn(vertex.tangent) if vertex.has_tangent else vertex.tangent
            transformed.append(
                Vertex(
                    position=position_fn(vertex.position),
                    vertex_type=vertex.vertex_type,
                    incoming_tension=vertex.incoming_tension,
                    outgoing_tension=vertex.outgoing_tension,
                    tangent=tangent,
                )
            )
        self._vertices = transformed
        self._changed()

    def translate(self, delta: Point) -> None:
        """Move every vertex by ``delta``; tangents are unaffected."""
        self._transform(lambda p: p + delta, lambda t: t)

    def rotate(self, angle_degrees: float, center: Point = ORIGIN) -> None:
        """Rotate positions around ``center`` and tangents by the same angle."""
        self._transform(
            lambda p: rotate_point(p, angle_degrees, center),
            lambda t: rotate_vector(t, angle_degrees),
        )

    def mirror(self, axis_start: Point, axis_end: Point) -> None:
        """Reflect the contour across the line through two points."""
        if axis_start.distance_to(axis_end) < 1e-10:
            return
        self._transform(
            lambda p: mirror_point(p, axis_start, axis_end),
            lambda t: mirror_vector(t, axis_start, axis_end),
        )

    def scale(self, scale_x: float, scale_y: float, origin: Point = ORIGIN) -> None:
        """Scale positions about ``origin``.

        Tangents take the scaled direction but keep their magnitude, since
        control point distances already follow the segment length.
        """

        def scale_tangent(tangent: Point) -> Point:
            scaled = Point(tangent.x * scale_x, tangent.y * scale_y)
            return scaled.normalized() * tangent.length()

        self._transform(
            lambda p: Point(
                origin.x + (p.x - origin.x) * scale_x,
                origin.y + (p.y - origin.y) * scale_y,
            ),
            scale_tangent,
        )

    # ------------------------------------------------------------------
    # Path construction
    # ------------------------------------------------------------------

    def segment_count(self) -> int:
        """Number of segments: n when closed, n - 1 when open."""
        n = len(self._vertices)
        if n < 2:
            return 0
        return n if self._closed else n - 1

    def is_segment_curved(self, index: int) -> bool:
        """True when the segment touches at least one smooth vertex."""
        if not 0 <= index < self.segment_count():
            return False
        n = len(self._vertices)
        return self._vertices[index].is_smooth or self._vertices[(index + 1) % n].is_smooth

    def _segment(self, vertices: list[Vertex], index: int) -> PathSegment:
        """Build segment ``index`` from a vertex list.

        Control points of a curved segment:
        - Smooth vertex with a tangent: along the tangent, scaled by a third
          of the chord length and the vertex tension
        - Smooth vertex without a tangent: Catmull-Rom direction from the
          neighbours (the vertex itself at an open end)
        - Sharp vertex: 1% of the way along the chord, which keeps the join
          a visible corner
        """
        n = len(vertices)
        next_index = (index + 1) % n
        current = vertices[index]
        following = vertices[next_index]
        p1 = current.position
        p2 = following.position

        if not current.is_smooth and not following.is_smooth:
            return LineSegment(index=index, start=p1, end=p2)

        control_distance = p1.distance_to(p2) / 3.0
        handle_ratio = self.config.sharp_handle_ratio

        if current.is_smooth and current.has_tangent:
            c1 = p1 + current.tangent * (control_distance * current.outgoing_tension)
        elif current.is_smooth:
            p0 = vertices[(index - 1) % n].position
            if not self._closed and index == 0:
                p0 = p1
            c1 = p1 + (p2 - p0) * (current.outgoing_tension / 3.0)
        else:
            c1 = p1 + (p2 - p1) * handle_ratio

        if following.is_smooth and following.has_tangent:
            c2 = p2 - following.tangent * (control_distance * following.incoming_tension)
        elif following.is_smooth:
            p3 = vertices[(index + 2) % n].position
            if not self._closed and next_index == n - 1:
                p3 = p2
            c2 = p2 - (p3 - p1) * (following.incoming_tension / 3.0)
        else:
            c2 = p2 - (p2 - p1) * handle_ratio

        return CubicSegment(index=index, start=p1, control1=c1, control2=c2, end=p2)

    def build_path(self) -> list[PathSegment]:
        """Geometric path of the contour, one segment per vertex pair.

        Returns:
            Line and cubic segments in drawing order
        """
        return [self._segment(self._vertices, i) for i in range(self.segment_count())]

    def segment_at(self, index: int) -> PathSegment | None:
        if not 0 <= index < self.segment_count():
            return None
        return self._segment(self._vertices, index)

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def segment_length(
        self,
        index: int,
        override_index: int | None = None,
        override_position: Point | None = None,
    ) -> float:
        """Arc length of one segment.

        Straight segments are measured exactly; curved segments are sampled
        at ``config.curve_samples`` parameter steps.

        The optional override evaluates the length as if vertex
        ``override_index`` sat at ``override_position``, without changing
        the contour (used to preview or lock lengths while dragging).

        Args:
            index: Segment index
            override_index: Vertex to move hypothetically
            override_position: Hypothetical position of that vertex

        Returns:
            Segment length, or 0.0 for an index with no segment
        """
        if not 0 <= index < self.segment_count():
            return 0.0

        vertices = self._vertices
        if (
            override_index is not None
            and override_position is not None
            and 0 <= override_index < len(vertices)
        ):
            vertices = list(vertices)
            vertices[override_index] = vertices[override_index].with_position(override_position)

        segment = self._segment(vertices, index)
        if isinstance(segment, LineSegment):
            return segment.start.distance_to(segment.end)
        return cubic_length(segment, self.config.curve_samples)

    def total_length(self) -> float:
        """Sum of all segment lengths."""
        return sum(self.segment_length(i) for i in range(self.segment_count()))

    def signed_area(self) -> float:
        """Shoelace area over the vertex positions (sign gives winding)."""
        return signed_area([v.position for v in self._vertices])

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Bounding box of the vertex positions as (min_x, min_y, max_x, max_y)."""
        return bounding_box([v.position for v in self._vertices])

    # ------------------------------------------------------------------
    # Hit testing
    # ------------------------------------------------------------------

    def find_vertex_at(self, point: Point, tolerance: float | None = None) -> int:
        """Index of the first vertex within ``tolerance`` of ``point``, or -1."""
        if tolerance is None:
            tolerance = self.config.hit_tolerance
        for i, vertex in enumerate(self._vertices):
            if vertex.position.distance_to(point) <= tolerance:
                return i
        return -1

    def find_closest_segment(self, point: Point) -> tuple[int, Point | None]:
        """Find the segment passing closest to a point.

        Straight segments use an exact clamped projection. Curved segments
        are sampled at ``config.curve_samples + 1`` points and the nearest
        sample is taken. Zero-length straight segments are skipped.

        Args:
            point: Query point

        Returns:
            Tuple of (segment_index, closest_point); (-1, None) when the
            contour has no usable segment
        """
        best_index = -1
        best_point: Point | None = None
        best_distance = float("inf")
        steps = self.config.curve_samples

        for segment in self.build_path():
            if isinstance(segment, LineSegment):
                chord = segment.end - segment.start
                if chord.dot(chord) < self.config.degenerate_epsilon:
                    continue
                candidate, distance, _ = nearest_point_on_segment(
                    point, segment.start, segment.end
                )
            else:
                candidate, distance = nearest_sample(segment, point, steps)

            if distance < best_distance:
                best_distance = distance
                best_index = segment.index
                best_point = candidate

        return best_index, best_point

    def contains_point(self, point: Point) -> bool:
        """Whether a point lies inside the closed, flattened outline."""
        if not self._closed:
            return False
        return point_in_polygon(point, self.flatten())

    # ------------------------------------------------------------------
    # Flattening
    # ------------------------------------------------------------------

    def _append_segment_points(self, points: list[Point], index: int) -> None:
        points.append(self._vertices[index].position)
        if index < self.segment_count():
            segment = self._segment(self._vertices, index)
            if isinstance(segment, CubicSegment):
                points.extend(interior_samples(segment, self.config.curve_samples))

    def flatten(self) -> list[Point]:
        """Polygon approximation of the whole contour.

        Every vertex position, with the interior samples of each curved
        segment inserted after its start vertex.
        """
        points: list[Point] = []
        for i in range(len(self._vertices)):
            self._append_segment_points(points, i)
        return points

    def flatten_arc(self, start: int, end: int) -> list[Point]:
        """Polyline approximation of the forward arc from ``start`` to ``end``.

        The arc wraps past the last vertex. For an open contour the missing
        closing segment is treated as straight.

        Args:
            start: First vertex index
            end: Last vertex index

        Returns:
            Points from the start vertex to the end vertex inclusive; empty
            for invalid indices or a zero-length arc
        """
        n = len(self._vertices)
        if not (0 <= start < n and 0 <= end < n) or start == end:
            return []

        points: list[Point] = []
        span = (end - start) % n
        for k in range(span):
            self._append_segment_points(points, (start + k) % n)
        points.append(self._vertices[end].position)
        return points

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with the closed flag and vertex records
        """
        return {
            "closed": self._closed,
            "vertices": [v.to_dict() for v in self._vertices],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], config: GeometryConfig | None = None) -> "Contour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour
            config: Geometry settings for the new contour

        Returns:
            Contour instance

        Raises:
            RecordError: If the record is malformed
        """
        if not isinstance(data, dict):
            raise RecordError("contour", "expected a mapping")
        raw_vertices = data.get("vertices")
        if not isinstance(raw_vertices, list):
            raise RecordError("contour", "'vertices' must be a list")
        vertices = [Vertex.from_dict(v) for v in raw_vertices]
        return cls(vertices=vertices, closed=bool(data.get("closed", True)), config=config)
