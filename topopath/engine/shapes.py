"""Shapely interop for decoded ring sets."""

from __future__ import annotations

from shapely.geometry import MultiPolygon, Polygon

from topopath.engine.geometry import GeometryKind, PolygonRings, RingSet

# A linear ring needs at least 3 distinct positions
_MIN_RING_POINTS = 3


def _polygon(rings: PolygonRings) -> Polygon:
    if not rings or len(rings[0]) < _MIN_RING_POINTS:
        return Polygon()
    shell, *holes = rings
    return Polygon(shell, [h for h in holes if len(h) >= _MIN_RING_POINTS])


def to_shape(ring_set: RingSet, kind: GeometryKind | str) -> Polygon | MultiPolygon:
    """First ring of each polygon is the shell, the rest are holes.

    Degenerate rings are left out; the result may be empty.
    """
    kind = GeometryKind.parse(kind)
    if kind is GeometryKind.POLYGON:
        return _polygon(ring_set)
    polygons = [p for p in (_polygon(rings) for rings in ring_set) if not p.is_empty]
    return MultiPolygon(polygons)


def shape_bounds(ring_set: RingSet, kind: GeometryKind | str) -> tuple[float, float, float, float] | None:
    """(xmin, ymin, xmax, ymax), or None when nothing drawable was decoded."""
    shape = to_shape(ring_set, kind)
    if shape.is_empty:
        return None
    return tuple(float(v) for v in shape.bounds)
