"""Geometry decoding: Polygon / MultiPolygon records -> ring sets."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from typing import Any, Union

import numpy as np
from numpy.typing import NDArray

from topopath.engine.arcs import ArcStore
from topopath.engine.errors import MalformedTopology, UnsupportedGeometry
from topopath.engine.rings import assemble_ring
from topopath.models.topology import GeometryRecord

DecodedRing = NDArray[np.float64]
PolygonRings = list[DecodedRing]
RingSet = Union[PolygonRings, list[PolygonRings]]


class GeometryKind(str, enum.Enum):
    POLYGON = "Polygon"
    MULTIPOLYGON = "MultiPolygon"

    @classmethod
    def parse(cls, value: Any) -> GeometryKind:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedGeometry(value) from None


def geometry_parts(geometry: GeometryRecord | Mapping[str, Any]) -> tuple[GeometryKind, Any]:
    """Split a record (model or raw dict) into its kind and nested arc indices."""
    if isinstance(geometry, GeometryRecord):
        return GeometryKind.parse(geometry.type), geometry.arcs
    return GeometryKind.parse(geometry.get("type")), geometry.get("arcs")


def _sequence(value: Any, what: str) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise MalformedTopology(f"{what} must be a sequence, got {value!r}")
    return value


def decode_polygon(store: ArcStore, rings: Sequence[Any]) -> PolygonRings:
    """Assemble each ring of one polygon, outer ring first, holes after."""
    return [assemble_ring(store, ring) for ring in _sequence(rings, "polygon arcs")]


def decode_geometry(store: ArcStore, geometry: GeometryRecord | Mapping[str, Any]) -> RingSet:
    """Decode one geometry.

    Polygon -> list of rings. MultiPolygon -> list of polygons, each a list
    of rings. Anything else raises ``UnsupportedGeometry``.
    """
    kind, arcs = geometry_parts(geometry)

    if kind is GeometryKind.POLYGON:
        return decode_polygon(store, arcs)
    if kind is GeometryKind.MULTIPOLYGON:
        return [decode_polygon(store, polygon) for polygon in _sequence(arcs, "multipolygon arcs")]

    raise UnsupportedGeometry(kind.value)
