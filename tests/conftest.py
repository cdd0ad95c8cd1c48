"""Shared test fixtures."""

from __future__ import annotations

import copy

import pytest

from topopath.engine.arcs import ArcStore
from topopath.models.topology import Topology
from topopath.topology.loader import load_topology


IDENTITY = {"scale": [1, 1], "translate": [0, 0]}

# Single arc, decodes to (2,3) (3,2) (3,4) under the identity transform
SINGLE_ARC_TOPOLOGY = {
    "type": "Topology",
    "transform": IDENTITY,
    "arcs": [[[2, 3], [1, -1], [0, 2]]],
    "objects": {},
}

# Two unit squares sharing the edge x=1, plus a 4x4 square with a 1x1 hole.
#
#   arc 0: (1,0) -> (1,1)                        shared edge
#   arc 1: (1,1) -> (0,1) -> (0,0) -> (1,0)      rest of the left square
#   arc 2: (1,0) -> (2,0) -> (2,1) -> (1,1)      rest of the right square
#   arc 3: closed outer 4x4 square
#   arc 4: closed 1x1 hole
SQUARES_TOPOLOGY = {
    "type": "Topology",
    "bbox": [-1, 0, 4, 4],
    "transform": IDENTITY,
    "arcs": [
        [[1, 0], [0, 1]],
        [[1, 1], [-1, 0], [0, -1], [1, 0]],
        [[1, 0], [1, 0], [0, 1], [-1, 0]],
        [[0, 0], [4, 0], [0, 4], [-4, 0], [0, -4]],
        [[1, 1], [0, 1], [1, 0], [0, -1], [-1, 0]],
    ],
    "objects": {
        "counties": {
            "type": "GeometryCollection",
            "geometries": [
                {"type": "Polygon", "id": 1001, "arcs": [[0, 1]]},
                {"type": "Polygon", "id": 1003, "arcs": [[2, -1]]},
            ],
        },
        "states": {
            "type": "GeometryCollection",
            "geometries": [
                {"type": "MultiPolygon", "id": 1, "arcs": [[[0, 1]], [[2, -1]]]},
            ],
        },
        "donut": {"type": "Polygon", "id": "donut", "arcs": [[3], [4]]},
        "broken": {
            "type": "GeometryCollection",
            "geometries": [
                {"type": "Polygon", "id": "ok", "arcs": [[0, 1]]},
                {"type": "Polygon", "id": "bad-arc", "arcs": [[99]]},
                {"type": "LineString", "id": "line", "arcs": [0]},
                {"type": "Polygon", "id": "empty", "arcs": [[]]},
            ],
        },
    },
}

LEFT_SQUARE_PATH = "M1,0L1,1L0,1L0,0Z"
RIGHT_SQUARE_PATH = "M1,0L2,0L2,1L1,1Z"

EDUCATION = [
    {"fips": 1001, "state": "AL", "area_name": "Autauga County", "bachelorsOrHigher": 20.5},
    {"fips": 1003, "state": "AL", "area_name": "Baldwin County", "bachelorsOrHigher": 30.25},
]


def topology_dict(source: dict) -> dict:
    """Deep copy, so a test can mangle a document without touching the shared one."""
    return copy.deepcopy(source)


@pytest.fixture
def squares() -> Topology:
    return load_topology(topology_dict(SQUARES_TOPOLOGY))


@pytest.fixture
def squares_store(squares: Topology) -> ArcStore:
    return ArcStore.from_topology(squares)


@pytest.fixture
def single_arc_store() -> ArcStore:
    return ArcStore.from_topology(load_topology(topology_dict(SINGLE_ARC_TOPOLOGY)))
