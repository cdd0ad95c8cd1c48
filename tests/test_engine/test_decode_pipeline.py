"""Tests for the collection decode pipeline."""

import logging

import pytest

from topopath.engine.config import DecodeConfig
from topopath.engine.context import DecodeContext
from topopath.engine.errors import ArcNotFound, ObjectNotFound
from topopath.engine.pipeline import DecodePipeline
from topopath.topology.loader import load_topology
from tests.conftest import LEFT_SQUARE_PATH, RIGHT_SQUARE_PATH, SQUARES_TOPOLOGY, topology_dict


def test_pipeline_decodes_collection(squares):
    ctx = DecodePipeline().run(squares, "counties")

    assert [r.id for r in ctx.results] == [1001, 1003]
    assert ctx.paths() == {"1001": LEFT_SQUARE_PATH, "1003": RIGHT_SQUARE_PATH}
    assert ctx.errors == {}
    assert ctx.results[0].bounds == (0.0, 0.0, 1.0, 1.0)
    assert ctx.results[0].ring_count == 1


def test_pipeline_multipolygon_ring_count(squares):
    ctx = DecodePipeline().run(squares, "states")
    assert ctx.results[0].ring_count == 2
    assert ctx.results[0].type == "MultiPolygon"


def test_failures_do_not_abort_siblings(squares, caplog):
    with caplog.at_level(logging.WARNING, logger="topopath.engine.pipeline"):
        ctx = DecodePipeline().run(squares, "broken")

    assert [r.label for r in ctx.decoded] == ["ok"]
    assert {r.label: r.error.kind for r in ctx.failed} == {
        "bad-arc": "ArcNotFound",
        "line": "UnsupportedGeometry",
        "empty": "EmptyRing",
    }
    # failed geometries never carry a path
    assert all(r.path == "" for r in ctx.failed)
    assert set(ctx.errors) == {"bad-arc", "line", "empty"}
    assert "bad-arc FAILED" in caplog.text


def test_fail_fast_reraises(squares):
    pipeline = DecodePipeline(DecodeConfig(fail_fast=True))
    with pytest.raises(ArcNotFound):
        pipeline.run(squares, "broken")


def test_parallel_matches_sequential(squares):
    sequential = DecodePipeline().run(squares, "broken")
    parallel = DecodePipeline(DecodeConfig(max_workers=4)).run(squares, "broken")

    assert [r.label for r in parallel.results] == [r.label for r in sequential.results]
    assert parallel.paths() == sequential.paths()
    assert parallel.errors == sequential.errors


def test_precision_applies_to_paths(squares):
    topology = squares.model_copy(update={"transform": squares.transform.model_copy(update={"scale": (1 / 3, 1.0)})})
    ctx = DecodePipeline(DecodeConfig(precision=2)).run(topology, "counties")
    assert ctx.paths()["1001"] == "M0.33,0L0.33,1L0,1L0,0Z"


def test_unknown_object(squares):
    with pytest.raises(ObjectNotFound) as exc:
        DecodePipeline().run(squares, "nation")
    assert "counties" in exc.value.available


def test_bare_geometry_object_is_wrapped(squares):
    ctx = DecodePipeline().run(squares, "donut")
    assert len(ctx.results) == 1
    assert ctx.results[0].ring_count == 2


def test_run_streaming_fills_context(squares):
    ctx = DecodeContext(topology=squares, object_name="broken")
    events = list(DecodePipeline().run_streaming(ctx))

    assert [e["status"] for e in events] == ["ok", "error", "error", "error"]
    assert events[-1]["index"] == 3
    assert events[-1]["total"] == 4
    assert len(ctx.results) == 4
    assert ctx.get_result("ok").path == LEFT_SQUARE_PATH


def test_compute_bounds_off(squares):
    ctx = DecodePipeline(DecodeConfig(compute_bounds=False)).run(squares, "counties")
    assert all(r.bounds is None for r in ctx.results)


def test_out_of_range_arc_fails_alone():
    doc = topology_dict(SQUARES_TOPOLOGY)
    doc["arcs"].append([[2**70, 0], [0, 1]])
    doc["objects"]["mixed"] = {
        "type": "GeometryCollection",
        "geometries": [
            {"type": "Polygon", "id": "ok", "arcs": [[0, 1]]},
            {"type": "Polygon", "id": "huge", "arcs": [[len(doc["arcs"]) - 1]]},
        ],
    }
    ctx = DecodePipeline().run(load_topology(doc), "mixed")

    assert ctx.paths() == {"ok": LEFT_SQUARE_PATH}
    assert {r.label: r.error.kind for r in ctx.failed} == {"huge": "MalformedTopology"}
