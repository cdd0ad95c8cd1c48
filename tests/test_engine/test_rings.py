"""Tests for ring assembly."""

import pytest

from topopath.engine.arcs import ArcRef, ArcStore, Direction, decode_arc
from topopath.engine.errors import ArcNotFound, EmptyRing, MalformedTopology
from topopath.engine.rings import assemble_ring


def test_shared_endpoint_counted_once(squares_store):
    # arc 2 ends where reversed arc 0 starts, and reversed arc 0 ends at arc 2's start
    a = decode_arc(squares_store, 2)
    b = decode_arc(squares_store, 0)
    ring = assemble_ring(squares_store, [2, -1])

    assert len(ring) == len(a) + len(b) - 2
    # with the implicit closing vertex the subpath visits len(A) + len(B) - 1 vertices
    assert len(ring) + 1 == len(a) + len(b) - 1
    assert ring.tolist() == [[1, 0], [2, 0], [2, 1], [1, 1]]


def test_ring_order_follows_input(squares_store):
    ring = assemble_ring(squares_store, [0, 1])
    assert ring.tolist() == [[1, 0], [1, 1], [0, 1], [0, 0]]


def test_ring_has_no_duplicate_closing_point(squares_store):
    ring = assemble_ring(squares_store, [3])
    assert ring.tolist() == [[0, 0], [4, 0], [4, 4], [0, 4]]


def test_ring_accepts_arc_refs(squares_store):
    refs = [ArcRef(2), ArcRef(0, Direction.REVERSE)]
    assert assemble_ring(squares_store, refs).tolist() == assemble_ring(squares_store, [2, -1]).tolist()


def test_empty_ring_raises(squares_store):
    with pytest.raises(EmptyRing):
        assemble_ring(squares_store, [])


def test_degenerate_ring_passes_through():
    store = ArcStore(arcs=(((5, 5),),), scale=(1.0, 1.0), translate=(0.0, 0.0))
    ring = assemble_ring(store, [0])
    assert ring.shape == (0, 2)


def test_missing_arc_in_ring(squares_store):
    with pytest.raises(ArcNotFound):
        assemble_ring(squares_store, [0, 42])


def test_ring_must_be_a_sequence(squares_store):
    with pytest.raises(MalformedTopology):
        assemble_ring(squares_store, 0)
