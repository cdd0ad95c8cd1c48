"""Ring assembly: signed arc indices -> one implicitly closed point sequence."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

from topopath.engine.arcs import ArcRef, ArcStore, resolve_arc
from topopath.engine.errors import EmptyRing, MalformedTopology


def assemble_ring(store: ArcStore, signed_indices: Iterable[int | ArcRef]) -> NDArray[np.float64]:
    """Concatenate the resolved arcs of one ring.

    The last point of every arc is dropped: it is the first point of the
    next arc, and for the final arc it is the ring's start, which the path
    encoder restores with a close command. Degenerate rings pass through
    as-is, possibly empty.
    """
    if isinstance(signed_indices, (str, bytes)) or not isinstance(signed_indices, Iterable):
        raise MalformedTopology(f"ring must be a sequence of arc indices, got {signed_indices!r}")

    pieces = [resolve_arc(store, ref)[:-1] for ref in signed_indices]
    if not pieces:
        raise EmptyRing()
    return np.concatenate(pieces, axis=0)
