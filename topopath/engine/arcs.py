"""Arc storage, delta decoding and signed-index resolution.

Arcs are stored once as delta-encoded integer positions. A ring references
an arc by signed index: ``i >= 0`` walks arc ``i`` forward, ``i < 0`` walks
arc ``~i`` backwards.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from topopath.engine.errors import ArcNotFound, MalformedTopology
from topopath.models.topology import Arc, Topology

_INT64_LIMIT = float(2**63)


@dataclass(frozen=True)
class ArcStore:
    """Read-only view over a topology's arcs and its affine transform."""

    arcs: tuple[Arc, ...]
    scale: tuple[float, float]
    translate: tuple[float, float]

    @classmethod
    def from_topology(cls, topology: Topology) -> ArcStore:
        return cls(
            arcs=topology.arcs,
            scale=topology.transform.scale,
            translate=topology.transform.translate,
        )

    def __len__(self) -> int:
        return len(self.arcs)

    def raw(self, index: int) -> Arc:
        """Stored delta positions of arc ``index``. Tuples, so never mutable."""
        if not 0 <= index < len(self.arcs):
            raise ArcNotFound(index, len(self.arcs))
        return self.arcs[index]


def decode_arc(store: ArcStore, index: int) -> NDArray[np.float64]:
    """Absolute (n, 2) coordinates of arc ``index``, in stored order.

    Running sums of the deltas, then ``x * sx + tx`` / ``y * sy + ty``.
    Every call returns a newly allocated array.
    """
    raw = store.raw(index)
    if len(raw) == 0:
        return np.empty((0, 2), dtype=np.float64)

    try:
        deltas = np.asarray(raw, dtype=np.int64)
    except OverflowError:
        raise MalformedTopology(f"arc {index} has a delta outside the 64-bit integer range") from None
    # running sums must not wrap around either
    if np.abs(deltas.astype(np.float64)).sum(axis=0).max() >= _INT64_LIMIT:
        raise MalformedTopology(f"arc {index} accumulates past the 64-bit integer range")

    quantized = np.cumsum(deltas, axis=0)
    return quantized * np.asarray(store.scale, dtype=np.float64) + np.asarray(
        store.translate, dtype=np.float64
    )


class Direction(enum.Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


@dataclass(frozen=True)
class ArcRef:
    """Signed arc index parsed into (arc index, traversal direction)."""

    index: int
    direction: Direction = Direction.FORWARD

    @classmethod
    def parse(cls, signed: int) -> ArcRef:
        if isinstance(signed, bool) or not isinstance(signed, (int, np.integer)):
            raise MalformedTopology(f"arc reference must be an integer, got {signed!r}")
        signed = int(signed)
        if signed < 0:
            return cls(~signed, Direction.REVERSE)
        return cls(signed, Direction.FORWARD)

    @property
    def reversed(self) -> bool:
        return self.direction is Direction.REVERSE

    @property
    def signed(self) -> int:
        return ~self.index if self.reversed else self.index


def resolve_arc(store: ArcStore, ref: ArcRef | int) -> NDArray[np.float64]:
    """Decode an arc in the direction the reference asks for."""
    if not isinstance(ref, ArcRef):
        ref = ArcRef.parse(ref)

    points = decode_arc(store, ref.index)
    if ref.reversed:
        # contiguous copy rather than a view
        return points[::-1].copy()
    return points
