"""DecodeContext: state collected while decoding one named collection.

Per-geometry results -> GeometryResult
Collection-wide outcome -> DecodeContext.* (results, errors, timings)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from topopath.engine.arcs import ArcStore
from topopath.engine.errors import DecodeError
from topopath.models.topology import Topology


@dataclass
class GeometryResult:
    """Outcome for a single geometry: a path string or an explicit error."""

    index: int
    id: str | int | None
    type: str
    path: str = ""
    ring_count: int = 0
    # (xmin, ymin, xmax, ymax); None when nothing drawable was decoded
    bounds: tuple[float, float, float, float] | None = None
    properties: dict[str, Any] = field(default_factory=dict)
    error: DecodeError | None = None
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def label(self) -> str:
        return str(self.id) if self.id is not None else f"#{self.index}"


@dataclass
class DecodeContext:
    """Shared state for decoding one collection of a topology."""

    topology: Topology
    object_name: str
    results: list[GeometryResult] = field(default_factory=list)
    # geometry label -> error message
    errors: dict[str, str] = field(default_factory=dict)
    elapsed_ms: float = 0.0

    store: ArcStore = field(init=False)

    def __post_init__(self) -> None:
        self.store = ArcStore.from_topology(self.topology)

    @property
    def decoded(self) -> list[GeometryResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[GeometryResult]:
        return [r for r in self.results if not r.ok]

    def paths(self) -> dict[str, str]:
        """Geometry label -> path string, successful geometries only."""
        return {r.label: r.path for r in self.decoded}

    def get_result(self, geometry_id: str | int) -> GeometryResult | None:
        for r in self.results:
            if r.id == geometry_id:
                return r
        return None
