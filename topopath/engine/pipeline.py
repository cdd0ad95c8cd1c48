"""Pipeline orchestrator — decodes every geometry of a collection into path strings."""

from __future__ import annotations

import logging
import time
from collections.abc import Generator
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from topopath.engine.arcs import ArcStore
from topopath.engine.config import DecodeConfig
from topopath.engine.context import DecodeContext, GeometryResult
from topopath.engine.errors import DecodeError
from topopath.engine.geometry import GeometryKind, decode_geometry
from topopath.engine.path import PointToCommand, encode_path, line_command_factory
from topopath.engine.shapes import shape_bounds
from topopath.models.topology import GeometryRecord, Topology

logger = logging.getLogger(__name__)


def geometry_to_path(
    store: ArcStore,
    geometry: GeometryRecord,
    point_to_command: PointToCommand | None = None,
    close_command: str = "Z",
) -> str:
    """Decode one geometry and serialize it. Raises DecodeError."""
    kind = GeometryKind.parse(geometry.type)
    ring_set = decode_geometry(store, geometry)
    return encode_path(ring_set, kind, point_to_command or line_command_factory(), close_command)


class DecodePipeline:
    """Decodes a named collection, one GeometryResult per geometry."""

    def __init__(self, config: DecodeConfig | None = None) -> None:
        self.config = config or DecodeConfig()
        self._point_to_command = line_command_factory(self.config.precision)

    def decode_one(self, store: ArcStore, geometry: GeometryRecord, index: int = 0) -> GeometryResult:
        """Decode a single geometry. DecodeError propagates to the caller."""
        t0 = time.perf_counter()
        kind = GeometryKind.parse(geometry.type)
        ring_set = decode_geometry(store, geometry)
        path = encode_path(ring_set, kind, self._point_to_command, self.config.close_command)

        if kind is GeometryKind.POLYGON:
            ring_count = len(ring_set)
        else:
            ring_count = sum(len(polygon) for polygon in ring_set)

        return GeometryResult(
            index=index,
            id=geometry.id,
            type=kind.value,
            path=path,
            ring_count=ring_count,
            bounds=shape_bounds(ring_set, kind) if self.config.compute_bounds else None,
            properties=dict(geometry.properties),
            elapsed_ms=(time.perf_counter() - t0) * 1000,
        )

    def _decode_recorded(self, store: ArcStore, geometry: GeometryRecord, index: int) -> GeometryResult:
        try:
            return self.decode_one(store, geometry, index)
        except DecodeError as e:
            if self.config.fail_fast:
                raise
            return GeometryResult(
                index=index,
                id=geometry.id,
                type=geometry.type,
                properties=dict(geometry.properties),
                error=e,
            )

    def _record(self, ctx: DecodeContext, result: GeometryResult) -> None:
        ctx.results.append(result)
        if result.ok:
            logger.debug("  %s decoded in %.1fms", result.label, result.elapsed_ms)
        else:
            ctx.errors[result.label] = str(result.error)
            logger.warning("  %s FAILED: %s", result.label, result.error)

    def run(self, topology: Topology, object_name: str) -> DecodeContext:
        """Decode every geometry of ``topology.objects[object_name]``."""
        start = time.perf_counter()
        ctx = DecodeContext(topology=topology, object_name=object_name)
        geometries = topology.collection(object_name).geometries

        logger.info(
            "Pipeline: %d geometries queued from %r (%d workers)",
            len(geometries),
            object_name,
            self.config.max_workers,
        )

        indices = range(len(geometries))
        stores = [ctx.store] * len(geometries)
        if self.config.max_workers > 1 and len(geometries) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                results = list(pool.map(self._decode_recorded, stores, geometries, indices))
        else:
            results = [self._decode_recorded(ctx.store, g, i) for i, g in enumerate(geometries)]

        for result in results:
            self._record(ctx, result)

        ctx.elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d geometries in %.0fms",
            len(ctx.decoded),
            len(ctx.results),
            ctx.elapsed_ms,
        )
        return ctx

    def run_streaming(self, ctx: DecodeContext) -> Generator[dict[str, Any], None, None]:
        """Decode sequentially, yielding a progress dict after each geometry.

        The caller's ``ctx`` is mutated in-place, so after the generator is
        exhausted the context holds all results (same as ``run()``).
        """
        start = time.perf_counter()
        geometries = ctx.topology.collection(ctx.object_name).geometries
        total = len(geometries)

        for i, geometry in enumerate(geometries):
            result = self._decode_recorded(ctx.store, geometry, i)
            self._record(ctx, result)
            yield {
                "geometry_id": result.id,
                "type": result.type,
                "index": i,
                "total": total,
                "elapsed_ms": round(result.elapsed_ms, 1),
                "status": "ok" if result.ok else "error",
                "error": "" if result.ok else str(result.error),
            }

        ctx.elapsed_ms = (time.perf_counter() - start) * 1000


def create_pipeline(config: DecodeConfig | None = None) -> DecodePipeline:
    """Factory function for creating a pipeline instance."""
    return DecodePipeline(config=config)
