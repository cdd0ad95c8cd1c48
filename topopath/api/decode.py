"""POST /api/decode — decode a named collection into path strings."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import AsyncGenerator

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from topopath.dependencies import decode_config
from topopath.engine.context import DecodeContext
from topopath.engine.errors import DecodeError
from topopath.engine.pipeline import create_pipeline
from topopath.models.requests import DecodeRequest
from topopath.models.responses import DecodeResponse, GeometryFailure, GeometryPath
from topopath.topology.loader import load_topology

logger = logging.getLogger(__name__)

router = APIRouter()


_SENTINEL = object()  # marks end of queue


def _build_response(ctx: DecodeContext, elapsed_ms: float) -> DecodeResponse:
    return DecodeResponse(
        object=ctx.object_name,
        paths=[GeometryPath.from_result(r) for r in ctx.decoded],
        failures=[GeometryFailure.from_result(r) for r in ctx.failed],
        decoded=len(ctx.decoded),
        failed=len(ctx.failed),
        processing_time_ms=round(elapsed_ms, 1),
    )


async def _stream_decode(req: DecodeRequest) -> AsyncGenerator[str, None]:
    """Drive pipeline.run_streaming() in a thread, yielding SSE events as they arrive."""
    start = time.perf_counter()

    try:
        topology = load_topology(req.topology)
        ctx = DecodeContext(topology=topology, object_name=req.object)
        topology.collection(req.object)
    except DecodeError as e:
        data = json.dumps({"type": "error", "error_kind": e.kind, "message": str(e)})
        yield f"event: error\ndata: {data}\n\n"
        return

    pipeline = create_pipeline(decode_config(req.precision))
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def _run_pipeline() -> None:
        """Sync pipeline in thread; pushes progress dicts onto the async queue."""
        try:
            for progress in pipeline.run_streaming(ctx):
                loop.call_soon_threadsafe(queue.put_nowait, progress)
        finally:
            loop.call_soon_threadsafe(queue.put_nowait, _SENTINEL)

    future = loop.run_in_executor(None, _run_pipeline)

    while True:
        item = await queue.get()
        if item is _SENTINEL:
            break
        data = json.dumps(item)
        yield f"event: progress\ndata: {data}\n\n"

    try:
        await future
    except Exception as e:
        logger.exception("Streaming decode of %r failed", req.object)
        kind = e.kind if isinstance(e, DecodeError) else type(e).__name__
        data = json.dumps({"type": "error", "error_kind": kind, "message": str(e)})
        yield f"event: error\ndata: {data}\n\n"
        return

    elapsed = (time.perf_counter() - start) * 1000
    response = _build_response(ctx, elapsed)
    yield f"event: result\ndata: {response.model_dump_json()}\n\n"

    yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"


@router.post("/decode/stream")
async def decode_stream(req: DecodeRequest) -> StreamingResponse:
    return StreamingResponse(
        _stream_decode(req),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/decode", response_model=DecodeResponse)
async def decode(req: DecodeRequest) -> DecodeResponse:
    start = time.perf_counter()

    topology = load_topology(req.topology)
    pipeline = create_pipeline(decode_config(req.precision))
    ctx = pipeline.run(topology, req.object)

    elapsed = (time.perf_counter() - start) * 1000
    return _build_response(ctx, elapsed)
