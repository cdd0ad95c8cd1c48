"""POST /api/render — choropleth SVG from a topology and attribute records."""

from __future__ import annotations

import time

from fastapi import APIRouter

from topopath.dependencies import decode_config
from topopath.models.requests import RenderRequest
from topopath.models.responses import RenderResponse
from topopath.render.choropleth import render_choropleth
from topopath.topology.loader import index_attributes, load_topology

router = APIRouter()


@router.post("/render", response_model=RenderResponse)
async def render(req: RenderRequest) -> RenderResponse:
    start = time.perf_counter()

    topology = load_topology(req.topology)
    attributes = index_attributes(req.attributes, key=req.key)

    result = render_choropleth(
        topology,
        regions=req.regions,
        attributes=attributes,
        value_field=req.value_field,
        outlines=req.outlines,
        key_name=req.key,
        height=req.height,
        config=decode_config(req.precision),
    )

    elapsed = (time.perf_counter() - start) * 1000
    return RenderResponse(
        svg=result.svg,
        regions_rendered=result.rendered,
        regions_skipped=result.skipped,
        processing_time_ms=round(elapsed, 1),
    )
