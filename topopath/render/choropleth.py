"""Choropleth rendering: decoded region paths + attribute lookup -> SVG document.

Regions are filled on a single-hue lightness ramp, outlines are drawn on top
with a white stroke, and a stepped legend sits in the top-right corner.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from topopath.engine.config import DecodeConfig
from topopath.engine.context import DecodeContext
from topopath.engine.path import format_number
from topopath.engine.pipeline import DecodePipeline
from topopath.models.topology import Topology
from topopath.svg.serializer import serialize_svg

logger = logging.getLogger(__name__)

# Lightness of the fill is 95 - value, on hue 204
_HUE = 204
_SATURATION = 54
_LIGHTNESS_MAX = 95


def fill_color(value: float) -> str:
    return f"hsl({_HUE}, {_SATURATION}%, {format_number(_LIGHTNESS_MAX - value)}%)"


def clamp_viewbox(bbox: tuple[float, float, float, float]) -> tuple[float, float, float, float]:
    """Negative bbox components are clamped to 0; the result is used verbatim as viewBox."""
    return tuple(max(0.0, float(v)) for v in bbox)


def stepped_range(start: float, stop: float, step: float) -> list[float]:
    """``start + i * step`` for every value below ``stop`` (d3.range semantics)."""
    if step == 0 or not math.isfinite(step):
        return []
    n = max(0, math.ceil((stop - start) / step))
    return [start + i * step for i in range(n)]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class LegendConfig:
    num_colors: int = 7
    swatch_width: float = 30.0
    swatch_height: float = 10.0
    padding_x: float = 100.0
    padding_y: float = 50.0

    @property
    def width(self) -> float:
        return self.num_colors * self.swatch_width


def build_legend(values: list[float], canvas_width: float, config: LegendConfig | None = None) -> dict[str, Any] | None:
    """Legend group: colour swatches over [min, max] plus tick labels."""
    config = config or LegendConfig()
    if not values:
        return None

    arr = np.asarray(values, dtype=np.float64)
    lo, hi = float(np.min(arr)), float(np.max(arr))
    intervals = stepped_range(lo, hi, (hi - lo) / config.num_colors) or [lo]

    span = hi - lo

    def x_scale(v: float) -> float:
        if span == 0:
            return 0.0
        return (v - lo) * config.width / span

    children: list[dict[str, Any]] = [
        {
            "tag": "rect",
            "x": format_number(x_scale(d)),
            "y": 0,
            "width": format_number(config.swatch_width),
            "height": format_number(config.swatch_height),
            "fill": f"hsl({_HUE}, {_SATURATION}%, {_LIGHTNESS_MAX - int(d)}%)",
        }
        for d in intervals
    ]

    tick_size = config.swatch_height * 1.5
    for t in intervals + [hi]:
        x = format_number(x_scale(t))
        children.append({
            "tag": "line",
            "class": "tick",
            "x1": x,
            "x2": x,
            "y1": 0,
            "y2": format_number(tick_size),
            "stroke": "currentColor",
        })
        children.append({
            "tag": "text",
            "class": "tick",
            "x": x,
            "y": format_number(tick_size + 3),
            "dy": "0.71em",
            "text-anchor": "middle",
            "text": f"{_round_half_up(t)}%",
        })

    legend_x = canvas_width - config.width - config.padding_x
    return {
        "tag": "g",
        "id": "legend",
        "transform": f"translate({format_number(legend_x)},{format_number(config.padding_y)})",
        "children": children,
    }


@dataclass
class ChoroplethResult:
    svg: str
    rendered: int = 0
    # geometry label -> reason it was left out
    skipped: dict[str, str] = field(default_factory=dict)


def _union_bounds(ctx: DecodeContext) -> tuple[float, float, float, float]:
    boxes = np.array([r.bounds for r in ctx.decoded if r.bounds is not None])
    if len(boxes) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(boxes[:, 0])),
        float(np.min(boxes[:, 1])),
        float(np.max(boxes[:, 2])),
        float(np.max(boxes[:, 3])),
    )


def render_choropleth(
    topology: Topology,
    regions: str,
    attributes: Mapping[str, Mapping[str, Any]],
    value_field: str,
    outlines: str | None = None,
    key_name: str = "fips",
    data_name: str | None = None,
    height: float | None = None,
    config: DecodeConfig | None = None,
    legend: LegendConfig | None = None,
) -> ChoroplethResult:
    """Render ``topology.objects[regions]`` coloured by ``attributes[id][value_field]``.

    Regions that fail to decode, decode to an empty path, or have no usable
    attribute value are skipped and reported in ``ChoroplethResult.skipped``;
    they are never drawn as blank shapes.
    """
    pipeline = DecodePipeline(config)
    data_name = data_name or value_field
    region_ctx = pipeline.run(topology, regions)

    skipped: dict[str, str] = dict(region_ctx.errors)
    region_elements: list[dict[str, Any]] = []

    for result in region_ctx.decoded:
        if not result.path:
            reason = "decoded to no drawable rings"
            skipped[result.label] = reason
            logger.warning("Skipping region %s: %s", result.label, reason)
            continue
        record = attributes.get(str(result.id))
        value = record.get(value_field) if record is not None else None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            reason = f"no {value_field!r} value for {key_name} {result.id!r}"
            skipped[result.label] = reason
            logger.warning("Skipping region %s: %s", result.label, reason)
            continue
        region_elements.append({
            "tag": "path",
            "d": result.path,
            "class": "county",
            "fill": fill_color(value),
            f"data-{key_name}": result.id,
            f"data-{data_name}": format_number(value),
        })

    outline_elements: list[dict[str, Any]] = []
    if outlines is not None:
        outline_ctx = pipeline.run(topology, outlines)
        for label, error in outline_ctx.errors.items():
            logger.warning("Skipping outline %s: %s", label, error)
        for r in outline_ctx.decoded:
            if not r.path:
                logger.warning("Skipping outline %s: decoded to no drawable rings", r.label)
        outline_elements = [
            {"tag": "path", "d": r.path, "class": "state", "fill": "none", "stroke": "#fff", "stroke-width": "1"}
            for r in outline_ctx.decoded
            if r.path
        ]

    viewbox = clamp_viewbox(topology.bbox if topology.bbox is not None else _union_bounds(region_ctx))

    elements: list[dict[str, Any]] = [
        {"tag": "g", "class": "regions", "children": region_elements},
    ]
    if outline_elements:
        elements.append({"tag": "g", "class": "outlines", "children": outline_elements})

    values = [
        float(r[value_field])
        for r in attributes.values()
        if isinstance(r.get(value_field), (int, float)) and not isinstance(r.get(value_field), bool)
    ]
    legend_group = build_legend(values, viewbox[2], legend)
    if legend_group is not None:
        elements.append(legend_group)

    svg = serialize_svg(elements, viewbox=viewbox, element_id="choropleth", height=height)
    logger.info("Rendered choropleth: %d regions, %d skipped", len(region_elements), len(skipped))
    return ChoroplethResult(svg=svg, rendered=len(region_elements), skipped=skipped)
