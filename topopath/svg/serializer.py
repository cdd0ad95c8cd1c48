"""Write SVG markup from element dictionaries."""

from __future__ import annotations

from html import escape
from typing import Any

# Keys that describe structure rather than attributes
_RESERVED = ("tag", "children", "text")


def _format_value(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _element_lines(elem: dict[str, Any], indent: int) -> list[str]:
    pad = "  " * indent
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in _RESERVED and v is not None}
    attr_str = "".join(f' {k}="{escape(_format_value(v), quote=True)}"' for k, v in attrs.items())

    children = elem.get("children") or []
    text = elem.get("text")

    if not children and text is None:
        return [f"{pad}<{tag}{attr_str} />"]
    if not children:
        return [f"{pad}<{tag}{attr_str}>{escape(str(text), quote=False)}</{tag}>"]

    lines = [f"{pad}<{tag}{attr_str}>"]
    for child in children:
        lines.extend(_element_lines(child, indent + 1))
    lines.append(f"{pad}</{tag}>")
    return lines


def serialize_svg(
    elements: list[dict[str, Any]],
    viewbox: tuple[float, float, float, float] = (0.0, 0.0, 24.0, 24.0),
    element_id: str | None = None,
    height: float | None = None,
    title: str = "",
    description: str = "",
) -> str:
    """Generate SVG markup.

    Each element is ``{"tag": ..., attr: value, ...}`` with optional
    ``children`` (nested elements) and ``text`` (character content).
    """
    vb = " ".join(_format_value(float(v)) for v in viewbox)
    root = {"id": element_id, "viewBox": vb, "height": height}
    root_attrs = "".join(
        f' {k}="{escape(_format_value(v), quote=True)}"' for k, v in root.items() if v is not None
    )

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg"{root_attrs} role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title, quote=False)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description, quote=False)}</desc>")

    for elem in elements:
        lines.extend(_element_lines(elem, 1))

    lines.append("</svg>")
    return "\n".join(lines)
