"""Path command serialization for decoded ring sets.

Output follows the ``d3.line()`` format: ``M x,y`` then ``L x,y`` for every
following point, one closed subpath per ring.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from decimal import Decimal
from functools import partial

import numpy as np
from numpy.typing import NDArray

from topopath.engine.geometry import GeometryKind, PolygonRings, RingSet

PointToCommand = Callable[[NDArray[np.float64]], str]

CLOSE_COMMAND = "Z"

# JavaScript switches to exponent notation outside this range
_FIXED_MIN = 1e-7
_FIXED_MAX = 1e21


def format_number(value: float, precision: int | None = None) -> str:
    """Shortest round-tripping string for a coordinate, as JavaScript prints it.

    Integral values drop the ``.0``. Magnitudes in ``[1e-7, 1e21)`` are
    written in fixed notation, anything else as ``1e-8`` / ``1e+21``.
    """
    value = float(value)
    if precision is not None:
        value = round(value, precision)
    if value == 0:
        # also folds -0.0
        return "0"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    if _FIXED_MIN <= abs(value) < _FIXED_MAX:
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    mantissa, _, exponent = repr(value).partition("e")
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def line_command(points: NDArray[np.float64] | Sequence[Sequence[float]], precision: int | None = None) -> str:
    """Move to the first point, line to the rest. Empty input -> ``""``."""
    if len(points) == 0:
        return ""
    coords = [f"{format_number(x, precision)},{format_number(y, precision)}" for x, y in points]
    return "M" + "L".join(coords)


def line_command_factory(precision: int | None = None) -> PointToCommand:
    if precision is None:
        return line_command
    return partial(line_command, precision=precision)


def encode_rings(
    rings: PolygonRings,
    point_to_command: PointToCommand = line_command,
    close_command: str = CLOSE_COMMAND,
) -> str:
    """One closed subpath per ring. Rings with no points contribute nothing."""
    parts: list[str] = []
    for ring in rings:
        fragment = point_to_command(ring)
        if fragment:
            parts.append(fragment + close_command)
    return "".join(parts)


def encode_path(
    ring_set: RingSet,
    kind: GeometryKind | str,
    point_to_command: PointToCommand = line_command,
    close_command: str = CLOSE_COMMAND,
) -> str:
    """Serialize a decoded ring set into one path command string."""
    kind = GeometryKind.parse(kind)

    if kind is GeometryKind.POLYGON:
        return encode_rings(ring_set, point_to_command, close_command)
    if kind is GeometryKind.MULTIPOLYGON:
        return "".join(encode_rings(polygon, point_to_command, close_command) for polygon in ring_set)

    raise AssertionError(f"unhandled geometry kind {kind}")
