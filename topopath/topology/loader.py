"""Topology loader, a facade over json + pydantic.

Converts a raw TopoJSON-style document (dict, JSON text/bytes or file path)
into a validated, frozen Topology.
"""

from __future__ import annotations

import json
import logging
import numbers
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from topopath.engine.errors import MalformedTopology, MalformedTransform
from topopath.models.topology import Topology

logger = logging.getLogger(__name__)


def _check_pair(transform: Mapping[str, Any], key: str) -> None:
    value = transform.get(key)
    if value is None:
        raise MalformedTransform(f"missing {key!r}")
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)) or len(value) != 2:
        raise MalformedTransform(f"{key!r} must be a pair of numbers, got {value!r}")
    for v in value:
        if isinstance(v, bool) or not isinstance(v, numbers.Real):
            raise MalformedTransform(f"{key!r} must be a pair of numbers, got {value!r}")


def check_transform(transform: Any) -> None:
    """Raise MalformedTransform unless ``transform`` has 2-element scale and translate."""
    if transform is None:
        raise MalformedTransform("topology has no transform")
    if not isinstance(transform, Mapping):
        raise MalformedTransform(f"expected an object, got {type(transform).__name__}")
    _check_pair(transform, "scale")
    _check_pair(transform, "translate")


def _read(source: Mapping[str, Any] | str | bytes | Path) -> Any:
    if isinstance(source, Mapping):
        return source
    if isinstance(source, Path):
        with open(source, encoding="utf-8") as f:
            return json.load(f)
    if isinstance(source, bytes):
        source = source.decode("utf-8")
    return json.loads(source)


def load_topology(source: Mapping[str, Any] | str | bytes | Path) -> Topology:
    """Parse and validate a topology document."""
    try:
        doc = _read(source)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedTopology(f"invalid JSON: {e}") from e

    if not isinstance(doc, Mapping):
        raise MalformedTopology(f"expected an object, got {type(doc).__name__}")
    if doc.get("type") != "Topology":
        raise MalformedTopology(f"expected type 'Topology', got {doc.get('type')!r}")

    check_transform(doc.get("transform"))

    try:
        topology = Topology.model_validate(doc)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(p) for p in first["loc"])
        raise MalformedTopology(f"{where}: {first['msg']}") from e

    logger.info(
        "Loaded topology: %d arcs, objects %s",
        len(topology.arcs),
        ", ".join(topology.objects) or "none",
    )
    return topology


def index_attributes(records: Iterable[Mapping[str, Any]], key: str = "fips") -> dict[str, dict[str, Any]]:
    """Build ``{str(record[key]): record}`` for attribute lookup by geometry id.

    Records without ``key`` are skipped. Later duplicates win.
    """
    index: dict[str, dict[str, Any]] = {}
    skipped = 0
    for record in records:
        if key not in record:
            skipped += 1
            continue
        index[str(record[key])] = dict(record)
    if skipped:
        logger.warning("Skipped %d attribute records without %r", skipped, key)
    return index
