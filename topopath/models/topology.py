"""Topology document model.

All models are frozen and nested sequences are stored as tuples, so a loaded
topology can be shared between decode workers without copying.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# (dx, dy) delta, quantized
Position = tuple[int, int]
Arc = tuple[Position, ...]


def _freeze(value: Any) -> Any:
    """Recursively turn lists into tuples."""
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


class Transform(BaseModel):
    model_config = ConfigDict(frozen=True)

    scale: tuple[float, float]
    translate: tuple[float, float]


class GeometryRecord(BaseModel):
    """One geometry of a collection. ``arcs`` nests signed arc indices."""

    model_config = ConfigDict(frozen=True)

    # Kept as a plain string: unsupported types must reach the decoder
    type: str
    arcs: Any = ()
    id: str | int | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("arcs", mode="before")
    @classmethod
    def _freeze_arcs(cls, v: Any) -> Any:
        return _freeze(v) if v is not None else ()


class GeometryCollection(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: tuple[GeometryRecord, ...] = ()


class Topology(BaseModel):
    """Represents a loaded shared-arc topology."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Topology"] = "Topology"
    arcs: tuple[Arc, ...] = ()
    transform: Transform
    objects: dict[str, GeometryCollection] = Field(default_factory=dict)
    bbox: tuple[float, float, float, float] | None = None

    @field_validator("objects", mode="before")
    @classmethod
    def _wrap_bare_geometries(cls, v: Any) -> Any:
        # A named object may be a single geometry instead of a collection
        if not isinstance(v, dict):
            return v
        wrapped: dict[str, Any] = {}
        for name, obj in v.items():
            if isinstance(obj, dict) and obj.get("type") != "GeometryCollection":
                obj = {"type": "GeometryCollection", "geometries": [obj]}
            wrapped[name] = obj
        return wrapped

    def collection(self, name: str) -> GeometryCollection:
        from topopath.engine.errors import ObjectNotFound

        try:
            return self.objects[name]
        except KeyError:
            raise ObjectNotFound(name, list(self.objects)) from None
