"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from topopath.engine.context import GeometryResult


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    geometry_kinds: list[str] = Field(default_factory=list)


class GeometryPath(BaseModel):
    id: str | int | None = None
    type: str
    path: str
    ring_count: int = 0
    bounds: tuple[float, float, float, float] | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: GeometryResult) -> GeometryPath:
        return cls(
            id=result.id,
            type=result.type,
            path=result.path,
            ring_count=result.ring_count,
            bounds=result.bounds,
            properties=result.properties,
        )


class GeometryFailure(BaseModel):
    id: str | int | None = None
    index: int
    type: str
    error_kind: str
    message: str

    @classmethod
    def from_result(cls, result: GeometryResult) -> GeometryFailure:
        return cls(
            id=result.id,
            index=result.index,
            type=result.type,
            error_kind=result.error.kind if result.error is not None else "",
            message=str(result.error),
        )


class DecodeResponse(BaseModel):
    object: str
    paths: list[GeometryPath] = Field(default_factory=list)
    failures: list[GeometryFailure] = Field(default_factory=list)
    decoded: int = 0
    failed: int = 0
    processing_time_ms: float = 0.0


class RenderResponse(BaseModel):
    svg: str
    regions_rendered: int = 0
    regions_skipped: dict[str, str] = Field(default_factory=dict)
    processing_time_ms: float = 0.0
