"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class DecodeRequest(BaseModel):
    topology: dict[str, Any] = Field(..., description="Raw topology document")
    object: str = Field(..., description="Name of the geometry collection to decode")
    precision: int | None = Field(
        default=None,
        ge=0,
        le=15,
        description="Decimal places kept in path output (default: full precision)",
    )


class RenderRequest(BaseModel):
    topology: dict[str, Any] = Field(..., description="Raw topology document")
    regions: str = Field(..., description="Collection drawn as filled regions")
    outlines: str | None = Field(default=None, description="Collection drawn as outlines on top")
    attributes: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Attribute records, one per region",
    )
    key: str = Field(default="fips", description="Attribute field matching the geometry id")
    value_field: str = Field(..., description="Attribute field driving the fill colour")
    precision: int | None = Field(default=None, ge=0, le=15)
    height: float | None = Field(default=None, description="Rendered SVG height")
