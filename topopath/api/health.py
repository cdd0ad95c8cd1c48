"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from topopath.engine.geometry import GeometryKind
from topopath.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        geometry_kinds=[kind.value for kind in GeometryKind],
    )
