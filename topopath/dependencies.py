"""FastAPI dependency injection."""

from __future__ import annotations

from topopath.config import Settings, settings
from topopath.engine.config import DecodeConfig


def get_settings() -> Settings:
    return settings


def decode_config(precision: int | None = None) -> DecodeConfig:
    """Engine config from settings; a per-request precision overrides the default."""
    return DecodeConfig(
        precision=precision if precision is not None else settings.path_precision,
        max_workers=settings.decode_workers,
    )
