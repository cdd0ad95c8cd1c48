"""Decode configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DecodeConfig:
    """Controls how a collection is decoded and serialized."""

    # Decimal places kept in path output; None keeps full precision
    precision: int | None = None

    # >1 decodes geometries on a thread pool
    max_workers: int = 1

    # Re-raise the first DecodeError instead of recording it per geometry
    fail_fast: bool = False

    close_command: str = "Z"

    # Shapely bounds per geometry
    compute_bounds: bool = True
