"""Decode error hierarchy. Every failure the decoder can surface lives here."""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for all topology decode failures."""

    kind = "DecodeError"


class ArcNotFound(DecodeError):
    kind = "ArcNotFound"

    def __init__(self, index: int, arc_count: int) -> None:
        self.index = index
        self.arc_count = arc_count
        super().__init__(f"Arc {index} not found (topology has {arc_count} arcs)")


class EmptyRing(DecodeError):
    kind = "EmptyRing"

    def __init__(self) -> None:
        super().__init__("Ring has no arc references")


class UnsupportedGeometry(DecodeError):
    kind = "UnsupportedGeometry"

    def __init__(self, geometry_type: str | None) -> None:
        self.geometry_type = geometry_type
        super().__init__(f"Unsupported geometry type: {geometry_type!r}")


class MalformedTransform(DecodeError):
    kind = "MalformedTransform"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Malformed transform: {detail}")


class MalformedTopology(DecodeError):
    """Document does not have the shape of a topology (arcs, objects, ...)."""

    kind = "MalformedTopology"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Malformed topology: {detail}")


class ObjectNotFound(DecodeError):
    kind = "ObjectNotFound"

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"Object {name!r} not found. Available: {', '.join(available) or 'none'}")
