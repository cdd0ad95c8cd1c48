"""TopoPath decode engine: shared-arc topology -> path command strings."""

from topopath.engine.arcs import ArcRef, ArcStore, Direction, decode_arc, resolve_arc
from topopath.engine.context import DecodeContext, GeometryResult
from topopath.engine.errors import (
    ArcNotFound,
    DecodeError,
    EmptyRing,
    MalformedTopology,
    MalformedTransform,
    ObjectNotFound,
    UnsupportedGeometry,
)
from topopath.engine.geometry import GeometryKind, decode_geometry
from topopath.engine.path import encode_path, line_command
from topopath.engine.pipeline import DecodePipeline, geometry_to_path
from topopath.engine.rings import assemble_ring

__all__ = [
    "ArcRef",
    "ArcStore",
    "Direction",
    "decode_arc",
    "resolve_arc",
    "assemble_ring",
    "GeometryKind",
    "decode_geometry",
    "encode_path",
    "line_command",
    "geometry_to_path",
    "DecodePipeline",
    "DecodeContext",
    "GeometryResult",
    "DecodeError",
    "ArcNotFound",
    "EmptyRing",
    "UnsupportedGeometry",
    "MalformedTransform",
    "MalformedTopology",
    "ObjectNotFound",
]
