"""
wkbflat: flat-coordinate codec for WKB-style geometry wire formats.

This package exposes:
- Byte-order registry and scalar encodings (XDR big-endian, NDR little-endian)
- Bounds policy limiting element counts per nesting level
- Level 0..3 readers/writers for flat coordinate buffers with ends offsets
- Error taxonomy and geometry type codes for callers that dispatch on them
"""

from .config import bounds_policy, get_bounds_policy, load_bounds_policy, set_bounds_policy
from .encoding import (
    FlatCoordsCodec,
    read_flat_coords0,
    read_flat_coords1,
    read_flat_coords2,
    read_flat_coords3,
    resolve_byte_order,
    write_flat_coords0,
    write_flat_coords1,
    write_flat_coords2,
    write_flat_coords3,
)
from .errors import (
    GeometryTooLarge,
    UnexpectedType,
    UnknownByteOrder,
    UnknownType,
    UnsupportedByteOrder,
    UnsupportedType,
    WKBError,
)
from .models import (
    BIG_ENDIAN,
    LITTLE_ENDIAN,
    NDR_ID,
    XDR_ID,
    BoundsPolicy,
    ByteOrder,
    FlatCoords2,
    FlatCoords3,
    GeometryType,
    geometry_type,
)

__all__ = [
    "bounds_policy",
    "get_bounds_policy",
    "load_bounds_policy",
    "set_bounds_policy",
    "FlatCoordsCodec",
    "read_flat_coords0",
    "read_flat_coords1",
    "read_flat_coords2",
    "read_flat_coords3",
    "resolve_byte_order",
    "write_flat_coords0",
    "write_flat_coords1",
    "write_flat_coords2",
    "write_flat_coords3",
    "GeometryTooLarge",
    "UnexpectedType",
    "UnknownByteOrder",
    "UnknownType",
    "UnsupportedByteOrder",
    "UnsupportedType",
    "WKBError",
    "BIG_ENDIAN",
    "LITTLE_ENDIAN",
    "NDR_ID",
    "XDR_ID",
    "BoundsPolicy",
    "ByteOrder",
    "FlatCoords2",
    "FlatCoords3",
    "GeometryType",
    "geometry_type",
]

__version__ = "0.1.0"
