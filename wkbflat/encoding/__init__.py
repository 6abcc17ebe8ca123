from .byteorder import coerce_byte_order, resolve_byte_order
from .codec import FlatCoordsCodec
from .flat import (
    MAX_LEVEL,
    read_flat_coords,
    read_flat_coords0,
    read_flat_coords1,
    read_flat_coords2,
    read_flat_coords3,
    write_flat_coords,
    write_flat_coords0,
    write_flat_coords1,
    write_flat_coords2,
    write_flat_coords3,
)

__all__ = [
    "coerce_byte_order",
    "resolve_byte_order",
    "FlatCoordsCodec",
    "MAX_LEVEL",
    "read_flat_coords",
    "read_flat_coords0",
    "read_flat_coords1",
    "read_flat_coords2",
    "read_flat_coords3",
    "write_flat_coords",
    "write_flat_coords0",
    "write_flat_coords1",
    "write_flat_coords2",
    "write_flat_coords3",
]
