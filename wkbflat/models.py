from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from .errors import UnknownType


# Byte order IDs as written in the first byte of a WKB geometry.
XDR_ID = 0
NDR_ID = 1

UINT32_MAX = (1 << 32) - 1


class GeometryType(IntEnum):
    """WKB geometry type codes. Collaborators dispatch on these."""
    POINT = 1
    LINESTRING = 2
    POLYGON = 3
    MULTIPOINT = 4
    MULTILINESTRING = 5
    MULTIPOLYGON = 6
    GEOMETRYCOLLECTION = 7
    POLYHEDRALSURFACE = 15
    TIN = 16
    TRIANGLE = 17


POINT_ID = int(GeometryType.POINT)
LINESTRING_ID = int(GeometryType.LINESTRING)
POLYGON_ID = int(GeometryType.POLYGON)
MULTIPOINT_ID = int(GeometryType.MULTIPOINT)
MULTILINESTRING_ID = int(GeometryType.MULTILINESTRING)
MULTIPOLYGON_ID = int(GeometryType.MULTIPOLYGON)
GEOMETRYCOLLECTION_ID = int(GeometryType.GEOMETRYCOLLECTION)
POLYHEDRALSURFACE_ID = int(GeometryType.POLYHEDRALSURFACE)
TIN_ID = int(GeometryType.TIN)
TRIANGLE_ID = int(GeometryType.TRIANGLE)


def geometry_type(code: int) -> GeometryType:
    """Map a raw type code to :class:`GeometryType`, raising UnknownType otherwise."""
    try:
        return GeometryType(int(code))
    except ValueError:
        raise UnknownType(code) from None


class ByteOrder(Enum):
    """
    Scalar encoding for one decode/encode call.

    Each member carries the wire id and the numpy dtypes used for the
    uint32 count prefixes and the float64 scalars.
    """
    XDR = (XDR_ID, ">")
    NDR = (NDR_ID, "<")

    def __init__(self, order_id: int, prefix: str):
        self.order_id = order_id
        self.prefix = prefix
        self.uint32 = np.dtype(prefix + "u4")
        self.float64 = np.dtype(prefix + "f8")

    @property
    def is_big_endian(self) -> bool:
        return self is ByteOrder.XDR

    @classmethod
    def native(cls) -> "ByteOrder":
        return cls.NDR if sys.byteorder == "little" else cls.XDR


BIG_ENDIAN = ByteOrder.XDR
LITTLE_ENDIAN = ByteOrder.NDR


# No LineString, LinearRing, or MultiPoint should contain more than 1048576
# coordinates, no Polygon or MultiLineString more than 32768 rings, and no
# MultiPolygon more than 1024 polygons.
DEFAULT_MAX_ELEMENTS: Tuple[int, int, int, int] = (0, 1 << 20, 1 << 15, 1 << 10)


@dataclass(frozen=True)
class BoundsPolicy:
    """
    Maximum element counts indexed by nesting level 0..3.

    Level 0 is a fixed-size tuple read and is never consulted.
    """
    limits: Tuple[int, int, int, int] = DEFAULT_MAX_ELEMENTS

    def __post_init__(self) -> None:
        limits = tuple(self.limits)
        if len(limits) != 4:
            raise ValueError(f"BoundsPolicy expects 4 limits (levels 0..3), got {len(limits)}.")
        checked = []
        for level, value in enumerate(limits):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"Limit for level {level} must be an integer, got {value!r}.")
            value = int(value)
            if not 0 <= value <= UINT32_MAX:
                raise ValueError(f"Limit for level {level} must lie in [0, {UINT32_MAX}], got {value}.")
            checked.append(value)
        object.__setattr__(self, "limits", tuple(checked))

    @classmethod
    def coerce(cls, value: "BoundsPolicy | Sequence[int]") -> "BoundsPolicy":
        if isinstance(value, BoundsPolicy):
            return value
        return cls(tuple(value))

    def limit(self, level: int) -> int:
        if not 0 <= level < len(self.limits):
            raise ValueError(f"No element limit defined for level {level}.")
        return self.limits[level]

    def replace(self, level: int, limit: int) -> "BoundsPolicy":
        """Return a copy with a single level's limit changed."""
        self.limit(level)
        limits = list(self.limits)
        limits[level] = limit
        return BoundsPolicy(tuple(limits))

    def __iter__(self) -> Iterator[int]:
        return iter(self.limits)

    def __getitem__(self, level: int) -> int:
        return self.limits[level]


@dataclass
class FlatCoords2:
    """
    Result of a level-2 read (Polygon, MultiLineString).
    - flat_coords: (N*stride,) float64 array
    - ends:        exclusive end offset of each sub-array in flat_coords
    """
    flat_coords: np.ndarray
    ends: List[int] = field(default_factory=list)

    def __iter__(self):
        return iter((self.flat_coords, self.ends))


@dataclass
class FlatCoords3:
    """
    Result of a level-3 read (MultiPolygon).
    - flat_coords: (N*stride,) float64 array shared by every element
    - endss:       one ends list per level-2 element, absolute offsets
    """
    flat_coords: np.ndarray
    endss: List[List[int]] = field(default_factory=list)

    def __iter__(self):
        return iter((self.flat_coords, self.endss))
