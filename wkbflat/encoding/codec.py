from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Collection, Optional, Sequence

import numpy as np

from ..config import get_bounds_policy
from ..models import BoundsPolicy, ByteOrder, FlatCoords2, FlatCoords3
from .byteorder import resolve_byte_order
from .flat import read_flat_coords, write_flat_coords


@dataclass(frozen=True)
class FlatCoordsCodec:
    """
    Flat-coordinate reader/writer bound to one decode session.

    Byte order, stride and bounds policy are fixed at construction. When no
    policy is given, the process-wide one is captured once here, so a later
    :func:`wkbflat.config.set_bounds_policy` does not affect a session in
    progress.
    """
    byte_order: ByteOrder
    stride: int
    policy: BoundsPolicy = field(default_factory=get_bounds_policy)

    def __post_init__(self) -> None:
        if int(self.stride) < 1:
            raise ValueError(f"stride must be a positive integer, got {self.stride}.")
        object.__setattr__(self, "stride", int(self.stride))
        object.__setattr__(self, "policy", BoundsPolicy.coerce(self.policy))

    @classmethod
    def from_order_id(
        cls,
        order_id: int,
        stride: int,
        policy: Optional[BoundsPolicy | Sequence[int]] = None,
        supported: Optional[Collection[ByteOrder]] = None,
    ) -> "FlatCoordsCodec":
        byte_order = resolve_byte_order(order_id, supported=supported)
        if policy is None:
            return cls(byte_order=byte_order, stride=stride)
        return cls(byte_order=byte_order, stride=stride, policy=BoundsPolicy.coerce(policy))

    def read(self, r: BinaryIO, level: int):
        """Read a level 0..3 block; returns ``(flat_coords, ends)``."""
        return read_flat_coords(r, self.byte_order, self.stride, level, policy=self.policy)

    def write(self, w: BinaryIO, level: int, flat_coords, ends=None) -> None:
        write_flat_coords(w, self.byte_order, flat_coords, self.stride, level, ends)

    def read0(self, r: BinaryIO) -> np.ndarray:
        return self.read(r, 0)[0]

    def read1(self, r: BinaryIO) -> np.ndarray:
        return self.read(r, 1)[0]

    def read2(self, r: BinaryIO) -> FlatCoords2:
        flat_coords, ends = self.read(r, 2)
        return FlatCoords2(flat_coords=flat_coords, ends=ends)

    def read3(self, r: BinaryIO) -> FlatCoords3:
        flat_coords, endss = self.read(r, 3)
        return FlatCoords3(flat_coords=flat_coords, endss=endss)

    def write0(self, w: BinaryIO, coord) -> None:
        self.write(w, 0, coord)

    def write1(self, w: BinaryIO, flat_coords) -> None:
        self.write(w, 1, flat_coords)

    def write2(self, w: BinaryIO, flat_coords, ends: Sequence[int]) -> None:
        self.write(w, 2, flat_coords, [int(end) for end in ends])

    def write3(self, w: BinaryIO, flat_coords, endss: Sequence[Sequence[int]]) -> None:
        self.write(w, 3, flat_coords, [[int(end) for end in ends] for ends in endss])


__all__ = ["FlatCoordsCodec"]
