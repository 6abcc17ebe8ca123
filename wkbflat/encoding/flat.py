"""
Flat-coordinate blocks of WKB:
- level 0: `stride` float64 scalars, no prefix (Point)
- level 1: uint32 count, then count*stride scalars (LineString, ring, MultiPoint)
- level 2: uint32 count, then that many level-1 blocks (Polygon, MultiLineString)
- level 3: uint32 count, then that many level-2 blocks (MultiPolygon)

Every count is checked against the bounds policy before anything it
describes is allocated or read.
"""
from __future__ import annotations

from typing import Any, BinaryIO, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import get_bounds_policy
from ..errors import GeometryTooLarge
from ..models import BoundsPolicy, ByteOrder, FlatCoords2, FlatCoords3

MAX_LEVEL = 3

# Nested end offsets: an int at level 1, list[int] at level 2, list[list[int]] at level 3.
Ends = Union[int, List[Any]]


# ---------- Internal utilities ----------

def _check_stride(stride: int) -> int:
    stride = int(stride)
    if stride < 1:
        raise ValueError(f"stride must be a positive integer, got {stride}.")
    return stride


def _read_exact(r: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes, raising EOFError on a short stream."""
    if size == 0:
        return b""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = r.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) != size:
        raise EOFError(f"wkb: unexpected end of stream: wanted {size} bytes, got {len(data)}")
    return data


def _read_count(r: BinaryIO, byte_order: ByteOrder) -> int:
    return int(np.frombuffer(_read_exact(r, 4), dtype=byte_order.uint32)[0])


def _read_scalars(r: BinaryIO, byte_order: ByteOrder, count: int) -> np.ndarray:
    if count == 0:
        return np.empty(0, dtype=np.float64)
    buf = _read_exact(r, 8 * count)
    # byte swap only, so NaN payloads are preserved
    return np.frombuffer(buf, dtype=byte_order.float64).astype(np.float64)


def _write_count(w: BinaryIO, byte_order: ByteOrder, n: int) -> None:
    w.write(np.asarray(n, dtype=byte_order.uint32).tobytes())


def _write_scalars(w: BinaryIO, byte_order: ByteOrder, coords: np.ndarray) -> None:
    w.write(np.asarray(coords, dtype=np.float64).astype(byte_order.float64).tobytes())


def _resolve_policy(policy: Optional[BoundsPolicy | Sequence[int]]) -> BoundsPolicy:
    if policy is None:
        return get_bounds_policy()
    return BoundsPolicy.coerce(policy)


def _last_end(ends: Ends, offset: int) -> int:
    """End offset of a nested ends structure; ``offset`` when it is empty."""
    while isinstance(ends, list):
        if not ends:
            return offset
        ends = ends[-1]
    return int(ends)


def _read_nested(
    r: BinaryIO,
    byte_order: ByteOrder,
    stride: int,
    level: int,
    policy: BoundsPolicy,
    offset: int,
    parts: List[np.ndarray],
) -> Ends:
    """
    Read one bounded block of depth ``level`` (1..3), appending scalar
    arrays to ``parts``. Returns the end offsets relative to the buffer the
    caller is building, starting at ``offset``.
    """
    n = _read_count(r, byte_order)
    limit = policy.limit(level)
    if n > limit:
        raise GeometryTooLarge(level=level, n=n, limit=limit)

    if level == 1:
        coords = _read_scalars(r, byte_order, n * stride)
        parts.append(coords)
        return offset + coords.size

    ends: List[Any] = []
    for _ in range(n):
        sub = _read_nested(r, byte_order, stride, level - 1, policy, offset, parts)
        ends.append(sub)
        offset = _last_end(sub, offset)
    return ends


def _write_nested(
    w: BinaryIO,
    byte_order: ByteOrder,
    flat_coords: np.ndarray,
    ends: Ends,
    stride: int,
    level: int,
    offset: int,
) -> int:
    """Mirror of :func:`_read_nested`; returns the offset after the block."""
    if level == 1:
        end = int(ends)
        coords = flat_coords[offset:end]
        _write_count(w, byte_order, coords.size // stride)
        _write_scalars(w, byte_order, coords)
        return end

    _write_count(w, byte_order, len(ends))
    for sub in ends:
        offset = _write_nested(w, byte_order, flat_coords, sub, stride, level - 1, offset)
    return offset


def _concat(parts: List[np.ndarray]) -> np.ndarray:
    if not parts:
        return np.empty(0, dtype=np.float64)
    return np.concatenate(parts)


# ---------- Public API ----------

def read_flat_coords(
    r: BinaryIO,
    byte_order: ByteOrder,
    stride: int,
    level: int,
    *,
    policy: Optional[BoundsPolicy | Sequence[int]] = None,
) -> Tuple[np.ndarray, Optional[Ends]]:
    """
    Read a block of any depth 0..3.

    Returns ``(flat_coords, ends)`` where ``ends`` is None for level 0, the
    total length for level 1, a list for level 2 and a list of lists for
    level 3. Nothing partial is returned on failure.
    """
    stride = _check_stride(stride)
    if level == 0:
        coords = _read_scalars(r, byte_order, stride)
        return coords, None
    if not 1 <= level <= MAX_LEVEL:
        raise ValueError(f"level must be in 0..{MAX_LEVEL}, got {level}.")
    policy = _resolve_policy(policy)
    parts: List[np.ndarray] = []
    ends = _read_nested(r, byte_order, stride, level, policy, 0, parts)
    return _concat(parts), ends


def write_flat_coords(
    w: BinaryIO,
    byte_order: ByteOrder,
    flat_coords,
    stride: int,
    level: int,
    ends: Optional[Ends] = None,
) -> None:
    """Write a block of any depth 0..3; ``ends`` is required for levels 2 and 3."""
    stride = _check_stride(stride)
    coords = np.asarray(flat_coords, dtype=np.float64).reshape(-1)
    if level == 0:
        _write_scalars(w, byte_order, coords)
        return
    if not 1 <= level <= MAX_LEVEL:
        raise ValueError(f"level must be in 0..{MAX_LEVEL}, got {level}.")
    if level == 1:
        ends = coords.size
    elif ends is None:
        raise ValueError(f"ends are required to write a level-{level} block.")
    _write_nested(w, byte_order, coords, ends, stride, level, 0)


def read_flat_coords0(r: BinaryIO, byte_order: ByteOrder, stride: int) -> np.ndarray:
    """Read exactly ``stride`` scalars with no count prefix."""
    return read_flat_coords(r, byte_order, stride, 0)[0]


def read_flat_coords1(r: BinaryIO, byte_order: ByteOrder, stride: int, *, policy=None) -> np.ndarray:
    """Read a counted sequence of coordinates."""
    return read_flat_coords(r, byte_order, stride, 1, policy=policy)[0]


def read_flat_coords2(r: BinaryIO, byte_order: ByteOrder, stride: int, *, policy=None) -> FlatCoords2:
    """Read a sequence of sequences; ``ends`` marks each sub-array's end."""
    flat_coords, ends = read_flat_coords(r, byte_order, stride, 2, policy=policy)
    return FlatCoords2(flat_coords=flat_coords, ends=ends)


def read_flat_coords3(r: BinaryIO, byte_order: ByteOrder, stride: int, *, policy=None) -> FlatCoords3:
    flat_coords, endss = read_flat_coords(r, byte_order, stride, 3, policy=policy)
    return FlatCoords3(flat_coords=flat_coords, endss=endss)


def write_flat_coords0(w: BinaryIO, byte_order: ByteOrder, coord) -> None:
    coord = np.asarray(coord, dtype=np.float64).reshape(-1)
    write_flat_coords(w, byte_order, coord, max(coord.size, 1), 0)


def write_flat_coords1(w: BinaryIO, byte_order: ByteOrder, flat_coords, stride: int) -> None:
    """Write ``len(flat_coords) // stride`` then the scalars verbatim."""
    write_flat_coords(w, byte_order, flat_coords, stride, 1)


def write_flat_coords2(w: BinaryIO, byte_order: ByteOrder, flat_coords, ends: Sequence[int], stride: int) -> None:
    write_flat_coords(w, byte_order, flat_coords, stride, 2, [int(end) for end in ends])


def write_flat_coords3(
    w: BinaryIO,
    byte_order: ByteOrder,
    flat_coords,
    endss: Sequence[Sequence[int]],
    stride: int,
) -> None:
    write_flat_coords(w, byte_order, flat_coords, stride, 3, [[int(end) for end in ends] for ends in endss])


__all__ = [
    "MAX_LEVEL",
    "read_flat_coords",
    "write_flat_coords",
    "read_flat_coords0",
    "read_flat_coords1",
    "read_flat_coords2",
    "read_flat_coords3",
    "write_flat_coords0",
    "write_flat_coords1",
    "write_flat_coords2",
    "write_flat_coords3",
]
