import io
import struct

import numpy as np
import pytest

from wkbflat.config import bounds_policy, get_bounds_policy
from wkbflat.encoding import FlatCoordsCodec
from wkbflat.errors import GeometryTooLarge, UnknownByteOrder, UnsupportedByteOrder
from wkbflat.models import BoundsPolicy, ByteOrder


def test_from_order_id_resolves_order():
    codec = FlatCoordsCodec.from_order_id(0, stride=2)
    assert codec.byte_order is ByteOrder.XDR
    assert codec.policy == get_bounds_policy()

    with pytest.raises(UnknownByteOrder):
        FlatCoordsCodec.from_order_id(7, stride=2)
    with pytest.raises(UnsupportedByteOrder):
        FlatCoordsCodec.from_order_id(0, stride=2, supported=[ByteOrder.NDR])


def test_invalid_stride():
    with pytest.raises(ValueError):
        FlatCoordsCodec(byte_order=ByteOrder.NDR, stride=0)


def test_session_round_trip_all_levels():
    codec = FlatCoordsCodec(byte_order=ByteOrder.NDR, stride=3)
    flat = np.linspace(-1.0, 1.0, 18)

    buf = io.BytesIO()
    codec.write0(buf, flat[:3])
    codec.write1(buf, flat)
    codec.write2(buf, flat, [6, 18])
    codec.write3(buf, flat, [[3], [9, 18]])
    buf.seek(0)

    np.testing.assert_array_equal(codec.read0(buf), flat[:3])
    np.testing.assert_array_equal(codec.read1(buf), flat)
    two = codec.read2(buf)
    assert two.ends == [6, 18]
    three = codec.read3(buf)
    assert three.endss == [[3], [9, 18]]
    np.testing.assert_array_equal(three.flat_coords, flat)
    assert buf.read() == b""


def test_session_policy_is_captured_at_construction():
    data = struct.pack("<I", 3) + struct.pack("<3d", 1.0, 2.0, 3.0)
    with bounds_policy((0, 2, 2, 2)):
        strict = FlatCoordsCodec(byte_order=ByteOrder.NDR, stride=1)
    assert strict.policy.limits == (0, 2, 2, 2)
    with pytest.raises(GeometryTooLarge):
        strict.read1(io.BytesIO(data))

    relaxed = FlatCoordsCodec(byte_order=ByteOrder.NDR, stride=1, policy=BoundsPolicy())
    with bounds_policy((0, 1, 1, 1)):
        np.testing.assert_array_equal(relaxed.read1(io.BytesIO(data)), [1.0, 2.0, 3.0])


def test_session_accepts_policy_sequence():
    codec = FlatCoordsCodec.from_order_id(1, stride=2, policy=[0, 4, 4, 4])
    assert isinstance(codec.policy, BoundsPolicy)
    assert codec.policy.limit(1) == 4
