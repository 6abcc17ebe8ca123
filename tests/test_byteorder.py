import numpy as np
import pytest

from wkbflat.encoding import coerce_byte_order, resolve_byte_order
from wkbflat.errors import UnknownByteOrder, UnsupportedByteOrder
from wkbflat.models import ByteOrder


def test_resolve_known_ids():
    assert resolve_byte_order(0) is ByteOrder.XDR
    assert resolve_byte_order(1) is ByteOrder.NDR
    assert ByteOrder.XDR.is_big_endian
    assert not ByteOrder.NDR.is_big_endian


def test_resolve_unknown_id():
    with pytest.raises(UnknownByteOrder) as excinfo:
        resolve_byte_order(99)
    assert excinfo.value.value == 99
    assert excinfo.value == UnknownByteOrder(99)
    # identifier is reported in binary, as the wire-format family does
    assert str(excinfo.value) == "wkb: unknown byte order: 1100011"


def test_resolve_known_but_unsupported():
    with pytest.raises(UnsupportedByteOrder) as excinfo:
        resolve_byte_order(0, supported={ByteOrder.NDR})
    assert excinfo.value.value == 0
    assert resolve_byte_order(1, supported={ByteOrder.NDR}) is ByteOrder.NDR


def test_unknown_wins_over_supported_filter():
    with pytest.raises(UnknownByteOrder):
        resolve_byte_order(2, supported={ByteOrder.NDR})


def test_dtypes_follow_order():
    assert ByteOrder.XDR.float64 == np.dtype(">f8")
    assert ByteOrder.NDR.uint32 == np.dtype("<u4")
    assert ByteOrder.native() in (ByteOrder.XDR, ByteOrder.NDR)


def test_coerce_names():
    assert coerce_byte_order("xdr") is ByteOrder.XDR
    assert coerce_byte_order("Little") is ByteOrder.NDR
    assert coerce_byte_order("0") is ByteOrder.XDR
    assert coerce_byte_order(ByteOrder.NDR) is ByteOrder.NDR
    with pytest.raises(ValueError):
        coerce_byte_order("middle")
