from __future__ import annotations

from typing import Collection, Dict, Optional

from ..errors import UnknownByteOrder, UnsupportedByteOrder
from ..models import ByteOrder

_BY_ID: Dict[int, ByteOrder] = {order.order_id: order for order in ByteOrder}


def resolve_byte_order(order_id: int, supported: Optional[Collection[ByteOrder]] = None) -> ByteOrder:
    """
    Map a one-byte order identifier to a :class:`ByteOrder`.

    0 is XDR (big-endian), 1 is NDR (little-endian). Any other id raises
    UnknownByteOrder. When ``supported`` is given, a known order outside it
    raises UnsupportedByteOrder.
    """
    order = _BY_ID.get(int(order_id))
    if order is None:
        raise UnknownByteOrder(order_id)
    if supported is not None and order not in supported:
        raise UnsupportedByteOrder(order_id)
    return order


def coerce_byte_order(value: ByteOrder | int | str) -> ByteOrder:
    """Accept a ByteOrder, a wire id, or a name ("xdr", "ndr", "big", "little")."""
    if isinstance(value, ByteOrder):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key in {"xdr", "big", "be", ">"}:
            return ByteOrder.XDR
        if key in {"ndr", "little", "le", "<"}:
            return ByteOrder.NDR
        if key.isdigit():
            return resolve_byte_order(int(key))
        raise ValueError(f"Unrecognized byte order name: {value!r}")
    return resolve_byte_order(value)


__all__ = ["resolve_byte_order", "coerce_byte_order"]
