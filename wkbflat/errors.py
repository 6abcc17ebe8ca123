"""Exceptions raised while decoding or encoding WKB coordinate blocks."""
from __future__ import annotations

from enum import Enum
from typing import Any, Tuple


class WKBError(Exception):
    """Base class for every format and resource-limit failure."""

    _fields: Tuple[str, ...] = ()

    def _key(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, name) for name in self._fields)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def __repr__(self) -> str:
        args = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{type(self).__name__}({args})"


class UnknownByteOrder(WKBError):
    """The byte-order identifier is not part of the format."""

    _fields = ("value",)

    def __init__(self, value: int):
        self.value = int(value)
        super().__init__(f"wkb: unknown byte order: {self.value:b}")


class UnsupportedByteOrder(WKBError):
    """The byte order is valid but not handled by this reader."""

    _fields = ("value",)

    def __init__(self, value: int | None = None):
        self.value = value
        super().__init__("wkb: unsupported byte order")


class UnknownType(WKBError):
    _fields = ("code",)

    def __init__(self, code: int):
        self.code = int(code)
        super().__init__(f"wkb: unknown type: {self.code}")


class UnsupportedType(WKBError):
    _fields = ("code",)

    def __init__(self, code: int):
        self.code = int(code)
        super().__init__(f"wkb: unsupported type: {self.code}")


class UnexpectedType(WKBError):
    """A decoded geometry did not have the kind the caller asked for."""

    _fields = ("got", "want")

    def __init__(self, got: Any, want: Any):
        self.got = got
        self.want = want
        super().__init__(f"wkb: got {_type_name(got)}, want {_type_name(want)}")


class GeometryTooLarge(WKBError):
    """
    A length prefix claims more elements than the bounds policy allows.

    Raised before the payload is allocated or read, so a short crafted
    prefix cannot commit large amounts of memory.
    """

    _fields = ("level", "n", "limit")

    def __init__(self, level: int, n: int, limit: int):
        self.level = int(level)
        self.n = int(n)
        self.limit = int(limit)
        super().__init__(
            f"wkb: number of elements at level {self.level} ({self.n}) exceeds {self.limit}"
        )


def _type_name(value: Any) -> str:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, type):
        return value.__name__
    return type(value).__name__


__all__ = [
    "WKBError",
    "UnknownByteOrder",
    "UnsupportedByteOrder",
    "UnknownType",
    "UnsupportedType",
    "UnexpectedType",
    "GeometryTooLarge",
]
