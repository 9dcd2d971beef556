"""Value types of the canonical, self-describing binary encoding."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

U64_MAX = (1 << 64) - 1
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


class Tag(enum.IntEnum):
    """Type tag byte that starts every encoded value."""

    NULL = 0x00
    BOOL_FALSE = 0x01
    BOOL_TRUE = 0x02
    UVARINT = 0x03
    IVARINT = 0x04
    BYTES = 0x05
    TEXT = 0x06
    LIST = 0x07
    MAP = 0x08


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Null:
    """The NULL value."""


@dataclass(frozen=True)
class Bool:
    """A boolean."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool needs a bool, got {type(self.value).__name__}")


@dataclass(frozen=True)
class UVarint:
    """An unsigned 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        if not _is_int(self.value):
            raise TypeError(f"UVarint needs an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= U64_MAX:
            raise ValueError(f"UVarint out of range: {self.value}")


@dataclass(frozen=True)
class IVarint:
    """A signed 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        if not _is_int(self.value):
            raise TypeError(f"IVarint needs an int, got {type(self.value).__name__}")
        if not I64_MIN <= self.value <= I64_MAX:
            raise ValueError(f"IVarint out of range: {self.value}")


@dataclass(frozen=True)
class Bytes:
    """A raw byte string."""

    value: bytes

    def __post_init__(self) -> None:
        if isinstance(self.value, str) or not isinstance(
            self.value, (bytes, bytearray, memoryview)
        ):
            raise TypeError(f"Bytes needs bytes, got {type(self.value).__name__}")
        object.__setattr__(self, "value", bytes(self.value))


@dataclass(frozen=True)
class Text:
    """A UTF-8 text string."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"Text needs a str, got {type(self.value).__name__}")


@dataclass(frozen=True)
class List:
    """An ordered list of values."""

    items: Tuple["Value", ...] = ()

    def __init__(self, items: Iterable["Value"] = ()) -> None:
        items = tuple(items)
        for item in items:
            if not isinstance(item, VALUE_TYPES):
                raise TypeError(f"List item is not a value: {item!r}")
        object.__setattr__(self, "items", items)


@dataclass(frozen=True)
class Map:
    """Key-value pairs; encoding sorts them by encoded key bytes."""

    pairs: Tuple[Tuple["Value", "Value"], ...] = ()

    def __init__(self, pairs: Iterable[Tuple["Value", "Value"]] = ()) -> None:
        checked = []
        for pair in pairs:
            pair = tuple(pair)
            if len(pair) != 2:
                raise TypeError(f"Map entry must be a (key, value) pair: {pair!r}")
            key, value = pair
            if not isinstance(key, VALUE_TYPES) or not isinstance(value, VALUE_TYPES):
                raise TypeError(f"Map entry holds a non-value: {pair!r}")
            checked.append((key, value))
        object.__setattr__(self, "pairs", tuple(checked))


Value = Union[Null, Bool, UVarint, IVarint, Bytes, Text, List, Map]

VALUE_TYPES = (Null, Bool, UVarint, IVarint, Bytes, Text, List, Map)