"""LEB128 varints and zigzag mapping for signed integers."""

from __future__ import annotations

from typing import Protocol

from .errors import UnexpectedEof, VarintOverflow
from .value import I64_MAX, I64_MIN, U64_MAX


class Reader(Protocol):
    def read(self, size: int = -1) -> bytes: ...


def encode_uvarint(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as LEB128."""
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"uvarint out of range: {value}")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_uvarint(stream: Reader) -> int:
    """Read one LEB128 varint from a binary stream."""
    result = 0
    shift = 0
    while True:
        chunk = stream.read(1)
        if not chunk:
            raise UnexpectedEof()
        byte = chunk[0]
        if shift >= 64:
            raise VarintOverflow()
        result = (result | ((byte & 0x7F) << shift)) & U64_MAX
        shift += 7
        if not byte & 0x80:
            return result


def zigzag_encode(n: int) -> int:
    """Map a signed 64-bit integer onto an unsigned one: 0, -1, 1, -2 -> 0, 1, 2, 3."""
    if not I64_MIN <= n <= I64_MAX:
        raise ValueError(f"ivarint out of range: {n}")
    return ((n << 1) ^ (n >> 63)) & U64_MAX


def zigzag_decode(zz: int) -> int:
    """Invert zigzag_encode."""
    if not 0 <= zz <= U64_MAX:
        raise ValueError(f"zigzag value out of range: {zz}")
    return (zz >> 1) ^ -(zz & 1)


def encode_ivarint(value: int) -> bytes:
    """Encode a signed 64-bit integer as zigzag plus LEB128."""
    return encode_uvarint(zigzag_encode(value))


def decode_ivarint(stream: Reader) -> int:
    """Read one zigzag LEB128 varint from a binary stream."""
    return zigzag_decode(decode_uvarint(stream))