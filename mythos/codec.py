"""Canonical encoder and strict decoder for values.

Tags: 0x00 NULL, 0x01/0x02 BOOL, 0x03 UVARINT, 0x04 IVARINT (zigzag),
0x05 BYTES, 0x06 TEXT, 0x07 LIST, 0x08 MAP (keys sorted by encoded bytes).
"""

from __future__ import annotations

import io
from typing import Protocol

from .errors import (
    DuplicateMapKey,
    InvalidUtf8,
    NonCanonicalMapOrder,
    TrailingBytes,
    UnexpectedEof,
    UnknownTag,
)
from .value import Bool, Bytes, IVarint, List, Map, Null, Tag, Text, UVarint, Value
from .varint import decode_ivarint, decode_uvarint, encode_ivarint, encode_uvarint


class Reader(Protocol):
    def read(self, size: int = -1) -> bytes: ...


class Writer(Protocol):
    def write(self, data: bytes) -> object: ...


def encode(value: Value) -> bytes:
    """Encode a value to its canonical bytes."""
    out = bytearray()
    _encode_into(out, value)
    return bytes(out)


def encode_to(stream: Writer, value: Value) -> None:
    """Write the canonical encoding of a value to a binary stream."""
    stream.write(encode(value))


def _encode_into(out: bytearray, value: Value) -> None:
    if isinstance(value, Null):
        out.append(Tag.NULL)
    elif isinstance(value, Bool):
        out.append(Tag.BOOL_TRUE if value.value else Tag.BOOL_FALSE)
    elif isinstance(value, UVarint):
        out.append(Tag.UVARINT)
        out += encode_uvarint(value.value)
    elif isinstance(value, IVarint):
        out.append(Tag.IVARINT)
        out += encode_ivarint(value.value)
    elif isinstance(value, Bytes):
        out.append(Tag.BYTES)
        out += encode_uvarint(len(value.value))
        out += value.value
    elif isinstance(value, Text):
        raw = value.value.encode("utf-8")
        out.append(Tag.TEXT)
        out += encode_uvarint(len(raw))
        out += raw
    elif isinstance(value, List):
        out.append(Tag.LIST)
        out += encode_uvarint(len(value.items))
        for item in value.items:
            _encode_into(out, item)
    elif isinstance(value, Map):
        _encode_map(out, value)
    else:
        raise TypeError(f"not an encodable value: {value!r}")


def _encode_map(out: bytearray, value: Map) -> None:
    entries = sorted(
        ((encode(key), item) for key, item in value.pairs), key=lambda e: e[0]
    )
    if any(prev[0] == cur[0] for prev, cur in zip(entries, entries[1:])):
        raise DuplicateMapKey()
    out.append(Tag.MAP)
    out += encode_uvarint(len(entries))
    for key_bytes, item in entries:
        out += key_bytes
        _encode_into(out, item)


def decode(data: bytes) -> Value:
    """Decode one value from the start of data; trailing bytes are ignored."""
    return decode_from(io.BytesIO(bytes(data)))


def decode_exact(data: bytes) -> Value:
    """Decode data that must hold exactly one value."""
    raw = bytes(data)
    stream = io.BytesIO(raw)
    value = decode_from(stream)
    remaining = len(raw) - stream.tell()
    if remaining:
        raise TrailingBytes(remaining)
    return value


def _read_exact(stream: Reader, size: int) -> bytes:
    buf = bytearray()
    while len(buf) < size:
        chunk = stream.read(size - len(buf))
        if not chunk:
            raise UnexpectedEof()
        buf += chunk
    return bytes(buf)


def decode_from(stream: Reader) -> Value:
    """Read one value from a binary stream, enforcing canonical MAP order."""
    tag = _read_exact(stream, 1)[0]

    if tag == Tag.NULL:
        return Null()
    if tag == Tag.BOOL_FALSE:
        return Bool(False)
    if tag == Tag.BOOL_TRUE:
        return Bool(True)
    if tag == Tag.UVARINT:
        return UVarint(decode_uvarint(stream))
    if tag == Tag.IVARINT:
        return IVarint(decode_ivarint(stream))
    if tag == Tag.BYTES:
        return Bytes(_read_exact(stream, decode_uvarint(stream)))
    if tag == Tag.TEXT:
        raw = _read_exact(stream, decode_uvarint(stream))
        try:
            return Text(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise InvalidUtf8() from exc
    if tag == Tag.LIST:
        count = decode_uvarint(stream)
        return List([decode_from(stream) for _ in range(count)])
    if tag == Tag.MAP:
        return _decode_map(stream)
    raise UnknownTag(tag)


def _decode_map(stream: Reader) -> Map:
    count = decode_uvarint(stream)
    pairs = []
    last_key: bytes | None = None
    for _ in range(count):
        key = decode_from(stream)
        key_bytes = encode(key)
        if last_key is not None:
            if key_bytes == last_key:
                raise DuplicateMapKey()
            if key_bytes < last_key:
                raise NonCanonicalMapOrder()
        pairs.append((key, decode_from(stream)))
        last_key = key_bytes
    return Map(pairs)