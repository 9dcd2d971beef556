"""Errors raised while encoding or decoding canonical values."""

from __future__ import annotations


class CanError(Exception):
    """Base class for all canonical encoding errors."""

    default_message = "Canonical encoding error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class VarintOverflow(CanError):
    """A varint carries more than 64 bits."""

    default_message = "Varint overflow"


class InvalidUtf8(CanError):
    """A TEXT value is not valid UTF-8."""

    default_message = "Invalid UTF-8"


class UnexpectedEof(CanError):
    """The input ended in the middle of a value."""

    default_message = "Unexpected end of input"


class UnknownTag(CanError):
    """A value starts with a type tag that is not defined."""

    def __init__(self, tag: int) -> None:
        self.tag = tag
        super().__init__(f"Unknown type tag: {tag:#x}")


class InvalidEncoding(CanError):
    """The bytes do not form a valid encoding."""

    default_message = "Invalid encoding"


class DuplicateMapKey(CanError):
    """A MAP holds the same key twice."""

    default_message = "Duplicate key in MAP"


class NonCanonicalMapOrder(CanError):
    """MAP keys are not sorted by their encoded bytes."""

    default_message = "MAP keys not in canonical order"


class NonCanonicalVarint(CanError):
    """A varint is not in its shortest form."""

    default_message = "Non-canonical varint encoding"


class TrailingBytes(CanError):
    """Bytes remain after a complete value in strict decoding."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Trailing bytes after value: {count} bytes remaining")