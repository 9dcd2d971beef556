"""Low-level checks shared by the vector verifiers."""

from __future__ import annotations

import sys

from .hashing import sha256

_CONTEXT = 16


class VerificationError(Exception):
    """A vector does not agree with what the implementation computes."""


def verify_sha256(data: bytes, expected_hex: str) -> bool:
    """Whether the SHA-256 of data equals the hex digest, ignoring surrounding whitespace."""
    return sha256(data).hex() == expected_hex.strip()


def _hex_window(data: bytes, start: int, end: int) -> str:
    return data[start:end].hex(" ")


def compare_bytes(expected: bytes, actual: bytes) -> None:
    """Raise VerificationError unless the two byte strings are identical.

    On a byte mismatch the offending offset and the bytes around it are
    written to standard error.
    """
    expected = bytes(expected)
    actual = bytes(actual)
    if len(expected) != len(actual):
        raise VerificationError(
            f"Length mismatch: expected {len(expected)} bytes, got {len(actual)} bytes"
        )

    offset = next(
        (i for i, (e, a) in enumerate(zip(expected, actual)) if e != a), None
    )
    if offset is None:
        return

    start = max(offset - _CONTEXT, 0)
    end = min(offset + _CONTEXT, len(expected))
    err = sys.stderr
    print(f"\n❌ Byte mismatch at offset {offset}:", file=err)
    print(f"   Expected: 0x{expected[offset]:02x}", file=err)
    print(f"   Actual:   0x{actual[offset]:02x}", file=err)
    print(f"\nContext (offset {start}..{end}):", file=err)
    print(f"Expected: {_hex_window(expected, start, end)}", file=err)
    print(f"Actual:   {_hex_window(actual, start, end)}", file=err)
    raise VerificationError(f"Byte mismatch at offset {offset}")