"""Plain SHA-256 identifiers for codebooks and wire packets."""

from __future__ import annotations

from .hashing import sha256


def codebook_id_from_bytes(data: bytes) -> bytes:
    """Return the codebook ID: SHA-256 of its canonical entry bytes."""
    return sha256(data)


def packet_sha256(data: bytes) -> bytes:
    """Return the SHA-256 of a wire packet."""
    return sha256(data)