"""SHA-256 hashing, self-describing hash values and idempotency IDs."""

from __future__ import annotations

import enum
import hashlib
from dataclasses import dataclass

from .value import Bytes, Map, UVarint

DIGEST_SIZE = 32


class HashAlg(enum.IntEnum):
    """Hash algorithm identifiers."""

    SHA256 = 1


def sha256(data: bytes) -> bytes:
    """Return the 32-byte SHA-256 digest of data."""
    return hashlib.sha256(bytes(data)).digest()


@dataclass(frozen=True)
class Hash:
    """A digest together with the algorithm that produced it.

    Encodes as a MAP: 1 -> algorithm id, 2 -> digest bytes.
    """

    alg: HashAlg
    digest: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "alg", HashAlg(self.alg))
        object.__setattr__(self, "digest", bytes(self.digest))

    @classmethod
    def sha256(cls, digest: bytes) -> "Hash":
        """Wrap an existing 32-byte SHA-256 digest."""
        digest = bytes(digest)
        if len(digest) != DIGEST_SIZE:
            raise ValueError(f"SHA-256 digest must be 32 bytes, got {len(digest)}")
        return cls(HashAlg.SHA256, digest)

    @classmethod
    def from_data(cls, data: bytes) -> "Hash":
        """Hash data with SHA-256."""
        return cls(HashAlg.SHA256, sha256(data))

    def __bytes__(self) -> bytes:
        return self.digest

    def to_value(self) -> Map:
        """Return the canonical value form of this hash."""
        return Map(
            [
                (UVarint(1), UVarint(int(self.alg))),
                (UVarint(2), Bytes(self.digest)),
            ]
        )


def compute_idempotency_id(tool_id: bytes, idempotency_key: bytes) -> bytes:
    """Return SHA-256(tool_id || idempotency_key).

    tool_id is the bare 32-byte digest of the tool's hash, not its encoding.
    """
    tool_id = bytes(tool_id)
    if len(tool_id) != DIGEST_SIZE:
        raise ValueError(f"tool_id must be 32 bytes, got {len(tool_id)}")
    return sha256(tool_id + bytes(idempotency_key))