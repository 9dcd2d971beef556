"""Merkle list nodes: parsing, validation and content IDs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .codec import decode_exact
from .errors import CanError
from .hashing import sha256
from .value import Bytes, List, Map, UVarint, Value

VERSION = 1
KIND_MERKLE_LIST_LEAF = 1
KIND_MERKLE_LIST_INTERNAL = 2
FANOUT = 1024
SHA256_ALG = 1


class MerkleError(ValueError):
    """A Merkle structure is malformed."""


def _invalid(message: str) -> MerkleError:
    return MerkleError(f"Invalid structure: {message}")


@dataclass(frozen=True)
class MerkleNodeHeader:
    """Outer node: version, kind (1 = list leaf, 2 = list internal) and payload."""

    version: int
    kind: int
    payload: bytes


@dataclass(frozen=True)
class HashValue:
    """A digest with its algorithm id."""

    alg: int
    digest: bytes


@dataclass(frozen=True)
class MerkleListLeaf:
    """An ordered list of hashes."""

    values: Tuple[HashValue, ...]


def cid_from_bytes(data: bytes) -> bytes:
    """Return the CID of canonical node bytes: their SHA-256."""
    return sha256(data)


def _field(value: Map, number: int) -> Optional[Value]:
    key = UVarint(number)
    return next((item for k, item in value.pairs if k == key), None)


def parse_merkle_node(value: Value) -> MerkleNodeHeader:
    """Read the node header from a decoded value."""
    if not isinstance(value, Map):
        raise _invalid("MerkleNode must be MAP")

    version = _field(value, 1)
    if not isinstance(version, UVarint):
        raise _invalid("Missing version field")
    if version.value != VERSION:
        raise MerkleError(f"Version must be 1, got {version.value}")

    kind = _field(value, 2)
    if not isinstance(kind, UVarint):
        raise _invalid("Missing kind field")

    payload = _field(value, 3)
    if not isinstance(payload, Bytes):
        raise _invalid("Missing payload field")

    return MerkleNodeHeader(version.value, kind.value, payload.value)


def validate_merkle_list_leaf(payload: bytes) -> MerkleListLeaf:
    """Decode and check a list leaf payload."""
    try:
        decoded = decode_exact(payload)
    except CanError as exc:
        raise _invalid(f"Payload decode failed: {exc}") from exc

    if not isinstance(decoded, Map):
        raise _invalid("MerkleListLeaf must be MAP")

    values = _field(decoded, 1)
    if not isinstance(values, List):
        raise _invalid("Missing values field")

    count = len(values.items)
    if not 1 <= count <= FANOUT:
        raise MerkleError(f"List must contain 1 to {FANOUT} items, got {count}")

    parsed = []
    for index, item in enumerate(values.items):
        try:
            parsed.append(_parse_hash_value(item))
        except MerkleError as exc:
            raise _invalid(f"values[{index}]: {exc}") from exc
    return MerkleListLeaf(tuple(parsed))


def _parse_hash_value(value: Value) -> HashValue:
    if not isinstance(value, Map):
        raise _invalid("Hash must be MAP")

    alg = _field(value, 1)
    if not isinstance(alg, UVarint):
        raise _invalid("Hash missing alg")
    if alg.value != SHA256_ALG:
        raise MerkleError(f"Hash algorithm must be 1 (SHA-256), got {alg.value}")

    digest = _field(value, 2)
    if not isinstance(digest, Bytes):
        raise _invalid("Hash missing bytes")
    if len(digest.value) != 32:
        raise MerkleError(f"Hash bytes must be 32, got {len(digest.value)}")

    return HashValue(alg.value, digest.value)