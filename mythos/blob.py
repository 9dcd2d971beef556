"""Chunked blob nodes: parsing, validation and chunk hashing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .codec import decode_exact
from .errors import CanError
from .hashing import sha256
from .value import Bytes, List, Map, UVarint, Value

VERSION = 1
KIND_CHUNK_LEAF = 3
HASH_SIZE = 32


class BlobError(ValueError):
    """A chunked blob structure is malformed."""


def _invalid(message: str) -> BlobError:
    return BlobError(f"Invalid structure: {message}")


@dataclass(frozen=True)
class ChunkedBlobNode:
    """Outer node: version, kind (3 = chunk leaf) and the nested payload bytes."""

    version: int
    kind: int
    payload: bytes


@dataclass(frozen=True)
class ChunkDesc:
    """One chunk: its SHA-256 digest and its length in bytes."""

    digest: bytes
    length: int


@dataclass(frozen=True)
class ChunkLeaf:
    """Chunk size, the ordered chunk descriptions and the total blob size."""

    chunk_size: int
    chunks: Tuple[ChunkDesc, ...]
    total_size: int


def cid_from_bytes(data: bytes) -> bytes:
    """Return the CID of canonical node bytes: their SHA-256."""
    return sha256(data)


def _field(value: Map, number: int) -> Optional[Value]:
    key = UVarint(number)
    return next((item for k, item in value.pairs if k == key), None)


def parse_chunked_blob_node(value: Value) -> ChunkedBlobNode:
    """Read the node header from a decoded value."""
    if not isinstance(value, Map):
        raise _invalid("Node must be MAP")

    version = _field(value, 1)
    if not isinstance(version, UVarint):
        raise _invalid("Missing version")
    if version.value != VERSION:
        raise BlobError(f"Version must be 1, got {version.value}")

    kind = _field(value, 2)
    if not isinstance(kind, UVarint):
        raise _invalid("Missing kind")

    payload = _field(value, 3)
    if not isinstance(payload, Bytes):
        raise _invalid("Missing payload")

    return ChunkedBlobNode(version.value, kind.value, payload.value)


def validate_chunk_leaf(payload: bytes) -> ChunkLeaf:
    """Decode and check a chunk leaf payload."""
    try:
        decoded = decode_exact(payload)
    except CanError as exc:
        raise _invalid(f"Payload decode: {exc}") from exc

    if not isinstance(decoded, Map):
        raise _invalid("ChunkLeaf must be MAP")

    chunk_size = _field(decoded, 1)
    if not isinstance(chunk_size, UVarint):
        raise _invalid("Missing chunk_size")

    chunk_list = _field(decoded, 2)
    if not isinstance(chunk_list, List):
        raise _invalid("Missing chunks list")

    chunks = []
    for index, item in enumerate(chunk_list.items):
        try:
            chunks.append(_parse_chunk_desc(item))
        except BlobError as exc:
            raise _invalid(f"chunks[{index}]: {exc}") from exc

    total_size = _field(decoded, 3)
    if not isinstance(total_size, UVarint):
        raise _invalid("Missing total_size")

    return ChunkLeaf(chunk_size.value, tuple(chunks), total_size.value)


def _parse_chunk_desc(value: Value) -> ChunkDesc:
    if not isinstance(value, Map):
        raise _invalid("ChunkDesc must be MAP")

    hash_map = _field(value, 1)
    if not isinstance(hash_map, Map):
        raise _invalid("Missing hash")
    digest = _parse_hash_bytes(hash_map)

    length = _field(value, 2)
    if not isinstance(length, UVarint):
        raise _invalid("Missing len")

    return ChunkDesc(digest, length.value)


def _parse_hash_bytes(hash_map: Map) -> bytes:
    alg = _field(hash_map, 1)
    if not isinstance(alg, UVarint):
        raise _invalid("Hash missing alg")
    if alg.value != 1:
        raise _invalid(f"Hash alg must be 1, got {alg.value}")

    digest = _field(hash_map, 2)
    if not isinstance(digest, Bytes):
        raise _invalid("Hash missing bytes")
    if len(digest.value) != HASH_SIZE:
        raise BlobError(f"Hash must be 32 bytes, got {len(digest.value)}")

    return digest.value


def compute_chunk_hashes(payload: bytes, chunk_size: int) -> list[bytes]:
    """Split payload into chunk_size pieces and return the SHA-256 of each."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    data = bytes(payload)
    return [
        sha256(data[start : start + chunk_size])
        for start in range(0, len(data), chunk_size)
    ]