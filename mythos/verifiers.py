"""Verifiers for the individual conformance suites.

Each verifier raises VerificationError (usually chained to its cause) when a
vector does not agree with the implementation, and returns None otherwise.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from . import blob, dataset, merkle
from .checks import VerificationError, compare_bytes, verify_sha256
from .codec import decode_exact, encode
from .digests import codebook_id_from_bytes, packet_sha256
from .hashing import compute_idempotency_id
from .manifest import VectorEntry
from .value import Value

PathLike = Union[str, Path]

_TOOL_ID_SIZE = 32


@contextmanager
def _context(message: str) -> Iterator[None]:
    """Re-raise any failure as a VerificationError carrying message."""
    try:
        yield
    except Exception as exc:
        raise VerificationError(message) from exc


def _expected_str(entry: VectorEntry, key: str) -> Optional[str]:
    value = entry.expected.get(key)
    return value if isinstance(value, str) else None


def _require_expected(entry: VectorEntry, key: str) -> str:
    value = _expected_str(entry, key)
    if value is None:
        raise VerificationError(f"Missing expected {key}")
    return value


def _require_file(entry: VectorEntry, pack_dir: PathLike, key: str) -> Path:
    path = entry.resolve_file(pack_dir, key)
    if path is None:
        raise VerificationError(f"Missing {key} file")
    return path


def _read(path: Path) -> bytes:
    with _context(f"Failed to read {path}"):
        return path.read_bytes()


def _check_digest(label: str, expected_hex: str, computed: bytes) -> None:
    computed_hex = computed.hex()
    if computed_hex != expected_hex:
        raise VerificationError(
            f"{label} mismatch:\n  Expected: {expected_hex}\n  Computed: {computed_hex}"
        )


def _decode(data: bytes, message: str) -> Value:
    with _context(message):
        return decode_exact(data)


def _check_reencoding(data: bytes, value: Value, encode_message: str) -> None:
    with _context(encode_message):
        re_encoded = encode(value)
    with _context("Re-encoded bytes don't match original"):
        compare_bytes(data, re_encoded)


def verify_can_vector(entry: VectorEntry, pack_dir: PathLike) -> None:
    """Check digests of the bin file and that it decodes strictly and re-encodes identically."""
    bin_path = entry.bin_path(pack_dir)
    if bin_path is None:
        raise VerificationError(f"No bin file specified for {entry.id}")
    if not bin_path.exists():
        raise VerificationError(f"Bin file not found: {bin_path}")

    with _context(f"Failed to read bin file: {bin_path}"):
        data = bin_path.read_bytes()

    sha_path = bin_path.with_suffix(".bin.sha256")
    if sha_path.exists():
        if not verify_sha256(data, sha_path.read_text(encoding="utf-8")):
            raise VerificationError("SHA256 mismatch (sibling file)")

    expected_sha = entry.expected_sha256()
    if expected_sha is not None and not verify_sha256(data, expected_sha):
        raise VerificationError("SHA256 mismatch (manifest expected)")

    decoded = _decode(data, "Failed to decode bin file (strict mode)")
    _check_reencoding(data, decoded, "Failed to re-encode value")


def verify_codebook_vector(entry: VectorEntry, pack_dir: PathLike) -> None:
    """Check the codebook ID against the SHA-256 of the entries file."""
    expected_id = _require_expected(entry, "codebook_id")
    entries = _read(_require_file(entry, pack_dir, "entries_bin"))
    _check_digest("Codebook ID", expected_id, codebook_id_from_bytes(entries))


def verify_dataset_vector(entry: VectorEntry, pack_dir: PathLike) -> None:
    """Check whichever of the definition ID and root CIDs the vector provides."""
    expected_def_id = _expected_str(entry, "dataset_def_id")
    def_path = entry.resolve_file(pack_dir, "dataset_def_bin")
    if expected_def_id is not None and def_path is not None:
        decoded = decode_exact(_read(def_path))
        try:
            computed = dataset.compute_dataset_def_id(decoded)
        except ValueError as exc:
            raise VerificationError(str(exc)) from None
        _check_digest("DatasetDef ID", expected_def_id, computed)

    for expected_key, file_key, label in (
        ("corpus_root_cid", "corpus_rootnode_bin", "Corpus root CID mismatch"),
        ("manifest_root_cid", "manifest_rootnode_bin", "Manifest root CID mismatch"),
    ):
        expected_cid = _expected_str(entry, expected_key)
        node_path = entry.resolve_file(pack_dir, file_key)
        if expected_cid is None or node_path is None:
            continue
        if dataset.cid_from_bytes(_read(node_path)).hex() != expected_cid:
            raise VerificationError(label)


def _from_hex(text: str, what: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise VerificationError(f"Invalid hex in {what}") from exc


def verify_ledger_vector(entry: VectorEntry, pack_dir: PathLike) -> None:
    """Check the idempotency ID and the canonical form of register/commit records."""
    expected_idem_id = _expected_str(entry, "idempotency_id")
    if expected_idem_id is None:
        idem_path = entry.resolve_file(pack_dir, "idemid_hex")
        if idem_path is None:
            raise VerificationError(
                f"No expected idempotency_id found for {entry.id}"
            )
        with _context(f"Failed to read idemid hex file: {idem_path}"):
            expected_idem_id = idem_path.read_text(encoding="utf-8").strip()

    json_path = entry.resolve_file(pack_dir, "json")
    if json_path is not None and json_path.exists():
        document = json.loads(json_path.read_text(encoding="utf-8"))
        fields = document if isinstance(document, dict) else {}

        tool_id_hex = fields.get("tool_id")
        if not isinstance(tool_id_hex, str):
            raise VerificationError("Missing tool_id in JSON")
        idem_key_hex = fields.get("idempotency_key")
        if not isinstance(idem_key_hex, str):
            raise VerificationError("Missing idempotency_key in JSON")

        tool_id = _from_hex(tool_id_hex, "tool_id")
        idem_key = _from_hex(idem_key_hex, "idempotency_key")
        if len(tool_id) != _TOOL_ID_SIZE:
            raise VerificationError(
                f"tool_id must be 32 bytes, got {len(tool_id)}"
            )

        computed = compute_idempotency_id(tool_id, idem_key)
        _check_digest("IdempotencyID", expected_idem_id, computed)

    for file_key, name in (("register_bin", "register"), ("commit_bin", "commit")):
        path = entry.resolve_file(pack_dir, file_key)
        if path is None or not path.exists():
            continue
        data = path.read_bytes()
        decoded = _decode(data, f"Failed to decode {name} bin")
        compare_bytes(data, encode(decoded))


def verify_merkle_vector(entry: VectorEntry, pack_dir: PathLike) -> None:
    """Check the root CID, the leaf structure and its canonical encoding."""
    expected_cid = _require_expected(entry, "root_cid")
    leaf_bytes = _read(_require_file(entry, pack_dir, "leaf_bin"))

    _check_digest("Root CID", expected_cid, merkle.cid_from_bytes(leaf_bytes))

    decoded = _decode(leaf_bytes, "Failed to decode leaf binary")
    with _context("Failed to parse MerkleNode"):
        node = merkle.parse_merkle_node(decoded)
    with _context("Failed to validate MerkleListLeaf"):
        merkle.validate_merkle_list_leaf(node.payload)

    _check_reencoding(leaf_bytes, decoded, "Failed to re-encode")


def verify_wire_vector(entry: VectorEntry, pack_dir: PathLike) -> None:
    """Check the SHA-256 of the packet file."""
    expected_sha = _require_expected(entry, "packet_sha256")
    packet = _read(_require_file(entry, pack_dir, "packet_bin"))
    _check_digest("Packet SHA-256", expected_sha, packet_sha256(packet))


def _expected_count(entry: VectorEntry, key: str) -> Optional[int]:
    value = entry.expected.get(key)
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return None


def verify_blob_vector(entry: VectorEntry, pack_dir: PathLike) -> None:
    """Check the root CID, the chunk leaf, its encoding and, if present, the payload chunks."""
    expected_cid = _require_expected(entry, "root_cid")
    node_bytes = _read(_require_file(entry, pack_dir, "rootnode_bin"))

    _check_digest("Root CID", expected_cid, blob.cid_from_bytes(node_bytes))

    decoded = _decode(node_bytes, "Failed to decode rootnode")
    with _context("Failed to parse ChunkedBlobNode"):
        node = blob.parse_chunked_blob_node(decoded)
    with _context("Failed to validate ChunkLeaf"):
        leaf = blob.validate_chunk_leaf(node.payload)

    expected_count = _expected_count(entry, "chunk_count")
    if expected_count is not None and len(leaf.chunks) != expected_count:
        raise VerificationError(
            f"Chunk count mismatch: expected {expected_count}, got {len(leaf.chunks)}"
        )

    _check_reencoding(node_bytes, decoded, "Failed to re-encode")

    payload_path = entry.resolve_file(pack_dir, "payload_bin")
    if payload_path is None or not payload_path.exists():
        return

    computed = blob.compute_chunk_hashes(payload_path.read_bytes(), leaf.chunk_size)
    if len(computed) != len(leaf.chunks):
        raise VerificationError(
            f"Computed {len(computed)} chunks, metadata has {len(leaf.chunks)}"
        )
    for index, (digest, chunk) in enumerate(zip(computed, leaf.chunks)):
        if digest != chunk.digest:
            raise VerificationError(
                f"Chunk {index} hash mismatch:\n"
                f"  Expected: {chunk.digest.hex()}\n"
                f"  Computed: {digest.hex()}"
            )