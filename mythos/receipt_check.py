"""Verification of receipt vectors: strict decoding and receipt ID checks."""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from .checks import VerificationError, compare_bytes
from .codec import decode_exact, encode
from .manifest import VectorEntry
from .receipt import AgentID, Receipt, compute_receipt_id
from .value import Bytes, IVarint, List, Map, Text, UVarint, Value

PathLike = Union[str, Path]

_DIGEST_SIZE = 32
_KEY_SIZE = 32
_U16_MAX = 0xFFFF


@contextmanager
def _context(message: str) -> Iterator[None]:
    """Re-raise any failure as a VerificationError carrying message."""
    try:
        yield
    except Exception as exc:
        raise VerificationError(message) from exc


def _field(value: Map, number: int) -> Optional[Value]:
    key = UVarint(number)
    return next((item for k, item in value.pairs if k == key), None)


def _hash_digest(value: Value, ctx: str) -> bytes:
    """Return the digest of a Hash struct, which must be SHA-256 and 32 bytes."""
    if not isinstance(value, Map):
        raise VerificationError(f"{ctx} must be Hash struct (MAP)")

    alg: Optional[int] = None
    digest: Optional[bytes] = None
    for key, item in value.pairs:
        if key == UVarint(1) and isinstance(item, UVarint):
            alg = item.value
        elif key == UVarint(2) and isinstance(item, Bytes):
            digest = item.value

    if alg != 1:
        raise VerificationError(f"{ctx} Hash must have alg=1 (SHA-256)")
    if digest is None:
        raise VerificationError(f"{ctx} Hash missing bytes")
    if len(digest) != _DIGEST_SIZE:
        raise VerificationError(f"{ctx} Hash bytes must be 32, got {len(digest)}")
    return digest


def _required_hash(fields: Map, number: int) -> bytes:
    value = _field(fields, number)
    if value is None:
        raise VerificationError(f"Missing field {number}")
    return _hash_digest(value, f"Field {number}")


def _agent_id(value: Optional[Value]) -> AgentID:
    if not isinstance(value, Map):
        raise VerificationError("signer must be AgentID MAP")

    scheme: Optional[int] = None
    key: Optional[bytes] = None
    hint: Optional[str] = None
    for field_key, item in value.pairs:
        if field_key == UVarint(1) and isinstance(item, UVarint):
            scheme = item.value & 0xFF
        elif field_key == UVarint(2) and isinstance(item, Bytes):
            key = item.value
        elif field_key == UVarint(3) and isinstance(item, Text):
            hint = item.value

    if key is None:
        raise VerificationError("AgentID missing key")
    if len(key) != _KEY_SIZE:
        raise VerificationError("AgentID key must be 32 bytes")
    if scheme is None:
        raise VerificationError("AgentID missing scheme")
    return AgentID(scheme, key, hint)


def receipt_from_value(value: Value) -> Receipt:
    """Build a Receipt from its decoded form, checking every field."""
    if not isinstance(value, Map):
        raise VerificationError("Receipt must be MAP")

    tool_id = _required_hash(value, 2)
    request_hash = _required_hash(value, 3)
    response_hash = _required_hash(value, 4)

    idempotency_key = _field(value, 5)
    if not isinstance(idempotency_key, Bytes):
        raise VerificationError("idempotency_key must be BYTES")

    signer = _agent_id(_field(value, 6))

    time_value = _field(value, 7)
    if not isinstance(time_value, IVarint):
        raise VerificationError("time_us must be IVARINT")
    if time_value.value < 0:
        raise VerificationError(f"time_us must be non-negative, got {time_value.value}")

    status = _field(value, 8)
    if not isinstance(status, UVarint):
        raise VerificationError("status must be UVARINT")
    if status.value > _U16_MAX:
        raise VerificationError(f"status too large: {status.value}")

    # Absent evidence and an empty list are different receipts.
    evidence_value = _field(value, 9)
    evidence: Optional[tuple] = None
    if isinstance(evidence_value, List):
        evidence = tuple(
            _hash_digest(item, f"Field 9[{index}]")
            for index, item in enumerate(evidence_value.items)
        )
    elif evidence_value is not None:
        raise VerificationError("Field 9 (evidence) must be LIST if present")

    notes_value = _field(value, 10)
    notes: Optional[str] = None
    if isinstance(notes_value, Text):
        notes = notes_value.value
    elif notes_value is not None:
        raise VerificationError("notes must be TEXT")

    return Receipt(
        tool_id=tool_id,
        request_hash=request_hash,
        response_hash=response_hash,
        idempotency_key=idempotency_key.value,
        signer=signer,
        time_us=time_value.value,
        status=status.value,
        evidence=evidence,
        notes=notes,
    )


def verify_receipt_vector(entry: VectorEntry, pack_dir: PathLike) -> None:
    """Check the receipt's canonical encoding and, if expected, its receipt ID."""
    bin_path = entry.bin_path(pack_dir)
    if bin_path is None:
        raise VerificationError(f"No bin file for {entry.id}")
    if not bin_path.exists():
        raise VerificationError(f"Bin file not found: {bin_path}")

    with _context(f"Failed to read bin file: {bin_path}"):
        data = bin_path.read_bytes()

    with _context("Failed to decode receipt bin (strict mode)"):
        decoded = decode_exact(data)
    with _context("Failed to re-encode receipt"):
        re_encoded = encode(decoded)
    with _context("Re-encoded receipt doesn't match original"):
        compare_bytes(data, re_encoded)

    expected_id = entry.expected.get("receipt_id")
    if not isinstance(expected_id, str):
        return

    json_path = entry.resolve_file(pack_dir, "json")
    if json_path is None:
        raise VerificationError("receipt_id expected but no json file in manifest")
    if not json_path.exists():
        raise VerificationError(f"receipt_id expected but JSON missing: {json_path}")
    with _context("JSON parse failed"):
        json.loads(json_path.read_text(encoding="utf-8"))

    computed = compute_receipt_id(receipt_from_value(decoded)).hex()
    if computed != expected_id:
        raise VerificationError(
            f"Receipt ID mismatch:\n  Expected: {expected_id}\n  Computed: {computed}"
        )