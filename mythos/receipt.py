"""Receipt structure and receipt ID computation.

receipt_id = SHA-256(canonical bytes of the receipt without fields 1 and 11),
field 1 being the receipt_id itself and field 11 the signature.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .codec import encode
from .hashing import Hash, HashAlg, sha256
from .value import Bytes, IVarint, List, Map, Text, UVarint

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF


@dataclass(frozen=True)
class AgentID:
    """Signer identity: scheme (1 = Ed25519), public key and optional hint."""

    scheme: int
    key: bytes
    hint: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0 <= self.scheme <= _U8_MAX:
            raise ValueError(f"scheme out of range: {self.scheme}")
        object.__setattr__(self, "key", bytes(self.key))

    def to_value(self) -> Map:
        pairs = [
            (UVarint(1), UVarint(self.scheme)),
            (UVarint(2), Bytes(self.key)),
        ]
        if self.hint is not None:
            pairs.append((UVarint(3), Text(self.hint)))
        return Map(pairs)


@dataclass(frozen=True)
class Receipt:
    """The fields of a receipt that take part in its ID (2 to 10)."""

    tool_id: bytes
    request_hash: bytes
    response_hash: bytes
    idempotency_key: bytes
    signer: AgentID
    time_us: int
    status: int
    evidence: Optional[Tuple[bytes, ...]] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("tool_id", "request_hash", "response_hash", "idempotency_key"):
            object.__setattr__(self, name, bytes(getattr(self, name)))
        if not 0 <= self.status <= _U16_MAX:
            raise ValueError(f"status out of range: {self.status}")
        if self.evidence is not None:
            evidence: Sequence[bytes] = self.evidence
            object.__setattr__(self, "evidence", tuple(bytes(h) for h in evidence))


def _hash_value(digest: bytes) -> Map:
    return Hash(HashAlg.SHA256, digest).to_value()


def canonical_encode_receipt_for_id(receipt: Receipt) -> bytes:
    """Encode the receipt canonically without fields 1 and 11."""
    pairs = [
        (UVarint(2), _hash_value(receipt.tool_id)),
        (UVarint(3), _hash_value(receipt.request_hash)),
        (UVarint(4), _hash_value(receipt.response_hash)),
        (UVarint(5), Bytes(receipt.idempotency_key)),
        (UVarint(6), receipt.signer.to_value()),
        (UVarint(7), IVarint(receipt.time_us)),
        (UVarint(8), UVarint(receipt.status)),
    ]
    if receipt.evidence is not None:
        pairs.append((UVarint(9), List(_hash_value(h) for h in receipt.evidence)))
    if receipt.notes is not None:
        pairs.append((UVarint(10), Text(receipt.notes)))
    return encode(Map(pairs))


def compute_receipt_id(receipt: Receipt) -> bytes:
    """Return the 32-byte receipt ID."""
    return sha256(canonical_encode_receipt_for_id(receipt))