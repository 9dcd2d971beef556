"""Mapping between vector ID prefixes and suite names."""

from __future__ import annotations

_PREFIXES = {
    "can": "CAN_",
    "receipts": "RECEIPT_",
    "ledger": "LEDGER_",
    "merkle": "MERKLE_",
    "blob": "BLOB_",
    "dataset": "DATASET_",
    "codebook": "CODEBOOK_",
    "wire": "WIRE_",
}

_IMPLEMENTED = frozenset(_PREFIXES)


def infer_suite_from_id(vector_id: str) -> str:
    """Return the suite a vector ID belongs to, or "unknown"."""
    return next(
        (suite for suite, prefix in _PREFIXES.items() if vector_id.startswith(prefix)),
        "unknown",
    )


def prefix_for_suite(suite: str) -> str:
    """Return the vector ID prefix of a suite, or "" for an unknown suite."""
    return _PREFIXES.get(suite, "")


def is_implemented(suite: str) -> bool:
    """Whether vectors of this suite can be verified."""
    return suite in _IMPLEMENTED