"""Dataset definition IDs and content IDs."""

from __future__ import annotations

from .codec import encode
from .errors import CanError
from .hashing import sha256
from .value import IVarint, Map, UVarint, Value

_ID_KEYS = (UVarint(1), IVarint(1))


def cid_from_bytes(data: bytes) -> bytes:
    """Return the CID of canonical bytes: their SHA-256."""
    return sha256(data)


def compute_dataset_def_id(def_map: Value) -> bytes:
    """Return SHA-256 of the canonical definition without field 1.

    Field 1 holds the ID itself and must be present; both unsigned and
    signed keys of 1 count as field 1.
    """
    if not isinstance(def_map, Map):
        raise ValueError("DatasetDef must be MAP")

    if not any(key in _ID_KEYS for key, _ in def_map.pairs):
        raise ValueError("DatasetDef missing field 1 (dataset_def_id)")

    without_id = Map((key, item) for key, item in def_map.pairs if key not in _ID_KEYS)
    try:
        canonical = encode(without_id)
    except CanError as exc:
        raise ValueError(f"Encoding failed: {exc}") from exc
    return cid_from_bytes(canonical)