"""Running the vectors of a pack and collecting their results."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .manifest import PackManifest, VectorEntry
from .receipt_check import verify_receipt_vector
from .report import VectorResult
from .suite import infer_suite_from_id, is_implemented
from .verifiers import (
    verify_blob_vector,
    verify_can_vector,
    verify_codebook_vector,
    verify_dataset_vector,
    verify_ledger_vector,
    verify_merkle_vector,
    verify_wire_vector,
)

PathLike = Union[str, Path]

_VERIFIERS: Dict[str, Callable[[VectorEntry, PathLike], None]] = {
    "can": verify_can_vector,
    "receipts": verify_receipt_vector,
    "ledger": verify_ledger_vector,
    "merkle": verify_merkle_vector,
    "blob": verify_blob_vector,
    "dataset": verify_dataset_vector,
    "codebook": verify_codebook_vector,
    "wire": verify_wire_vector,
}


def verify_suite(
    manifest: PackManifest,
    pack_dir: PathLike,
    suite: str,
    specific_vector: Optional[str],
    fail_fast: bool,
) -> List[VectorResult]:
    """Verify one vector or every vector of a suite.

    With fail_fast, stops after the first result that is not a pass.
    """
    if specific_vector is not None:
        found = manifest.get_vector(specific_vector)
        vectors = [found] if found is not None else []
    else:
        vectors = manifest.vectors_for_suite(suite)

    results = []
    for entry in vectors:
        result = verify_vector(entry, pack_dir, suite)
        results.append(result)
        if fail_fast and not result.is_pass():
            break
    return results


def verify_vector(entry: VectorEntry, pack_dir: PathLike, suite: str) -> VectorResult:
    """Verify one vector as part of suite; "all" infers the suite from its ID."""
    suite_for_entry = infer_suite_from_id(entry.id) if suite == "all" else suite

    if suite_for_entry == "unknown":
        return VectorResult.failed(
            entry.id,
            entry.description,
            f"Unknown vector prefix '{entry.id}' - update suite routing",
        )

    if not is_implemented(suite_for_entry):
        return VectorResult.skipped(
            entry.id,
            entry.description,
            f"Suite '{suite_for_entry}' not yet implemented",
        )

    verifier = _VERIFIERS.get(suite_for_entry)

    def check() -> None:
        if verifier is None:
            raise RuntimeError(
                f"Suite dispatcher bug: {suite_for_entry} is marked implemented "
                "but has no verifier"
            )
        verifier(entry, pack_dir)

    return VectorResult.from_check(entry.id, entry.description, check)