"""Verification results and how they are reported."""

from __future__ import annotations

import enum
import json
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence


class VectorStatus(enum.Enum):
    """Outcome of checking one vector."""

    PASS = enum.auto()
    FAIL = enum.auto()
    SKIP = enum.auto()

    @property
    def label(self) -> str:
        """The upper-case label used in reports."""
        return self.name


def _describe_error(exc: BaseException) -> str:
    """Render an exception and the chain of causes behind it."""
    parts = []
    current: Optional[BaseException] = exc
    while current is not None:
        parts.append(str(current) or type(current).__name__)
        current = current.__cause__
    return ": ".join(parts)


@dataclass(frozen=True)
class VectorResult:
    """The result of one vector: its id, description, status and message."""

    vector_id: str
    description: str
    status: VectorStatus
    error: Optional[str] = None

    @classmethod
    def passed(cls, vector_id: str, description: str) -> "VectorResult":
        return cls(vector_id, description, VectorStatus.PASS)

    @classmethod
    def failed(cls, vector_id: str, description: str, error: str) -> "VectorResult":
        return cls(vector_id, description, VectorStatus.FAIL, error)

    @classmethod
    def skipped(cls, vector_id: str, description: str, reason: str) -> "VectorResult":
        return cls(vector_id, description, VectorStatus.SKIP, reason)

    @classmethod
    def from_check(
        cls, vector_id: str, description: str, check: Callable[[], object]
    ) -> "VectorResult":
        """Run check; a raised exception makes the result a failure."""
        try:
            check()
        except Exception as exc:
            return cls.failed(vector_id, description, _describe_error(exc))
        return cls.passed(vector_id, description)

    def is_pass(self) -> bool:
        return self.status is VectorStatus.PASS

    def is_fail(self) -> bool:
        return self.status is VectorStatus.FAIL

    def is_skip(self) -> bool:
        return self.status is VectorStatus.SKIP


def print_results(results: Sequence[VectorResult], json_output: bool) -> None:
    """Print results as text or as JSON on standard output."""
    if json_output:
        _print_json(results)
    else:
        _print_text(results)


def _print_text(results: Sequence[VectorResult]) -> None:
    counts = {status: 0 for status in VectorStatus}
    for result in results:
        counts[result.status] += 1
        if result.status is VectorStatus.PASS:
            print(f"✅ PASS {result.vector_id} - {result.description}")
        elif result.status is VectorStatus.FAIL:
            print(f"❌ FAIL {result.vector_id} - {result.description}")
            if result.error is not None:
                print(f"   Error: {result.error}", file=sys.stderr)
        else:
            print(f"⏭️  SKIP {result.vector_id} - {result.description}")
            if result.error is not None:
                print(f"   Reason: {result.error}")

    failed = counts[VectorStatus.FAIL]
    print(
        f"\n📊 Summary: {counts[VectorStatus.PASS]} passed / "
        f"{counts[VectorStatus.SKIP]} skipped / {failed} failed / {len(results)} total"
    )
    if failed:
        print(f"\n❌ {failed} test(s) failed", file=sys.stderr)


def _print_json(results: Sequence[VectorResult]) -> None:
    entries = [
        {
            "id": r.vector_id,
            "description": r.description,
            "status": r.status.label,
            "error": r.error,
        }
        for r in results
    ]
    pass_count = sum(1 for r in results if r.is_pass())
    output = {
        "total": len(results),
        "passed": pass_count,
        "failed": len(entries) - pass_count,
        "results": entries,
    }
    print(json.dumps(output, indent=2, ensure_ascii=False))


def exit_code(results: Iterable[VectorResult]) -> int:
    """Return 1 if any result failed, else 0; skips do not count as failures."""
    for result in results:
        if result.is_fail():
            return 1
    return 0