"""Command line for running conformance vector packs."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from .manifest import ManifestError, PackManifest
from .report import exit_code, print_results
from .runner import verify_suite


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctvp-runner",
        description="Conformance Test Vector Pack Runner",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    verify = commands.add_parser("verify", help="Verify implementation against a pack")
    verify.add_argument("--pack", type=Path, required=True, help="Path to the pack directory")
    verify.add_argument(
        "--suite",
        default="can",
        help="Test suite to run (can, receipts, ledger, merkle, all)",
    )
    verify.add_argument("--vector", help="Run specific vector only")
    verify.add_argument("--fail-fast", action="store_true", help="Stop on first failure")
    verify.add_argument("--json", action="store_true", help="Output as JSON")

    listing = commands.add_parser("list", help="List available test vectors")
    listing.add_argument("--pack", type=Path, required=True, help="Path to the pack directory")
    listing.add_argument("--suite", help="Filter by suite")

    info = commands.add_parser("info", help="Show detailed info about a vector")
    info.add_argument("--pack", type=Path, required=True, help="Path to the pack directory")
    info.add_argument("--vector", required=True, help="Vector ID")

    return parser


def _report_error(exc: BaseException) -> int:
    parts = []
    current: Optional[BaseException] = exc
    while current is not None:
        parts.append(str(current) or type(current).__name__)
        current = current.__cause__
    print(f"Error: {': '.join(parts)}", file=sys.stderr)
    return 1


class _CommandError(Exception):
    pass


def _run_verify(args: argparse.Namespace) -> int:
    try:
        manifest = PackManifest.load(args.pack)
    except ManifestError as exc:
        raise _CommandError(f"Failed to load manifest from {args.pack}") from exc
    results = verify_suite(manifest, args.pack, args.suite, args.vector, args.fail_fast)
    print_results(results, args.json)
    return exit_code(results)


def _run_list(args: argparse.Namespace) -> int:
    manifest = PackManifest.load(args.pack)
    vectors = (
        manifest.vectors_for_suite(args.suite)
        if args.suite is not None
        else manifest.vectors
    )
    for vector in vectors:
        print(f"{vector.id} - {vector.description}")
    return 0


def _run_info(args: argparse.Namespace) -> int:
    manifest = PackManifest.load(args.pack)
    entry = manifest.get_vector(args.vector)
    if entry is None:
        raise _CommandError(f"Vector {args.vector} not found")
    print(f"ID: {entry.id}")
    print(f"Description: {entry.description}")
    print(f"RFC: {entry.rfc_reference}")
    print("\nFiles:")
    for key, path in entry.files.items():
        print(f"  {key}: {path}")
    print("\nExpected values:")
    for key, value in entry.expected.items():
        print(f"  {key}: {json.dumps(value, ensure_ascii=False)}")
    return 0


_COMMANDS = {"verify": _run_verify, "list": _run_list, "info": _run_info}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line and return the process exit code."""
    args = _build_parser().parse_args(argv)
    try:
        return _COMMANDS[args.command](args)
    except (ManifestError, _CommandError) as exc:
        return _report_error(exc)


if __name__ == "__main__":
    sys.exit(main())