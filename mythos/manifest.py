"""The manifest of a conformance vector pack."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .suite import prefix_for_suite

MANIFEST_NAME = "manifest.json"

PathLike = Union[str, Path]


class ManifestError(Exception):
    """The manifest cannot be read or does not have the expected shape."""


def _required_str(data: Mapping[str, Any], key: str, where: str) -> str:
    if key not in data:
        raise ManifestError(f"{where}: missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ManifestError(f"{where}: field '{key}' must be a string")
    return value


def _required_object(data: Mapping[str, Any], key: str, where: str) -> Dict[str, Any]:
    if key not in data:
        raise ManifestError(f"{where}: missing field '{key}'")
    value = data[key]
    if not isinstance(value, dict):
        raise ManifestError(f"{where}: field '{key}' must be an object")
    return dict(value)


@dataclass
class VectorEntry:
    """One vector: its ID ("{SUITE}_{NUMBER}"), files and expected outputs."""

    id: str
    description: str
    rfc_reference: str
    files: Dict[str, str] = field(default_factory=dict)
    expected: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VectorEntry":
        if not isinstance(data, Mapping):
            raise ManifestError("vector entry must be an object")
        where = f"vector {data.get('id', '?')!r}"
        vector_id = _required_str(data, "id", where)
        description = _required_str(data, "description", where)
        rfc_reference = _required_str(data, "rfc_reference", where)
        files = _required_object(data, "files", where)
        for key, path in files.items():
            if not isinstance(path, str):
                raise ManifestError(f"{where}: file '{key}' must be a string")
        expected = _required_object(data, "expected", where)
        return cls(vector_id, description, rfc_reference, files, expected)

    def resolve_file(self, pack_dir: PathLike, key: str) -> Optional[Path]:
        """Return the file under key, relative to the pack directory."""
        relative = self.files.get(key)
        return None if relative is None else Path(pack_dir) / relative

    def bin_path(self, pack_dir: PathLike) -> Optional[Path]:
        return self.resolve_file(pack_dir, "bin")

    def expected_sha256(self) -> Optional[str]:
        """The expected SHA-256 of the bin file, if given as a string."""
        value = self.expected.get("sha256_of_bin")
        return value if isinstance(value, str) else None


@dataclass
class PackManifest:
    """Pack name, version and the vectors it holds."""

    pack: str
    version: str = ""
    vectors: List[VectorEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PackManifest":
        if not isinstance(data, Mapping):
            raise ManifestError("manifest must be an object")
        pack = _required_str(data, "pack", "manifest")
        version = data.get("version", "")
        if not isinstance(version, str):
            raise ManifestError("manifest: field 'version' must be a string")
        vectors = data.get("vectors", [])
        if not isinstance(vectors, list):
            raise ManifestError("manifest: field 'vectors' must be a list")
        return cls(pack, version, [VectorEntry.from_dict(v) for v in vectors])

    @classmethod
    def load(cls, pack_dir: PathLike) -> "PackManifest":
        """Read manifest.json from the pack directory."""
        path = Path(pack_dir) / MANIFEST_NAME
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestError(f"Failed to read manifest at {path}") from exc
        try:
            return cls.from_dict(json.loads(contents))
        except (ValueError, ManifestError) as exc:
            raise ManifestError("Failed to parse manifest.json") from exc

    def vectors_for_suite(self, suite: str) -> List[VectorEntry]:
        """Vectors of one suite; "all" gives every vector, an unknown suite none."""
        if suite == "all":
            return list(self.vectors)
        prefix = prefix_for_suite(suite)
        if not prefix:
            return []
        return [v for v in self.vectors if v.id.startswith(prefix)]

    def get_vector(self, vector_id: str) -> Optional[VectorEntry]:
        return next((v for v in self.vectors if v.id == vector_id), None)