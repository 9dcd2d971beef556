import json

import pytest

from mythos.manifest import ManifestError, PackManifest, VectorEntry

SAMPLE = {
    "pack": "ctvp",
    "version": "0.2",
    "vectors": [
        {
            "id": "CAN_001",
            "description": "null value",
            "rfc_reference": "RFC-0001",
            "files": {"bin": "vectors/can/null.bin"},
            "expected": {"sha256_of_bin": "abc"},
        },
        {
            "id": "MERKLE_001",
            "description": "merkle leaf",
            "rfc_reference": "RFC-0004",
            "files": {"leaf_bin": "vectors/merkle/leaf.bin"},
            "expected": {"root_cid": "def"},
        },
        {
            "id": "RECEIPT_001",
            "description": "receipt",
            "rfc_reference": "RFC-0001",
            "files": {"bin": "vectors/receipts/r.bin"},
            "expected": {"sha256_of_bin": 5},
        },
    ],
}


@pytest.fixture
def pack_dir(tmp_path):
    (tmp_path / "manifest.json").write_text(json.dumps(SAMPLE), encoding="utf-8")
    return tmp_path


def test_load_reads_pack(pack_dir):
    manifest = PackManifest.load(pack_dir)
    assert manifest.pack == "ctvp"
    assert manifest.version == "0.2"
    assert [v.id for v in manifest.vectors] == ["CAN_001", "MERKLE_001", "RECEIPT_001"]


def test_vectors_for_suite(pack_dir):
    manifest = PackManifest.load(pack_dir)
    assert [v.id for v in manifest.vectors_for_suite("can")] == ["CAN_001"]
    assert [v.id for v in manifest.vectors_for_suite("receipts")] == ["RECEIPT_001"]
    assert [v.id for v in manifest.vectors_for_suite("all")] == [
        "CAN_001",
        "MERKLE_001",
        "RECEIPT_001",
    ]
    assert manifest.vectors_for_suite("bogus") == []
    assert manifest.vectors_for_suite("wire") == []


def test_get_vector(pack_dir):
    manifest = PackManifest.load(pack_dir)
    assert manifest.get_vector("MERKLE_001").description == "merkle leaf"
    assert manifest.get_vector("MERKLE_999") is None


def test_resolve_file_and_bin_path(pack_dir):
    entry = PackManifest.load(pack_dir).get_vector("CAN_001")
    assert entry.bin_path(pack_dir) == pack_dir / "vectors/can/null.bin"
    assert entry.resolve_file(pack_dir, "bin") == pack_dir / "vectors/can/null.bin"
    assert entry.resolve_file(pack_dir, "json") is None


def test_expected_sha256(pack_dir):
    manifest = PackManifest.load(pack_dir)
    assert manifest.get_vector("CAN_001").expected_sha256() == "abc"
    assert manifest.get_vector("RECEIPT_001").expected_sha256() is None
    assert manifest.get_vector("MERKLE_001").expected_sha256() is None


def test_defaults_for_version_and_vectors():
    manifest = PackManifest.from_dict({"pack": "empty"})
    assert manifest.version == ""
    assert manifest.vectors == []


def test_missing_manifest_file(tmp_path):
    with pytest.raises(ManifestError, match="Failed to read manifest"):
        PackManifest.load(tmp_path)


def test_invalid_json(tmp_path):
    (tmp_path / "manifest.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ManifestError, match="Failed to parse manifest.json"):
        PackManifest.load(tmp_path)


def test_missing_required_vector_field(tmp_path):
    data = {"pack": "p", "vectors": [{"id": "CAN_001", "description": "d", "files": {}, "expected": {}}]}
    (tmp_path / "manifest.json").write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(ManifestError) as info:
        PackManifest.load(tmp_path)
    assert "rfc_reference" in str(info.value.__cause__)


def test_missing_pack_name():
    with pytest.raises(ManifestError, match="pack"):
        PackManifest.from_dict({"vectors": []})


def test_file_paths_must_be_strings():
    data = {
        "id": "CAN_001",
        "description": "d",
        "rfc_reference": "r",
        "files": {"bin": 3},
        "expected": {},
    }
    with pytest.raises(ManifestError, match="must be a string"):
        VectorEntry.from_dict(data)


def test_unknown_fields_are_ignored():
    data = dict(SAMPLE["vectors"][0], extra="ignored")
    entry = VectorEntry.from_dict(data)
    assert entry.id == "CAN_001"
    assert entry.files == {"bin": "vectors/can/null.bin"}