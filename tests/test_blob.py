import re

import pytest

from mythos.blob import (
    BlobError,
    cid_from_bytes,
    compute_chunk_hashes,
    parse_chunked_blob_node,
    validate_chunk_leaf,
)
from mythos.codec import decode_exact, encode
from mythos.hashing import sha256
from mythos.value import Bytes, List, Map, Text, UVarint

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

PAYLOAD = bytes(i % 251 for i in range(10025))


def _hash_value(digest, alg=1):
    return Map([(UVarint(1), UVarint(alg)), (UVarint(2), Bytes(digest))])


def _chunk_desc(digest, length, alg=1):
    return Map([(UVarint(1), _hash_value(digest, alg)), (UVarint(2), UVarint(length))])


def _leaf(chunk_size, chunks, total_size):
    return Map(
        [
            (UVarint(1), UVarint(chunk_size)),
            (UVarint(2), List(chunks)),
            (UVarint(3), UVarint(total_size)),
        ]
    )


def _node(payload, version=1, kind=3):
    return Map(
        [
            (UVarint(1), UVarint(version)),
            (UVarint(2), UVarint(kind)),
            (UVarint(3), Bytes(payload)),
        ]
    )


def _without(value, number):
    return Map([(k, v) for k, v in value.pairs if k != UVarint(number)])


def test_cid_of_empty_bytes():
    assert cid_from_bytes(b"").hex() == EMPTY_SHA256


def test_cid_is_sha256_of_node_bytes():
    data = encode(_node(b"abc"))
    assert cid_from_bytes(data) == sha256(data)


def test_parse_node_fields():
    node = parse_chunked_blob_node(decode_exact(encode(_node(b"abc"))))
    assert node.version == 1
    assert node.kind == 3
    assert node.payload == b"abc"


def test_parse_node_does_not_check_kind():
    node = parse_chunked_blob_node(_node(b"", kind=5))
    assert node.kind == 5


def test_parse_node_rejects_wrong_version():
    with pytest.raises(BlobError, match="Version must be 1, got 2"):
        parse_chunked_blob_node(_node(b"", version=2))


def test_parse_node_requires_map():
    with pytest.raises(BlobError, match="Node must be MAP"):
        parse_chunked_blob_node(List([]))


@pytest.mark.parametrize(
    "number, message",
    [(1, "Missing version"), (2, "Missing kind"), (3, "Missing payload")],
)
def test_parse_node_missing_fields(number, message):
    with pytest.raises(BlobError, match=message):
        parse_chunked_blob_node(_without(_node(b"x"), number))


def test_parse_node_payload_must_be_bytes():
    node = Map(
        [
            (UVarint(1), UVarint(1)),
            (UVarint(2), UVarint(3)),
            (UVarint(3), Text("x")),
        ]
    )
    with pytest.raises(BlobError, match="Missing payload"):
        parse_chunked_blob_node(node)


def test_validate_chunk_leaf_reads_chunks():
    hashes = compute_chunk_hashes(PAYLOAD, 4096)
    lengths = [4096, 4096, 1833]
    chunks = [_chunk_desc(h, n) for h, n in zip(hashes, lengths)]
    leaf = validate_chunk_leaf(encode(_leaf(4096, chunks, 10025)))
    assert leaf.chunk_size == 4096
    assert leaf.total_size == 10025
    assert [c.length for c in leaf.chunks] == lengths
    assert [c.digest for c in leaf.chunks] == hashes


def test_node_round_trip_through_leaf():
    chunks = [_chunk_desc(sha256(b"a"), 1)]
    node_bytes = encode(_node(encode(_leaf(4096, chunks, 1))))
    decoded = decode_exact(node_bytes)
    node = parse_chunked_blob_node(decoded)
    leaf = validate_chunk_leaf(node.payload)
    assert encode(decoded) == node_bytes
    assert leaf.chunks[0].digest == sha256(b"a")


def test_validate_chunk_leaf_rejects_trailing_bytes():
    data = encode(_leaf(4096, [], 0)) + b"\x00"
    with pytest.raises(BlobError, match="Payload decode"):
        validate_chunk_leaf(data)


def test_validate_chunk_leaf_requires_map():
    with pytest.raises(BlobError, match="ChunkLeaf must be MAP"):
        validate_chunk_leaf(encode(List([])))


@pytest.mark.parametrize(
    "number, message",
    [(1, "Missing chunk_size"), (2, "Missing chunks list"), (3, "Missing total_size")],
)
def test_validate_chunk_leaf_missing_fields(number, message):
    leaf = _without(_leaf(4096, [], 0), number)
    with pytest.raises(BlobError, match=message):
        validate_chunk_leaf(encode(leaf))


def test_validate_chunk_leaf_rejects_short_hash():
    leaf = _leaf(4096, [_chunk_desc(b"\x01" * 31, 1)], 1)
    with pytest.raises(BlobError, match=re.escape("chunks[0]: Hash must be 32 bytes, got 31")):
        validate_chunk_leaf(encode(leaf))


def test_validate_chunk_leaf_rejects_other_alg():
    leaf = _leaf(4096, [_chunk_desc(b"\x01" * 32, 1, alg=2)], 1)
    with pytest.raises(BlobError, match=re.escape("chunks[0]: Invalid structure: Hash alg must be 1, got 2")):
        validate_chunk_leaf(encode(leaf))


def test_validate_chunk_leaf_rejects_non_map_desc():
    leaf = _leaf(4096, [UVarint(1)], 1)
    with pytest.raises(BlobError, match=re.escape("chunks[0]: Invalid structure: ChunkDesc must be MAP")):
        validate_chunk_leaf(encode(leaf))


def test_validate_chunk_leaf_rejects_missing_len():
    desc = Map([(UVarint(1), _hash_value(b"\x01" * 32))])
    leaf = _leaf(4096, [desc], 1)
    with pytest.raises(BlobError, match="Missing len"):
        validate_chunk_leaf(encode(leaf))


def test_compute_chunk_hashes_splits_payload():
    hashes = compute_chunk_hashes(PAYLOAD, 4096)
    assert len(hashes) == 3
    assert hashes[0] == sha256(PAYLOAD[:4096])
    assert hashes[2] == sha256(PAYLOAD[8192:])


def test_compute_chunk_hashes_empty_payload():
    assert compute_chunk_hashes(b"", 4096) == []


def test_compute_chunk_hashes_single_short_chunk():
    assert compute_chunk_hashes(b"hello", 4096) == [sha256(b"hello")]


def test_compute_chunk_hashes_rejects_zero_chunk_size():
    with pytest.raises(ValueError):
        compute_chunk_hashes(b"abc", 0)