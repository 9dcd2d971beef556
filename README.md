# mythos

The MYTHOS-CAN v0.2 canonical binary encoding, the content-addressing rules
built on it, and `ctvp-runner`, a command that checks these against a
Conformance Test Vector Pack (CTVP). The package needs nothing beyond the
standard library.

## Installing

```
pip install .
```

Run the tests with:

```
pip install ".[test]"
pytest
```

## The encoding

Every value starts with a one-byte type tag (`mythos.value.Tag`):

| Tag    | Type                                     | Class     |
|--------|------------------------------------------|-----------|
| `0x00` | NULL                                     | `Null`    |
| `0x01` | BOOL false                               | `Bool`    |
| `0x02` | BOOL true                                | `Bool`    |
| `0x03` | UVARINT (unsigned 64-bit, LEB128)        | `UVarint` |
| `0x04` | IVARINT (signed 64-bit, zigzag + LEB128) | `IVarint` |
| `0x05` | BYTES                                    | `Bytes`   |
| `0x06` | TEXT (UTF-8)                             | `Text`    |
| `0x07` | LIST                                     | `List`    |
| `0x08` | MAP (keys sorted by their encoded bytes) | `Map`     |

The value classes live in `mythos.value` and are frozen dataclasses that
check their contents when built (for example, `UVarint` only takes integers
from 0 to 2**64 - 1).

`mythos.codec` encodes and decodes:

- `encode(value)` returns the canonical bytes; `encode_to(stream, value)`
  writes them to a binary stream. Map keys are sorted by their encoded bytes,
  and a map with the same key twice raises `DuplicateMapKey`.
- `decode(data)` reads one value from the start of `data` and ignores
  anything after it; `decode_exact(data)` raises `TrailingBytes` if bytes
  remain; `decode_from(stream)` reads one value from a binary stream.
- Decoding rejects unknown tags (`UnknownTag`), invalid UTF-8
  (`InvalidUtf8`), input that ends early (`UnexpectedEof`), varints longer
  than 64 bits (`VarintOverflow`), duplicate map keys (`DuplicateMapKey`)
  and map keys out of order (`NonCanonicalMapOrder`).

All of these errors are subclasses of `mythos.errors.CanError`.

```python
from mythos.codec import encode, decode_exact
from mythos.value import Map, Text, UVarint

value = Map([(Text("b"), UVarint(2)), (Text("a"), UVarint(1))])
data = encode(value)          # keys come out sorted: "a" first, then "b"
assert decode_exact(data) == Map([(Text("a"), UVarint(1)), (Text("b"), UVarint(2))])
```

`mythos.varint` holds the building blocks: `encode_uvarint`,
`decode_uvarint`, `encode_ivarint`, `decode_ivarint`, `zigzag_encode` and
`zigzag_decode`.

## Hashes and identifiers

All digests are returned as 32-byte `bytes`.

- `mythos.hashing`: `sha256(data)`; the `Hash` struct (`Hash.sha256(digest)`,
  `Hash.from_data(data)`, `Hash.to_value()` giving the map
  `{1: alg, 2: digest}`); `HashAlg.SHA256`; and
  `compute_idempotency_id(tool_id, idempotency_key)`, which is
  SHA-256 of the 32-byte tool ID followed by the key.
- `mythos.receipt`: `Receipt`, `AgentID`, `canonical_encode_receipt_for_id`
  and `compute_receipt_id`. The ID is the SHA-256 of the receipt's canonical
  form without field 1 (the ID itself) and field 11 (the signature). An
  absent `evidence` or `notes` gives a different ID from an empty one, and
  the order of `evidence` matters.
- `mythos.merkle`: `parse_merkle_node` reads the version (must be 1), kind
  and payload of a node; `validate_merkle_list_leaf` checks that a payload
  holds 1 to 1024 SHA-256 hashes of 32 bytes each; `cid_from_bytes`.
  Problems raise `MerkleError`.
- `mythos.blob`: `parse_chunked_blob_node`, `validate_chunk_leaf`,
  `compute_chunk_hashes(payload, chunk_size)` and `cid_from_bytes`.
  Problems raise `BlobError`.
- `mythos.dataset`: `compute_dataset_def_id`, the SHA-256 of the definition
  map without field 1 (which must be present), and `cid_from_bytes`.
- `mythos.digests`: `codebook_id_from_bytes` and `packet_sha256`.

## The conformance runner

A pack is a directory with a `manifest.json` that lists its vectors
(`mythos.manifest.PackManifest`, `VectorEntry`). Each vector has an ID such
as `CAN_001` or `MERKLE_001`; its prefix decides which suite checks it
(`mythos.suite.infer_suite_from_id`).

List the vectors, optionally for one suite only:

```
ctvp-runner list --pack path/to/pack
ctvp-runner list --pack path/to/pack --suite merkle
```

Show the files and expected values of one vector:

```
ctvp-runner info --pack path/to/pack --vector CAN_001
```

Verify a suite (`can` by default); `all` runs every vector:

```
ctvp-runner verify --pack path/to/pack --suite all
ctvp-runner verify --pack path/to/pack --vector RECEIPT_001 --fail-fast
ctvp-runner verify --pack path/to/pack --suite all --json
```

The suites are `can`, `receipts`, `ledger`, `merkle`, `blob`, `dataset`,
`codebook` and `wire`. Under `all`, a vector whose prefix matches no suite
fails; it is not skipped. `--fail-fast` stops after the first result that is
not a pass. Text output prints one line per vector and a summary, with error
details on standard error; `--json` prints the totals and every result as
JSON. `verify` exits with status 1 if any vector fails and 0 otherwise.

The same steps are available from Python: `mythos.runner.verify_suite` and
`verify_vector` return `mythos.report.VectorResult` objects, and
`mythos.report.print_results` and `exit_code` report them. The per-suite
checks are in `mythos.verifiers` and `mythos.receipt_check`.

## What it does not do

- It does not verify signatures; the receipt signature (field 11) is only
  left out of the receipt ID.
- The decoder accepts varints that are longer than needed. The runner's
  checks still catch them, because they re-encode every decoded value and
  require the bytes to match.
- JSON files that sit beside a vector's binary are not compared with it:
  the `receipts` suite only requires the JSON to exist and parse, and the
  `ledger` suite reads `tool_id` and `idempotency_key` from it.