import pytest

from mythos.suite import infer_suite_from_id, is_implemented, prefix_for_suite


@pytest.mark.parametrize(
    "vector_id, suite",
    [
        ("CAN_001", "can"),
        ("CAN_002", "can"),
        ("RECEIPT_001", "receipts"),
        ("LEDGER_001", "ledger"),
        ("MERKLE_001", "merkle"),
        ("BLOB_001", "blob"),
        ("DATASET_001", "dataset"),
        ("CODEBOOK_001", "codebook"),
        ("WIRE_001", "wire"),
        ("UNKNOWN_FOO", "unknown"),
        ("UNKNOWN_FOO_001", "unknown"),
        ("BOGUS_001", "unknown"),
    ],
)
def test_suite_inference(vector_id, suite):
    assert infer_suite_from_id(vector_id) == suite


@pytest.mark.parametrize(
    "suite, prefix",
    [
        ("can", "CAN_"),
        ("receipts", "RECEIPT_"),
        ("ledger", "LEDGER_"),
        ("merkle", "MERKLE_"),
        ("blob", "BLOB_"),
        ("dataset", "DATASET_"),
        ("codebook", "CODEBOOK_"),
        ("wire", "WIRE_"),
        ("unknown", ""),
        ("all", ""),
    ],
)
def test_prefix_for_suite(suite, prefix):
    assert prefix_for_suite(suite) == prefix


@pytest.mark.parametrize(
    "suite", ["can", "receipts", "ledger", "merkle", "blob", "dataset", "codebook", "wire"]
)
def test_known_suites_are_implemented(suite):
    assert is_implemented(suite) is True


@pytest.mark.parametrize("suite", ["unknown", "all", "", "CAN"])
def test_other_suites_are_not_implemented(suite):
    assert is_implemented(suite) is False


def test_unknown_prefix_detection():
    suite = infer_suite_from_id("UNKNOWN_FOO_001")
    assert suite == "unknown"
    assert not is_implemented(suite)


def test_prefix_and_inference_agree():
    for suite in ["can", "receipts", "ledger", "merkle", "blob", "dataset", "codebook", "wire"]:
        assert infer_suite_from_id(prefix_for_suite(suite) + "001") == suite