import json

from mythos.report import VectorResult, VectorStatus, exit_code, print_results


def _mixed():
    return [
        VectorResult.passed("T1", "Test"),
        VectorResult.skipped("T2", "Test", "Not impl"),
        VectorResult.failed("T3", "Test", "Mismatch"),
    ]


def test_exit_code_passes_and_skips():
    results = [
        VectorResult.passed("T1", "Test"),
        VectorResult.skipped("T2", "Test", "Not impl"),
    ]
    assert exit_code(results) == 0


def test_exit_code_with_failure():
    results = [
        VectorResult.passed("T1", "Test"),
        VectorResult.failed("T2", "Test", "Mismatch"),
    ]
    assert exit_code(results) == 1


def test_exit_code_unknown_prefix_failure():
    results = [VectorResult.failed("UNKNOWN_001", "Test", "Unknown prefix")]
    assert exit_code(results) == 1


def test_exit_code_empty():
    assert exit_code([]) == 0


def test_result_status_semantics():
    passed = VectorResult.passed("T1", "Test")
    assert passed.is_pass()
    assert not passed.is_fail()
    assert passed.error is None

    failed = VectorResult.failed("T2", "Test", "Error")
    assert failed.is_fail()
    assert not failed.is_pass()
    assert failed.error == "Error"

    skipped = VectorResult.skipped("T3", "Test", "Not impl")
    assert skipped.is_skip()
    assert not skipped.is_fail()
    assert skipped.status is VectorStatus.SKIP


def test_from_check_success():
    result = VectorResult.from_check("T1", "Test", lambda: None)
    assert result.status is VectorStatus.PASS
    assert result.error is None


def test_from_check_failure():
    def check():
        raise ValueError("boom")

    result = VectorResult.from_check("T1", "Test", check)
    assert result.status is VectorStatus.FAIL
    assert result.error == "boom"


def test_from_check_includes_cause_chain():
    def check():
        try:
            raise ValueError("inner")
        except ValueError as exc:
            raise RuntimeError("outer") from exc

    result = VectorResult.from_check("T1", "Test", check)
    assert result.error == "outer: inner"


def test_print_text_results(capsys):
    print_results(_mixed(), False)
    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[0] == "✅ PASS T1 - Test"
    assert lines[1] == "⏭️  SKIP T2 - Test"
    assert lines[2] == "   Reason: Not impl"
    assert lines[3] == "❌ FAIL T3 - Test"
    assert "📊 Summary: 1 passed / 1 skipped / 1 failed / 3 total" in lines
    assert "   Error: Mismatch" in captured.err
    assert "❌ 1 test(s) failed" in captured.err


def test_print_text_all_pass_has_no_errors(capsys):
    print_results([VectorResult.passed("T1", "Test")], False)
    captured = capsys.readouterr()
    assert "📊 Summary: 1 passed / 0 skipped / 0 failed / 1 total" in captured.out
    assert captured.err == ""


def test_print_json_results(capsys):
    print_results(_mixed(), True)
    output = json.loads(capsys.readouterr().out)
    assert output == {
        "total": 3,
        "passed": 1,
        "failed": 2,
        "results": [
            {"id": "T1", "description": "Test", "status": "PASS", "error": None},
            {"id": "T2", "description": "Test", "status": "SKIP", "error": "Not impl"},
            {"id": "T3", "description": "Test", "status": "FAIL", "error": "Mismatch"},
        ],
    }