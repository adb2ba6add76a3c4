"""Tests for verification reports."""

import json

from zonecheck.core.errors import ValueMismatchError
from zonecheck.core.models import CheckOutcome, VerifyResult
from zonecheck.core.verify.report import VerifyReport, describe_failure


def failed_outcome() -> CheckOutcome:
    failure = ValueMismatchError(["ab\x00c"], ["a\x00bc"]).to_failure()
    return CheckOutcome(
        nameserver="1.1.1.1:53", name="example.com", record_type="TXT", failure=failure
    )


class TestVerifyReport:
    def test_describe_failure(self):
        line = describe_failure(failed_outcome())
        assert line.startswith("TXT example.com (at 1.1.1.1:53): expected values")

    def test_summary_all_passed(self):
        result = VerifyResult(
            outcomes=[CheckOutcome(nameserver="8.8.8.8:53", name="example.com", record_type="A")]
        )
        summary = VerifyReport(result).summary()
        assert "Checks: 1" in summary
        assert "FAILURES" not in summary
        assert "All checks passed" in summary

    def test_summary_lists_failures(self):
        result = VerifyResult(
            outcomes=[
                CheckOutcome(nameserver="8.8.8.8:53", name="example.com", record_type="A"),
                failed_outcome(),
            ]
        )
        summary = VerifyReport(result).summary()
        assert "Failed: 1" in summary
        assert "TXT example.com (at 1.1.1.1:53)" in summary
        assert "Some checks failed" in summary

    def test_to_json_is_serializable(self):
        result = VerifyResult(outcomes=[failed_outcome()])
        data = json.loads(json.dumps(VerifyReport(result).to_json()))

        assert data["summary"]["success"] is False
        assert data["failures"] == [
            {
                "type": "TXT",
                "name": "example.com",
                "nameserver": "1.1.1.1:53",
                "kind": "value_mismatch",
                "reason": "expected values ['ab\\x00c'], got ['a\\x00bc']",
                "details": {"expected": ["ab\x00c"], "actual": ["a\x00bc"]},
            }
        ]
