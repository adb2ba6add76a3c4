"""Human-readable and JSON views of a verification run."""

from zonecheck.core.models import CheckOutcome, VerifyResult


def describe_failure(outcome: CheckOutcome) -> str:
    """One line attributing a failure to its record type, name and nameserver."""
    reason = outcome.failure.message if outcome.failure else "passed"
    return f"{outcome.record_type} {outcome.name} (at {outcome.nameserver}): {reason}"


class VerifyReport:
    """Generate reports for a verification run."""

    def __init__(self, result: VerifyResult):
        self.result = result

    def summary(self) -> str:
        """Generate a plain-text summary of the run."""
        lines = [
            "=" * 60,
            "ZONE VERIFICATION REPORT",
            "=" * 60,
            f"Started: {self.result.started_at.isoformat()}",
            f"Checks: {self.result.checks}",
            f"Passed: {self.result.passed}",
            f"Failed: {self.result.failed}",
            f"Duration: {self.result.duration_ms:.2f}ms",
            "",
        ]

        if self.result.failures:
            lines.extend(["FAILURES", "-" * 40])
            lines.extend(f"  {describe_failure(o)}" for o in self.result.failures)
            lines.append("")

        lines.append("All checks passed" if self.result.success else "Some checks failed")
        lines.append("=" * 60)
        return "\n".join(lines)

    def to_json(self) -> dict:
        """Return report as JSON-serializable dict."""
        return {
            "summary": {
                "started_at": self.result.started_at.isoformat(),
                "checks": self.result.checks,
                "passed": self.result.passed,
                "failed": self.result.failed,
                "duration_ms": self.result.duration_ms,
                "success": self.result.success,
            },
            "failures": [
                {
                    "type": o.record_type,
                    "name": o.name,
                    "nameserver": o.nameserver,
                    "kind": o.failure.kind.value,
                    "reason": o.failure.message,
                    "details": o.failure.details,
                }
                for o in self.result.failures
            ],
        }
