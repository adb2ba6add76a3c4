"""Core library modules for zone verification."""

from zonecheck.core.models import (
    AnswerRecord,
    CheckFailure,
    CheckOutcome,
    Domain,
    ExpectedRecord,
    Nameserver,
    QueryTarget,
    RecordGroup,
    RecordType,
    VerifyConfig,
    VerifyResult,
)

__all__ = [
    "AnswerRecord",
    "CheckFailure",
    "CheckOutcome",
    "Domain",
    "ExpectedRecord",
    "Nameserver",
    "QueryTarget",
    "RecordGroup",
    "RecordType",
    "VerifyConfig",
    "VerifyResult",
]
