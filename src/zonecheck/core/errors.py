"""Errors raised while checking a record group against a nameserver."""

from typing import Any

from zonecheck.core.models import CheckFailure, FailureKind


class CheckError(Exception):
    """Base class for failures local to a single check."""

    kind: FailureKind = FailureKind.INTERNAL

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_failure(self) -> CheckFailure:
        return CheckFailure(kind=self.kind, message=self.message, details=self.details)


# ============================================================================
# Query Errors
# ============================================================================


class QueryError(CheckError):
    """The nameserver could not be asked, or refused to answer."""


class TransportError(QueryError):
    kind = FailureKind.TRANSPORT


class EmptyResponseError(QueryError):
    kind = FailureKind.EMPTY_RESPONSE

    def __init__(self):
        super().__init__("empty response")


class NonSuccessRcodeError(QueryError):
    kind = FailureKind.NON_SUCCESS_RCODE

    def __init__(self, rcode: str):
        super().__init__(f"non-success response {rcode}", rcode=rcode)
        self.rcode = rcode


# ============================================================================
# Validation Errors
# ============================================================================


class RecordValidationError(CheckError):
    """The answer does not match the declared records."""


class CountMismatchError(RecordValidationError):
    kind = FailureKind.COUNT_MISMATCH

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"expected {expected} records, got {actual}", expected=expected, actual=actual
        )


class TTLExceededError(RecordValidationError):
    kind = FailureKind.TTL_EXCEEDED

    def __init__(self, ceiling: int, actual: int):
        super().__init__(f"expected ttl {ceiling}, got {actual}", ceiling=ceiling, actual=actual)


class WrongTypeError(RecordValidationError):
    kind = FailureKind.WRONG_TYPE

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f"expected {expected} record, got {actual}", expected=expected, actual=actual
        )


class ValueMismatchError(RecordValidationError):
    kind = FailureKind.VALUE_MISMATCH

    def __init__(self, expected: list[Any], actual: list[Any]):
        super().__init__(
            f"expected values {expected}, got {actual}", expected=expected, actual=actual
        )


class UnsupportedTypeError(RecordValidationError):
    kind = FailureKind.UNSUPPORTED_TYPE

    def __init__(self, record_type: str):
        super().__init__(f"unsupported record type {record_type}", record_type=record_type)


# ============================================================================
# Input Errors
# ============================================================================


class InputError(Exception):
    """The expected-record document could not be read or parsed."""
