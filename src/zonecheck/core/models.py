"""Core data models for zonecheck."""

import ipaddress
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RecordType(str, Enum):
    """Record types the verifier knows how to compare."""

    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    CAA = "CAA"
    MX = "MX"
    TXT = "TXT"


class FailureKind(str, Enum):
    """Reasons a single check can fail."""

    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"
    NON_SUCCESS_RCODE = "non_success_rcode"
    COUNT_MISMATCH = "count_mismatch"
    TTL_EXCEEDED = "ttl_exceeded"
    WRONG_TYPE = "wrong_type"
    VALUE_MISMATCH = "value_mismatch"
    UNSUPPORTED_TYPE = "unsupported_type"
    INTERNAL = "internal"


# ============================================================================
# Record Models
# ============================================================================


class RecordData(BaseModel):
    """Payload fields shared by declared records and live answers.

    Only the fields relevant to ``record_type`` are ever read; the rest are
    ignored, whatever they contain.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    record_type: str = Field(..., alias="type", description="Record type, upper case")
    target: str = Field(default="", description="Address, hostname or CAA value")
    caa_tag: str = Field(default="", alias="caatag")
    mx_preference: int = Field(default=0, alias="mxpreference")
    txt_strings: tuple[str, ...] = Field(default=(), alias="txtstrings")

    @field_validator("record_type", mode="before")
    @classmethod
    def _upper_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # Absent and null payload fields both mean "not set"
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ExpectedRecord(RecordData):
    """One declared DNS record."""

    name: str = Field(..., description="Relative label, '@' for the apex")
    ttl: int = Field(default=0, ge=0, description="Maximum acceptable TTL in seconds")


class AnswerRecord(RecordData):
    """One record returned by a nameserver."""

    ttl: int = Field(..., ge=0)


class Domain(BaseModel):
    """A zone and its declared records."""

    name: str
    records: list[ExpectedRecord] = Field(default_factory=list)

    @field_validator("records", mode="before")
    @classmethod
    def _null_records(cls, value: Any) -> Any:
        return [] if value is None else value


class RecordGroup(BaseModel):
    """All declared records sharing one (absolute name, type) within a domain."""

    model_config = ConfigDict(frozen=True)

    domain: str
    name: str = Field(..., description="Absolute name")
    record_type: str
    records: tuple[ExpectedRecord, ...] = Field(..., min_length=1)

    @property
    def ttl_ceiling(self) -> int:
        # First member wins when ceilings diverge
        return self.records[0].ttl

    def __len__(self) -> int:
        return len(self.records)


# ============================================================================
# Query Models
# ============================================================================


class Nameserver(BaseModel):
    """A DNS server endpoint to check against."""

    model_config = ConfigDict(frozen=True)

    host: str
    port: int = Field(default=53, ge=1, le=65535)

    @field_validator("host")
    @classmethod
    def _ip_literal(cls, value: str) -> str:
        try:
            return str(ipaddress.ip_address(value.strip()))
        except ValueError as e:
            raise ValueError(f"nameserver host must be an IP address, got {value!r}") from e

    @classmethod
    def parse(cls, text: str) -> "Nameserver":
        """Parse ``host``, ``host:port`` or ``[v6host]:port``."""
        text = text.strip()
        if text.startswith("["):
            host, sep, rest = text[1:].partition("]")
            if not sep:
                raise ValueError(f"unterminated IPv6 literal in {text!r}")
            port = rest[1:] if rest.startswith(":") else ""
        elif text.count(":") == 1:
            host, port = text.split(":")
        else:
            # Bare IPv4 or bare IPv6
            host, port = text, ""

        if not port:
            return cls(host=host)
        if not port.isdigit():
            raise ValueError(f"invalid port in {text!r}")
        return cls(host=host, port=int(port))

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class QueryTarget(BaseModel):
    """The unit of one network query."""

    model_config = ConfigDict(frozen=True)

    nameserver: Nameserver
    name: str
    record_type: str


# ============================================================================
# Outcome Models
# ============================================================================


class CheckFailure(BaseModel):
    """Structured reason for a failed check."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class CheckOutcome(BaseModel):
    """Result of validating one RecordGroup against one nameserver."""

    model_config = ConfigDict(frozen=True)

    nameserver: str
    name: str
    record_type: str
    failure: CheckFailure | None = None

    @property
    def passed(self) -> bool:
        return self.failure is None


class VerifyResult(BaseModel):
    """Every outcome from one verification run."""

    outcomes: list[CheckOutcome] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.utcnow)
    duration_ms: float = 0.0

    @property
    def checks(self) -> int:
        return len(self.outcomes)

    @property
    def failures(self) -> list[CheckOutcome]:
        return [o for o in self.outcomes if not o.passed]

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def passed(self) -> int:
        return self.checks - self.failed

    @property
    def success(self) -> bool:
        return self.failed == 0


# ============================================================================
# Configuration Models
# ============================================================================


DEFAULT_NAMESERVERS = ("8.8.8.8:53", "1.1.1.1:53")


class VerifyConfig(BaseModel):
    """Settings for one verification run."""

    nameservers: list[Nameserver] = Field(
        default_factory=lambda: [Nameserver.parse(ns) for ns in DEFAULT_NAMESERVERS],
        min_length=1,
    )
    timeout: float = Field(default=5.0, gt=0, description="Per-query timeout in seconds")
    launch_interval: float = Field(
        default=0.01, ge=0, description="Minimum seconds between check launches"
    )
    burst: int = Field(default=1, ge=1, description="Launches allowed back to back")

    @field_validator("nameservers", mode="before")
    @classmethod
    def _parse_nameservers(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [part for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            return [Nameserver.parse(v) if isinstance(v, str) else v for v in value]
        return value
