"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock

import pytest

from zonecheck.core.models import (
    AnswerRecord,
    ExpectedRecord,
    Nameserver,
    RecordGroup,
)
from zonecheck.core.verify.ratelimit import RateLimiter


class FakeClock:
    """Virtual monotonic clock; ``sleep`` advances it instead of waiting."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_group(record_type: str, *records: ExpectedRecord, name: str = "example.com") -> RecordGroup:
    return RecordGroup(domain="example.com", name=name, record_type=record_type, records=records)


def a_records(*addresses: str, ttl: int = 300, name: str = "@") -> list[ExpectedRecord]:
    return [ExpectedRecord(record_type="A", name=name, ttl=ttl, target=a) for a in addresses]


def a_answers(*addresses: str, ttl: int = 300) -> list[AnswerRecord]:
    return [AnswerRecord(record_type="A", ttl=ttl, target=a) for a in addresses]


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def nameservers() -> list[Nameserver]:
    return [Nameserver(host="192.0.2.1"), Nameserver(host="192.0.2.2", port=5353)]


@pytest.fixture
def unlimited() -> RateLimiter:
    return RateLimiter(None)


@pytest.fixture
def mock_resolver() -> AsyncMock:
    resolver = AsyncMock()
    resolver.query.return_value = []
    return resolver


@pytest.fixture
def sample_document() -> str:
    """A small DNSControl print-ir document."""
    return """{
  "domains": [
    {
      "name": "example.com",
      "registrar": "none",
      "records": [
        {"type": "A", "name": "@", "ttl": 300, "target": "192.0.2.10"},
        {"type": "A", "name": "@", "ttl": 300, "target": "192.0.2.11"},
        {"type": "CNAME", "name": "www", "ttl": 3600, "target": "example.com."},
        {"type": "MX", "name": "@", "ttl": 300, "target": "mail.example.com.", "mxpreference": 10},
        {"type": "CAA", "name": "@", "ttl": 300, "target": "letsencrypt.org", "caatag": "issue"},
        {"type": "TXT", "name": "@", "ttl": 300, "target": "", "txtstrings": ["v=spf1 -all"]}
      ]
    }
  ]
}"""
