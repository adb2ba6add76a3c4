"""Load declared records from DNSControl's JSON output."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from zonecheck.core.errors import InputError
from zonecheck.core.models import Domain

logger = logging.getLogger(__name__)


class DNSControlDocument(BaseModel):
    """Top level of the ``dnscontrol print-ir`` document."""

    domains: list[Domain] = Field(default_factory=list)

    @field_validator("domains", mode="before")
    @classmethod
    def _null_domains(cls, value: Any) -> Any:
        return [] if value is None else value


def _lower_keys(value: Any) -> Any:
    # DNSControl field names are matched case-insensitively
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_lower_keys(v) for v in value]
    return value


def parse_domains(text: str) -> list[Domain]:
    """Parse a DNSControl JSON document into domains."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f"Failed to parse DNSControl output: {e}") from e

    if not isinstance(data, dict):
        raise InputError("Failed to parse DNSControl output: expected a JSON object")

    try:
        document = DNSControlDocument.model_validate(_lower_keys(data))
    except ValidationError as e:
        raise InputError(f"Failed to parse DNSControl output: {e}") from e

    logger.info(
        f"Loaded {len(document.domains)} domains with "
        f"{sum(len(d.records) for d in document.domains)} records"
    )
    return document.domains


async def read_domains(path: Path | None = None) -> list[Domain]:
    """Read domains from ``path``, or from standard input when it is None or '-'."""
    if path is None or str(path) == "-":
        try:
            text = await asyncio.to_thread(sys.stdin.read)
        except OSError as e:
            raise InputError(f"Failed to read stdin: {e}") from e
        return parse_domains(text)

    import aiofiles

    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            text = await f.read()
    except OSError as e:
        raise InputError(f"Failed to read {path}: {e}") from e
    return parse_domains(text)
