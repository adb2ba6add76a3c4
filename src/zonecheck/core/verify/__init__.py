"""Verification engine: type validators, launch pacing and orchestration."""

from zonecheck.core.verify.engine import VerifyEngine
from zonecheck.core.verify.ratelimit import RateLimiter
from zonecheck.core.verify.report import VerifyReport
from zonecheck.core.verify.validators import TypeValidator

__all__ = ["RateLimiter", "TypeValidator", "VerifyEngine", "VerifyReport"]
