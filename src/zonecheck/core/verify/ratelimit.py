"""Token-bucket limiter for check launches."""

import asyncio
import time
from typing import Awaitable, Callable

# Tolerates float drift when a refill lands a hair short of one token
_EPSILON = 1e-9


class RateLimiter:
    """
    Token bucket shared by every launch site.

    Tokens refill continuously at ``rate`` per second up to ``burst``. Each
    ``acquire()`` takes one token, sleeping until one is available. A
    ``rate`` of ``None`` means unlimited.
    """

    def __init__(
        self,
        rate: float | None,
        burst: int = 1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if rate is not None and rate <= 0:
            raise ValueError("rate must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self.rate = rate
        self.burst = burst
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(burst)
        self._updated = clock()
        self._lock = asyncio.Lock()

    @classmethod
    def from_interval(cls, interval: float, burst: int = 1, **kwargs) -> "RateLimiter":
        """Limiter allowing one launch every ``interval`` seconds (0 = unlimited)."""
        if interval < 0:
            raise ValueError("interval must not be negative")
        return cls(1.0 / interval if interval else None, burst, **kwargs)

    async def acquire(self) -> None:
        if self.rate is None:
            return

        async with self._lock:
            while True:
                self._refill()
                if self._tokens >= 1 - _EPSILON:
                    self._tokens = max(0.0, self._tokens - 1)
                    return
                await self._sleep((1 - self._tokens) / self.rate)

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._updated)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._updated = now
