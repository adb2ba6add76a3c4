"""Check orchestrator: fan out every group against every nameserver."""

import asyncio
import logging
from datetime import datetime
from typing import AsyncIterator, Callable, Iterable, Sequence

from zonecheck.core.base import BaseResolverClient
from zonecheck.core.errors import CheckError, UnsupportedTypeError
from zonecheck.core.grouper import group_domains
from zonecheck.core.models import (
    CheckFailure,
    CheckOutcome,
    Domain,
    FailureKind,
    Nameserver,
    QueryTarget,
    RecordGroup,
    VerifyResult,
)
from zonecheck.core.verify.ratelimit import RateLimiter
from zonecheck.core.verify.validators import TypeValidator

logger = logging.getLogger(__name__)


class VerifyEngine:
    """
    Verify declared record groups against live nameservers.

    One independent check runs per (group, nameserver) pair. Launches are
    paced by a shared rate limiter; checks then run concurrently. A failed
    check only ever produces a failed outcome for its own pair, and every
    pair is always checked.
    """

    def __init__(
        self,
        resolver: BaseResolverClient,
        nameservers: Sequence[Nameserver],
        limiter: RateLimiter | None = None,
        validator: TypeValidator | None = None,
    ):
        if not nameservers:
            raise ValueError("at least one nameserver is required")
        self.resolver = resolver
        self.nameservers = list(nameservers)
        self.limiter = limiter or RateLimiter.from_interval(0.01)
        self.validator = validator or TypeValidator()

    async def check(self, nameserver: Nameserver, group: RecordGroup) -> CheckOutcome:
        """Run the query and validation pipeline for one pair."""
        failure: CheckFailure | None = None
        try:
            # Unsupported types fail without touching the network
            if not self.validator.supports(group.record_type):
                raise UnsupportedTypeError(group.record_type)
            answers = await self.resolver.query(
                QueryTarget(nameserver=nameserver, name=group.name, record_type=group.record_type)
            )
            self.validator.validate(answers, group)
        except CheckError as e:
            failure = e.to_failure()
        except Exception as e:
            logger.exception(
                f"Unexpected error checking {group.record_type} {group.name} at {nameserver}"
            )
            failure = CheckFailure(kind=FailureKind.INTERNAL, message=f"internal error: {e!r}")

        if failure is not None:
            logger.info(
                f"{group.record_type} {group.name} (at {nameserver}): {failure.message}"
            )
        return CheckOutcome(
            nameserver=str(nameserver),
            name=group.name,
            record_type=group.record_type,
            failure=failure,
        )

    async def iter_outcomes(self, groups: Sequence[RecordGroup]) -> AsyncIterator[CheckOutcome]:
        """Yield one outcome per (group, nameserver) pair, in completion order."""
        queue: asyncio.Queue[CheckOutcome] = asyncio.Queue()
        total = len(groups) * len(self.nameservers)

        async def worker(nameserver: Nameserver, group: RecordGroup) -> None:
            await queue.put(await self.check(nameserver, group))

        async def launch() -> None:
            tasks = []
            try:
                for group in groups:
                    for nameserver in self.nameservers:
                        await self.limiter.acquire()
                        tasks.append(asyncio.create_task(worker(nameserver, group)))
            finally:
                await asyncio.gather(*tasks)

        launcher = asyncio.create_task(launch())
        try:
            for _ in range(total):
                getter = asyncio.ensure_future(queue.get())
                if not launcher.done():
                    await asyncio.wait({getter, launcher}, return_when=asyncio.FIRST_COMPLETED)
                if not getter.done() and launcher.done() and launcher.exception():
                    # Launching broke off; the remaining outcomes will never arrive
                    getter.cancel()
                    raise launcher.exception()
                yield await getter
        finally:
            # Nothing is cancelled; wait for every launched check
            await launcher

    async def run(
        self,
        groups: Sequence[RecordGroup],
        on_outcome: Callable[[CheckOutcome], None] | None = None,
    ) -> VerifyResult:
        """Check every group and fold the outcomes into one result."""
        result = VerifyResult(started_at=datetime.utcnow())
        start_time = asyncio.get_running_loop().time()
        logger.info(
            f"Checking {len(groups)} record groups against {len(self.nameservers)} nameservers"
        )

        async for outcome in self.iter_outcomes(groups):
            result.outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

        result.duration_ms = (asyncio.get_running_loop().time() - start_time) * 1000
        logger.info(
            f"Finished {result.checks} checks: {result.passed} passed, {result.failed} failed"
        )
        return result

    async def verify_domains(
        self,
        domains: Iterable[Domain],
        on_outcome: Callable[[CheckOutcome], None] | None = None,
    ) -> VerifyResult:
        """Group every domain's records, then check them all."""
        return await self.run(group_domains(domains), on_outcome=on_outcome)
