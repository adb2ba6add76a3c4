"""UDP resolver client built on dnspython."""

import asyncio
import logging

import dns.exception
import dns.message
import dns.query
import dns.rcode
import dns.rdatatype

from zonecheck.core.base import BaseResolverClient
from zonecheck.core.errors import EmptyResponseError, NonSuccessRcodeError, TransportError
from zonecheck.core.models import AnswerRecord, QueryTarget

logger = logging.getLogger(__name__)


class ResolverClient(BaseResolverClient):
    """Sends a single recursive query per call over UDP.

    There is no retry and no TCP fallback: one exchange per target, bounded
    by ``timeout`` seconds.
    """

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout

    async def query(self, target: QueryTarget) -> list[AnswerRecord]:
        """Execute one query against ``target.nameserver``."""
        # make_query picks a random id and sets RD
        msg = dns.message.make_query(target.name, dns.rdatatype.from_text(target.record_type))

        start_time = asyncio.get_running_loop().time()
        try:
            response = await asyncio.to_thread(
                dns.query.udp,
                msg,
                target.nameserver.host,
                timeout=self.timeout,
                port=target.nameserver.port,
            )
        except dns.exception.Timeout as e:
            raise TransportError(
                f"timed out after {self.timeout}s", nameserver=str(target.nameserver)
            ) from e
        except (OSError, dns.exception.DNSException) as e:
            raise TransportError(str(e) or type(e).__name__, nameserver=str(target.nameserver)) from e

        elapsed_ms = (asyncio.get_running_loop().time() - start_time) * 1000

        if response is None:
            raise EmptyResponseError()

        rcode = response.rcode()
        if rcode != dns.rcode.NOERROR:
            raise NonSuccessRcodeError(dns.rcode.to_text(rcode))

        answers = [
            _to_answer(rrset.rdtype, rrset.ttl, rdata)
            for rrset in response.answer
            for rdata in rrset
        ]
        logger.debug(
            f"{target.record_type} {target.name} @ {target.nameserver}: "
            f"{len(answers)} answers in {elapsed_ms:.1f}ms"
        )
        return answers


def _decode(value: bytes) -> str:
    return value.decode("utf-8", errors="replace")


def _to_answer(rdtype: int, ttl: int, rdata) -> AnswerRecord:
    """Flatten one rdata into the payload fields shared with declared records."""
    record_type = dns.rdatatype.to_text(rdtype)

    if rdtype in (dns.rdatatype.A, dns.rdatatype.AAAA):
        return AnswerRecord(record_type=record_type, ttl=ttl, target=rdata.address)
    if rdtype == dns.rdatatype.CNAME:
        return AnswerRecord(record_type=record_type, ttl=ttl, target=rdata.target.to_text())
    if rdtype == dns.rdatatype.CAA:
        return AnswerRecord(
            record_type=record_type,
            ttl=ttl,
            caa_tag=_decode(rdata.tag),
            target=_decode(rdata.value),
        )
    if rdtype == dns.rdatatype.MX:
        return AnswerRecord(
            record_type=record_type,
            ttl=ttl,
            mx_preference=rdata.preference,
            target=rdata.exchange.to_text(),
        )
    if rdtype == dns.rdatatype.TXT:
        return AnswerRecord(
            record_type=record_type,
            ttl=ttl,
            txt_strings=tuple(_decode(s) for s in rdata.strings),
        )
    return AnswerRecord(record_type=record_type, ttl=ttl, target=rdata.to_text())
