"""Tests for the UDP resolver client."""

from unittest.mock import patch

import dns.exception
import dns.flags
import dns.message
import dns.rcode
import dns.rdatatype
import dns.rrset
import pytest

from zonecheck.core.errors import EmptyResponseError, NonSuccessRcodeError, TransportError
from zonecheck.core.models import Nameserver, QueryTarget
from zonecheck.core.resolver import ResolverClient


def responder(*rrsets: tuple, rcode: int = dns.rcode.NOERROR):
    """Build a fake ``dns.query.udp`` answering with the given rrsets."""

    def fake_udp(msg, where, timeout=None, port=53, **kwargs):
        response = dns.message.make_response(msg)
        response.set_rcode(rcode)
        for name, ttl, rdtype, *rdatas in rrsets:
            response.answer.append(dns.rrset.from_text(name, ttl, "IN", rdtype, *rdatas))
        return response

    return fake_udp


def target(record_type: str, name: str = "example.com") -> QueryTarget:
    return QueryTarget(
        nameserver=Nameserver(host="192.0.2.53", port=5353), name=name, record_type=record_type
    )


class TestResolverClient:
    @pytest.mark.asyncio
    async def test_builds_recursive_query(self):
        seen = {}

        def fake_udp(msg, where, timeout=None, port=53, **kwargs):
            seen.update(msg=msg, where=where, timeout=timeout, port=port)
            return dns.message.make_response(msg)

        with patch("dns.query.udp", side_effect=fake_udp):
            answers = await ResolverClient(timeout=2.5).query(target("MX"))

        assert answers == []
        msg = seen["msg"]
        assert msg.flags & dns.flags.RD
        assert msg.question[0].name.to_text() == "example.com."
        assert dns.rdatatype.to_text(msg.question[0].rdtype) == "MX"
        assert seen["where"] == "192.0.2.53"
        assert seen["port"] == 5353
        assert seen["timeout"] == 2.5

    @pytest.mark.asyncio
    async def test_a_answers_in_received_order(self):
        fake = responder(("example.com.", 300, "A", "192.0.2.2", "192.0.2.1"))
        with patch("dns.query.udp", side_effect=fake):
            answers = await ResolverClient().query(target("A"))

        assert [a.target for a in answers] == ["192.0.2.2", "192.0.2.1"]
        assert all(a.record_type == "A" and a.ttl == 300 for a in answers)

    @pytest.mark.asyncio
    async def test_payload_mapping(self):
        fake = responder(
            ("example.com.", 60, "CAA", '0 issue "letsencrypt.org"'),
            ("example.com.", 60, "MX", "10 mail.example.com."),
            ("example.com.", 60, "TXT", '"ab" "c"'),
            ("example.com.", 60, "CNAME", "target.example.net."),
            ("example.com.", 60, "AAAA", "2001:db8::1"),
        )
        with patch("dns.query.udp", side_effect=fake):
            caa, mx, txt, cname, aaaa = await ResolverClient().query(target("CAA"))

        assert (caa.caa_tag, caa.target) == ("issue", "letsencrypt.org")
        assert (mx.mx_preference, mx.target) == (10, "mail.example.com.")
        assert txt.txt_strings == ("ab", "c")
        assert cname.record_type == "CNAME"
        assert cname.target == "target.example.net."
        assert aaaa.target == "2001:db8::1"

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self):
        with patch("dns.query.udp", side_effect=dns.exception.Timeout):
            with pytest.raises(TransportError) as exc:
                await ResolverClient(timeout=1.0).query(target("A"))
        assert "timed out" in exc.value.message

    @pytest.mark.asyncio
    async def test_socket_error_is_transport_error(self):
        with patch("dns.query.udp", side_effect=OSError("network unreachable")):
            with pytest.raises(TransportError, match="network unreachable"):
                await ResolverClient().query(target("A"))

    @pytest.mark.asyncio
    async def test_no_response(self):
        with patch("dns.query.udp", return_value=None):
            with pytest.raises(EmptyResponseError):
                await ResolverClient().query(target("A"))

    @pytest.mark.asyncio
    async def test_non_success_rcode(self):
        with patch("dns.query.udp", side_effect=responder(rcode=dns.rcode.NXDOMAIN)):
            with pytest.raises(NonSuccessRcodeError) as exc:
                await ResolverClient().query(target("A"))
        assert exc.value.rcode == "NXDOMAIN"
        assert exc.value.details == {"rcode": "NXDOMAIN"}
