"""Shared fixtures: an in-memory DNS network behind dns.query.udp."""

from dataclasses import dataclass

import dns.exception
import dns.flags
import dns.message
import dns.query
import dns.rcode
import dns.rdatatype
import dns.rrset
import pytest

RESOLVER = "192.0.2.53"
BACKUP_RESOLVER = "198.51.100.53"


def soa_text(serial: int) -> str:
    return f"ns1.example. hostmaster.example. {serial} 7200 3600 1209600 3600"


def make_response(qname, rdtype, records=(), rcode=dns.rcode.NOERROR, authoritative=False, answer_type=None):
    """Build a reply to qname/rdtype holding records in the answer section."""
    query = dns.message.make_query(qname, rdtype)
    response = dns.message.make_response(query)
    if records:
        response.answer.append(
            dns.rrset.from_text(qname, 300, "IN", answer_type or rdtype, *records)
        )
    response.set_rcode(rcode)
    if authoritative:
        response.flags |= dns.flags.AA
    return response


@dataclass
class Call:
    """One query seen on the fake network."""

    where: str
    port: int
    qname: str
    qtype: str
    flags: int

    @property
    def recursion_desired(self) -> bool:
        return bool(self.flags & dns.flags.RD)


class FakeDNS:
    """Replacement for dns.query.udp answering from a table.

    Unknown (server, qname, qtype) triples time out.
    """

    def __init__(self):
        self.answers = {}
        self.calls: list[Call] = []

    def add(self, where, qname, qtype, answer):
        self.answers[(where, qname, qtype)] = answer

    def add_resolver_answer(self, qname, qtype, answer, where=RESOLVER):
        self.add(where, qname, qtype, answer)

    def __call__(self, q, where, timeout=None, port=53, **kwargs):
        question = q.question[0]
        qname = question.name.to_text()
        qtype = dns.rdatatype.to_text(question.rdtype)
        self.calls.append(Call(where=where, port=port, qname=qname, qtype=qtype, flags=q.flags))

        answer = self.answers.get((where, qname, qtype))
        if answer is None:
            raise dns.exception.Timeout()
        if isinstance(answer, BaseException):
            raise answer
        answer.id = q.id
        return answer

    def calls_to(self, where):
        return [call for call in self.calls if call.where == where]


@pytest.fixture
def fake_dns(monkeypatch):
    fake = FakeDNS()
    monkeypatch.setattr(dns.query, "udp", fake)
    return fake


@pytest.fixture
def resolv_conf(tmp_path):
    path = tmp_path / "resolv.conf"
    path.write_text(f"search example.\nnameserver {RESOLVER}\n")
    return str(path)


@pytest.fixture
def example_zone(fake_dns):
    """example. with one v4-only name server serving serial 2024010101."""
    fake_dns.add_resolver_answer("example.", "NS", make_response("example.", "NS", ["ns1.example."]))
    fake_dns.add_resolver_answer("ns1.example.", "A", make_response("ns1.example.", "A", ["192.0.2.1"]))
    fake_dns.add_resolver_answer("ns1.example.", "AAAA", make_response("ns1.example.", "AAAA"))
    fake_dns.add(
        "192.0.2.1",
        "example.",
        "SOA",
        make_response("example.", "SOA", [soa_text(2024010101)], authoritative=True),
    )
    return fake_dns
