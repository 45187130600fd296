"""Tests for text rendering."""

from check_soa.errors import ZoneMissing
from check_soa.report import error_dict, format_probe, format_probes, line_prefix
from check_soa.types import NameserverReport, ProbeResult, ProbeStatus

ADDRESSES = ["192.0.2.1", "2001:db8::1"]


def _probe(status, address="192.0.2.1", **kwargs):
    return ProbeResult(address=address, server=f"{address}:53", status=status, **kwargs)


def test_format_probe_tokens():
    cases = [
        (_probe(ProbeStatus.AUTHORITATIVE, serial=42), "[192.0.2.1 2001:db8::1] (42) "),
        (_probe(ProbeStatus.NOT_AUTHORITATIVE, serial=42), "[192.0.2.1 2001:db8::1] (not authoritative) "),
        (_probe(ProbeStatus.RCODE_ERROR, rcode="REFUSED"), "[192.0.2.1 2001:db8::1] (REFUSED) "),
        (_probe(ProbeStatus.EMPTY_ANSWER), "192.0.2.1 (0 answer) "),
        (_probe(ProbeStatus.TRANSPORT_ERROR, error="timed out"), "192.0.2.1 (timed out) "),
        (_probe(ProbeStatus.NOT_SOA, error="answer is CNAME"), "192.0.2.1 (not SOA) "),
    ]
    for probe, expected in cases:
        assert format_probe(probe, ADDRESSES) == expected


def test_format_probes_line():
    report = NameserverReport(
        name="ns1.example.",
        addresses=["192.0.2.1"],
        probes=[_probe(ProbeStatus.AUTHORITATIVE, serial=2024010101)],
    )
    assert line_prefix(report.name) + format_probes(report) == "ns1.example. : [192.0.2.1] (2024010101) "


def test_format_probes_without_address():
    report = NameserverReport(name="ns1.example.", addresses=[])
    assert line_prefix(report.name) + format_probes(report) == "ns1.example. : No IP address for this server"


def test_error_dict():
    data = error_dict("nope.example.", ZoneMissing("nope.example."))
    assert data == {
        "zone": "nope.example.",
        "error": "No such domain nope.example.",
        "kind": "ZoneMissing",
        "success": False,
    }
