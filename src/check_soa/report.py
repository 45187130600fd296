"""Human readable rendering of probe results."""

from typing import Any

from check_soa.errors import CheckSOAError
from check_soa.types import NameserverReport, ProbeResult, ProbeStatus

NO_ADDRESS_MESSAGE = "No IP address for this server"


def format_address_list(addresses: list[str]) -> str:
    return "[" + " ".join(addresses) + "]"


def format_probe(probe: ProbeResult, addresses: list[str]) -> str:
    """Render one probe as a line token, trailing space included.

    Outcomes that concern the zone data (rcode, serial, authority) are
    reported against the whole address list of the server; outcomes that
    concern reachability name the single address.
    """
    if probe.status is ProbeStatus.TRANSPORT_ERROR:
        return f"{probe.address} ({probe.error}) "
    if probe.status is ProbeStatus.RCODE_ERROR:
        return f"{format_address_list(addresses)} ({probe.rcode}) "
    if probe.status is ProbeStatus.EMPTY_ANSWER:
        return f"{probe.address} (0 answer) "
    if probe.status is ProbeStatus.AUTHORITATIVE:
        return f"{format_address_list(addresses)} ({probe.serial}) "
    if probe.status is ProbeStatus.NOT_AUTHORITATIVE:
        return f"{format_address_list(addresses)} (not authoritative) "
    return f"{probe.address} (not SOA) "


def format_probes(report: NameserverReport) -> str:
    """Render everything after the "<nsname> : " prefix."""
    if not report.addresses:
        return NO_ADDRESS_MESSAGE
    return "".join(format_probe(probe, report.addresses) for probe in report.probes)


def line_prefix(nameserver: str) -> str:
    return f"{nameserver} : "


def error_dict(zone: str, error: CheckSOAError) -> dict[str, Any]:
    """JSON-safe description of a check that could not complete."""
    return {
        "zone": zone,
        "error": str(error),
        "kind": type(error).__name__,
        "success": False,
    }
