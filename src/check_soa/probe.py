"""Zone health probing: NS discovery, address fan-out and SOA checks."""

import logging

import dns.exception
import dns.flags
import dns.message
import dns.name
import dns.rcode
import dns.rdatatype

from check_soa.authoritative import AuthoritativeClient, format_server_address
from check_soa.config import DEFAULT_TIMEOUT, ResolverConfig
from check_soa.errors import (
    AddressLookupFailure,
    NoResolverAvailable,
    NotAZone,
    ProbeTransportError,
    ResolverUnavailable,
    ZoneMissing,
)
from check_soa.resolver import ResolverClient
from check_soa.types import NameserverReport, ProbeResult, ProbeStatus, ZoneReport

logger = logging.getLogger(__name__)

# Address record types looked up for every name server, in order
ADDRESS_FAMILIES = (
    (dns.rdatatype.A, "IPv4"),
    (dns.rdatatype.AAAA, "IPv6"),
)


def fqdn(name: str) -> str:
    """Return name in absolute form, with a trailing dot."""
    if name.endswith("."):
        return name
    return name + "."


def classify_response(address: str, server: str, response: dns.message.Message) -> ProbeResult:
    """Turn the reply to an SOA probe into a ProbeResult."""
    rcode = response.rcode()
    if rcode != dns.rcode.NOERROR:
        return ProbeResult(
            address=address,
            server=server,
            status=ProbeStatus.RCODE_ERROR,
            rcode=dns.rcode.to_text(rcode),
        )

    # Expected from a recursor, which will not answer with RD=0
    if not response.answer:
        return ProbeResult(address=address, server=server, status=ProbeStatus.EMPTY_ANSWER)

    first = response.answer[0]
    if first.rdtype != dns.rdatatype.SOA:
        return ProbeResult(
            address=address,
            server=server,
            status=ProbeStatus.NOT_SOA,
            error=f"answer is {dns.rdatatype.to_text(first.rdtype)}",
        )

    serial = first[0].serial
    if response.flags & dns.flags.AA:
        status = ProbeStatus.AUTHORITATIVE
    else:
        status = ProbeStatus.NOT_AUTHORITATIVE
    return ProbeResult(address=address, server=server, status=status, serial=serial)


class ZoneProber:
    """Check that every name server of a zone serves its SOA authoritatively.

    Name server discovery and address lookups go through the recursive
    resolver client; SOA probes go straight to each server address.
    """

    def __init__(self, resolver: ResolverClient, authoritative: AuthoritativeClient):
        self.resolver = resolver
        self.authoritative = authoritative

    @classmethod
    def from_config(cls, config: ResolverConfig, timeout: float = DEFAULT_TIMEOUT) -> "ZoneProber":
        return cls(
            ResolverClient.from_config(config, timeout=timeout),
            AuthoritativeClient(timeout=timeout),
        )

    def lookup_nameservers(self, zone: str) -> list[str]:
        """
        Find the NS set of zone through the recursive resolvers.

        Returns:
            NS target names, in answer order

        Raises:
            ResolverUnavailable: zone is not a valid name, or no resolver answered
            ZoneMissing: the zone does not exist
            NotAZone: the answer holds no NS record
        """
        zone = fqdn(zone)
        try:
            dns.name.from_text(zone)
        except dns.exception.DNSException as e:
            raise ResolverUnavailable(zone, str(e) or type(e).__name__) from e

        try:
            response = self.resolver.resolve(zone, dns.rdatatype.NS)
        except NoResolverAvailable as e:
            raise ResolverUnavailable(zone, str(e)) from e

        if response.rcode() == dns.rcode.NXDOMAIN:
            raise ZoneMissing(zone)

        nameservers = [
            rdata.target.to_text()
            for rrset in response.answer
            if rrset.rdtype == dns.rdatatype.NS
            for rdata in rrset
        ]
        if not nameservers:
            raise NotAZone(zone)

        logger.debug(f"{zone} has {len(nameservers)} name server(s): {nameservers}")
        return nameservers

    def lookup_addresses(self, nameserver: str) -> list[str]:
        """
        Resolve the IPv4 then IPv6 addresses of a name server.

        Raises:
            AddressLookupFailure: a lookup failed or did not return NOERROR
        """
        addresses: list[str] = []
        for rdtype, family in ADDRESS_FAMILIES:
            try:
                response = self.resolver.resolve(nameserver, rdtype)
            except NoResolverAvailable as e:
                raise AddressLookupFailure(nameserver, family, str(e)) from e

            rcode = response.rcode()
            if rcode != dns.rcode.NOERROR:
                raise AddressLookupFailure(nameserver, family, dns.rcode.to_text(rcode))

            for rrset in response.answer:
                if rrset.rdtype == rdtype:
                    addresses.extend(rdata.address for rdata in rrset)
        return addresses

    def probe_address(self, zone: str, address: str) -> ProbeResult:
        """Ask one server address for the SOA of zone and classify the reply."""
        zone = fqdn(zone)
        server = format_server_address(address, self.authoritative.port)
        try:
            response = self.authoritative.probe(address, zone, dns.rdatatype.SOA)
        except ProbeTransportError as e:
            return ProbeResult(
                address=address,
                server=server,
                status=ProbeStatus.TRANSPORT_ERROR,
                error=e.reason,
            )

        result = classify_response(address, server, response)
        logger.debug(f"{server}: {result.status.value}")
        return result

    def check_nameserver(self, zone: str, nameserver: str) -> NameserverReport:
        """Resolve one name server and probe each of its addresses in turn."""
        addresses = self.lookup_addresses(nameserver)
        report = NameserverReport(name=nameserver, addresses=addresses)
        if not addresses:
            logger.info(f"{nameserver} has no address")
        for address in addresses:
            report.probes.append(self.probe_address(zone, address))
        return report

    def check_zone(self, zone: str) -> ZoneReport:
        """Run the whole check for zone and return the aggregated report."""
        zone = fqdn(zone)
        report = ZoneReport(zone=zone)
        for nameserver in self.lookup_nameservers(zone):
            report.nameservers.append(self.check_nameserver(zone, nameserver))
        return report
