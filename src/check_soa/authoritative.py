"""Direct, non-recursive queries to authoritative servers."""

import logging
from typing import Optional, Union

import dns.exception
import dns.flags
import dns.message
import dns.query
import dns.rdatatype

from check_soa.config import DEFAULT_TIMEOUT, DNS_PORT
from check_soa.errors import ProbeTransportError

logger = logging.getLogger(__name__)


def format_server_address(address: str, port: int = DNS_PORT) -> str:
    """Join an IP literal and a port, bracketing IPv6 literals."""
    if ":" in address:
        return f"[{address}]:{port}"
    return f"{address}:{port}"


class AuthoritativeClient:
    """Send one query, recursion disabled, to a given server address."""

    def __init__(self, port: int = DNS_PORT, timeout: float = DEFAULT_TIMEOUT):
        self.port = port
        self.timeout = timeout

    def _make_query(
        self, qname: str, qtype: Union[str, dns.rdatatype.RdataType]
    ) -> dns.message.Message:
        query = dns.message.make_query(qname, qtype)
        query.flags &= ~dns.flags.RD
        return query

    def probe(
        self,
        address: str,
        qname: str,
        qtype: Union[str, dns.rdatatype.RdataType],
        port: Optional[int] = None,
    ) -> dns.message.Message:
        """
        Query address for qname/qtype once over UDP.

        Args:
            address: IPv4 or IPv6 literal of the server
            qname: Absolute name to ask for
            qtype: Record type
            port: Server port, defaults to the client's port

        Returns:
            The first reply received

        Raises:
            ProbeTransportError: nothing usable came back before the timeout
        """
        port = self.port if port is None else port
        server = format_server_address(address, port)
        query = self._make_query(qname, qtype)

        logger.debug(f"Probing {server} for {qname} {dns.rdatatype.to_text(query.question[0].rdtype)}")
        try:
            return dns.query.udp(query, address, timeout=self.timeout, port=port)
        except (dns.exception.DNSException, OSError) as e:
            logger.debug(f"Probe of {server} failed: {e}")
            raise ProbeTransportError(server, str(e) or type(e).__name__) from e
