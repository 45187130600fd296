"""Recursive queries through the host's configured resolvers."""

import logging
from typing import Union

import dns.exception
import dns.flags
import dns.message
import dns.query
import dns.rcode
import dns.rdatatype

from check_soa.authoritative import format_server_address
from check_soa.config import DEFAULT_TIMEOUT, DNS_PORT, ResolverConfig
from check_soa.errors import NoResolverAvailable

logger = logging.getLogger(__name__)

# Response codes that end the fail-over: the answer, or proof the name is absent
ACCEPTED_RCODES = frozenset({dns.rcode.NOERROR, dns.rcode.NXDOMAIN})


class ResolverClient:
    """Recursive DNS client with fail-over across the configured resolvers."""

    def __init__(
        self,
        nameservers: list[str],
        port: int = DNS_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.nameservers = list(nameservers)
        self.port = port
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ResolverConfig, timeout: float = DEFAULT_TIMEOUT) -> "ResolverClient":
        return cls(config.nameservers, port=config.port, timeout=timeout)

    def _make_query(
        self, qname: str, qtype: Union[str, dns.rdatatype.RdataType]
    ) -> dns.message.Message:
        query = dns.message.make_query(qname, qtype)
        query.flags |= dns.flags.RD
        return query

    def resolve(
        self, qname: str, qtype: Union[str, dns.rdatatype.RdataType]
    ) -> dns.message.Message:
        """
        Resolve qname/qtype with the first resolver that gives a usable answer.

        A NOERROR or NXDOMAIN response is returned as is. Any other rcode, or
        a transport failure, moves on to the next resolver.

        Raises:
            NoResolverAvailable: every resolver failed
        """
        query = self._make_query(qname, qtype)
        qtype_text = dns.rdatatype.to_text(query.question[0].rdtype)
        last_error = ""

        for nameserver in self.nameservers:
            server = format_server_address(nameserver, self.port)
            logger.debug(f"Asking {server} for {qname} {qtype_text}")
            try:
                response = dns.query.udp(query, nameserver, timeout=self.timeout, port=self.port)
            except (dns.exception.DNSException, OSError) as e:
                last_error = f"{server}: {str(e) or type(e).__name__}"
                logger.debug(f"Resolver {server} failed: {last_error}")
                continue

            rcode = response.rcode()
            if rcode in ACCEPTED_RCODES:
                return response

            last_error = f"{server}: {dns.rcode.to_text(rcode)}"
            logger.debug(f"Resolver {server} answered {dns.rcode.to_text(rcode)}, trying next")

        raise NoResolverAvailable(qname, qtype_text, last_error)
