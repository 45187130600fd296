"""Local resolver configuration and environment defaults."""

import logging
import os
from dataclasses import dataclass

import dns.resolver

from check_soa.errors import ConfigUnavailable

logger = logging.getLogger(__name__)

# Default configuration from environment
DEFAULT_RESOLV_CONF = os.getenv("RESOLV_CONF", "/etc/resolv.conf")
DEFAULT_TIMEOUT = float(os.getenv("DNS_TIMEOUT", "5"))

# Port used to reach authoritative servers
DNS_PORT = 53


@dataclass
class ResolverConfig:
    """Recursive resolvers the host is configured to use."""

    nameservers: list[str]
    port: int = DNS_PORT


def load_resolver_config(filename: str = DEFAULT_RESOLV_CONF) -> ResolverConfig:
    """Read the resolver addresses from a resolv.conf style file.

    Raises:
        ConfigUnavailable: the file cannot be read or lists no nameserver.
    """
    try:
        resolver = dns.resolver.Resolver(filename=filename, configure=True)
    except (dns.resolver.NoResolverConfiguration, OSError) as e:
        raise ConfigUnavailable(filename, str(e) or f"cannot read {filename}") from e

    # dnspython refuses a file without nameservers, so the list is never empty
    nameservers = [str(ns) for ns in resolver.nameservers]
    logger.debug(f"Loaded {len(nameservers)} resolver(s) from {filename}: {nameservers}")
    return ResolverConfig(nameservers=nameservers, port=resolver.port)
