"""Error types for check-soa."""


class CheckSOAError(Exception):
    """Base class for fatal errors that end a zone check."""


class ConfigUnavailable(CheckSOAError):
    """The local resolver configuration cannot be used."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Cannot initialize the local resolver: {reason}")


class ResolverUnavailable(CheckSOAError):
    """No local resolver answered the NS query for the zone."""

    def __init__(self, zone: str, reason: str):
        self.zone = zone
        self.reason = reason
        super().__init__(f"Cannot retrieve the list of name servers for {zone}: {reason}")


class ZoneMissing(CheckSOAError):
    """The zone does not exist (NXDOMAIN)."""

    def __init__(self, zone: str):
        self.zone = zone
        super().__init__(f"No such domain {zone}")


class NotAZone(CheckSOAError):
    """The name exists but has no NS records."""

    def __init__(self, zone: str):
        self.zone = zone
        super().__init__(
            f'No NS records for "{zone}". It is probably a CNAME to a domain but not a zone'
        )


class AddressLookupFailure(CheckSOAError):
    """The A or AAAA lookup of a name server failed."""

    def __init__(self, nameserver: str, family: str, reason: str):
        self.nameserver = nameserver
        self.family = family
        self.reason = reason
        super().__init__(f"Error getting the {family} address of {nameserver}: {reason}")


class QueryError(Exception):
    """A single DNS exchange did not produce a usable response."""


class NoResolverAvailable(QueryError):
    """Every configured resolver failed or answered with an unusable rcode."""

    def __init__(self, qname: str, qtype: str, last_error: str = ""):
        self.qname = qname
        self.qtype = qtype
        self.last_error = last_error
        message = "No name server to answer the question"
        if last_error:
            message = f"{message} ({last_error})"
        super().__init__(message)


class ProbeTransportError(QueryError):
    """No reply came back from an authoritative server."""

    def __init__(self, server: str, reason: str):
        self.server = server
        self.reason = reason
        super().__init__(reason)
