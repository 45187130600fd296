"""Result type definitions for check-soa."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


class ProbeStatus(str, Enum):
    """Outcome of one SOA probe against one server address."""

    AUTHORITATIVE = "authoritative"
    NOT_AUTHORITATIVE = "not_authoritative"
    EMPTY_ANSWER = "empty_answer"
    RCODE_ERROR = "rcode_error"
    TRANSPORT_ERROR = "transport_error"
    NOT_SOA = "not_soa"


@dataclass
class ProbeResult:
    """A single SOA probe of one address."""

    address: str
    server: str
    status: ProbeStatus
    serial: Optional[int] = None
    rcode: Optional[str] = None
    error: Optional[str] = None
    success: bool = field(init=False)

    def __post_init__(self):
        self.success = self.status is ProbeStatus.AUTHORITATIVE


@dataclass
class NameserverReport:
    """All probes made for one name server of the zone."""

    name: str
    addresses: list[str]
    probes: list[ProbeResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        # A server without any address counts as a failed probe.
        if not self.addresses:
            return False
        return all(probe.success for probe in self.probes)


@dataclass
class ZoneReport:
    """Aggregated verdict for a zone."""

    zone: str
    nameservers: list[NameserverReport] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return bool(self.nameservers) and all(ns.success for ns in self.nameservers)

    def to_dict(self) -> dict[str, Any]:
        nameservers = []
        for ns in self.nameservers:
            entry = asdict(ns)
            entry["probes"] = [
                {**asdict(probe), "status": probe.status.value} for probe in ns.probes
            ]
            entry["success"] = ns.success
            nameservers.append(entry)
        return {
            "zone": self.zone,
            "nameservers": nameservers,
            "success": self.success,
        }
