"""Command-line interface: check-soa ZONE."""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from check_soa import __version__
from check_soa.config import DEFAULT_RESOLV_CONF, DEFAULT_TIMEOUT, load_resolver_config
from check_soa.errors import AddressLookupFailure, CheckSOAError
from check_soa.probe import ZoneProber, fqdn
from check_soa.report import error_dict, format_probes, line_prefix
from check_soa.types import ZoneReport

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports misuse with the short usage line and exit code 1."""

    def error(self, message):
        print(f"{self.prog} ZONE")
        self.exit(1)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = _ArgumentParser(
        prog=os.path.basename(sys.argv[0]) or "check-soa",
        usage="%(prog)s ZONE",
        description="Check that every name server of a zone answers its SOA authoritatively.",
    )
    p.add_argument("zone", help="Zone name (e.g., example.com)")
    p.add_argument("--json", dest="as_json", action="store_true", help="Output JSON")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Query timeout (seconds)")
    p.add_argument("--resolv-conf", default=DEFAULT_RESOLV_CONF, help="Resolver configuration file")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def run_text(prober: ZoneProber, zone: str) -> int:
    """Check zone, printing one line per name server as it is probed."""
    report = ZoneReport(zone=zone)
    for nameserver in prober.lookup_nameservers(zone):
        print(line_prefix(nameserver), end="", flush=True)
        try:
            ns_report = prober.check_nameserver(zone, nameserver)
        except AddressLookupFailure as e:
            print(e)
            return 1
        print(format_probes(ns_report))
        report.nameservers.append(ns_report)
    return 0 if report.success else 1


def run_json(prober: ZoneProber, zone: str) -> int:
    report = prober.check_zone(zone)
    print(json.dumps(report.to_dict(), indent=2))
    return 0 if report.success else 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entrypoint.

    Returns:
        Process exit code (0 = every server answered authoritatively).
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "WARNING"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    zone = fqdn(args.zone)
    try:
        config = load_resolver_config(args.resolv_conf)
        prober = ZoneProber.from_config(config, timeout=args.timeout)
        if args.as_json:
            return run_json(prober, zone)
        return run_text(prober, zone)
    except CheckSOAError as e:
        logger.debug(f"Check of {zone} aborted: {type(e).__name__}")
        if args.as_json:
            print(json.dumps(error_dict(zone, e), indent=2))
        else:
            print(e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
