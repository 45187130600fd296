"""MCP server exposing the zone SOA check."""

import asyncio
import ipaddress
import json
import logging
import os
import re
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from check_soa.config import (
    DEFAULT_RESOLV_CONF,
    DEFAULT_TIMEOUT,
    ResolverConfig,
    load_resolver_config,
)
from check_soa.errors import CheckSOAError
from check_soa.probe import ZoneProber, fqdn
from check_soa.report import error_dict

logger = logging.getLogger(__name__)

# Domain validation pattern (RFC 1035 compliant)
DOMAIN_LABEL_PATTERN = re.compile(r'^[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$')


def validate_zone(zone: str) -> tuple[bool, str]:
    """Validate a zone name.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not zone:
        return False, "Zone name cannot be empty"

    if len(zone) > 253:
        return False, "Zone name exceeds 253 characters"

    labels = zone.rstrip(".").split(".")
    if labels == [""]:
        return False, "Invalid zone name format"

    for label in labels:
        if not label:
            return False, "Empty label in zone name"
        if len(label) > 63:
            return False, f"Label '{label}' exceeds 63 characters"
        if not DOMAIN_LABEL_PATTERN.match(label):
            return False, f"Invalid characters in label '{label}'"

    return True, ""


def validate_resolver_ip(ip: str) -> tuple[bool, str]:
    """Validate a resolver IP address supplied by a client.

    Blocks private and reserved IP ranges for security.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False, f"Invalid IP address format: {ip}"

    if addr.is_private:
        return False, f"Private IP addresses not allowed: {ip}"
    if addr.is_loopback:
        return False, f"Loopback addresses not allowed: {ip}"
    if addr.is_link_local:
        return False, f"Link-local addresses not allowed: {ip}"
    if addr.is_multicast:
        return False, f"Multicast addresses not allowed: {ip}"
    if addr.is_reserved:
        return False, f"Reserved addresses not allowed: {ip}"

    return True, ""


def check_zone(
    zone: str,
    resolver_ip: Optional[str] = None,
    resolv_conf: str = DEFAULT_RESOLV_CONF,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """Run a zone check and return a JSON-safe result.

    Fatal errors are reported in the result rather than raised.
    """
    is_valid, error = validate_zone(zone)
    if not is_valid:
        return {"zone": zone, "error": error, "kind": "Usage", "success": False}

    if resolver_ip:
        is_valid, error = validate_resolver_ip(resolver_ip)
        if not is_valid:
            return {"zone": zone, "error": error, "kind": "Usage", "success": False}

    zone = fqdn(zone)
    try:
        if resolver_ip:
            config = ResolverConfig(nameservers=[resolver_ip])
        else:
            config = load_resolver_config(resolv_conf)
        report = ZoneProber.from_config(config, timeout=timeout).check_zone(zone)
    except CheckSOAError as e:
        logger.warning(f"Check of {zone} failed: {e}")
        return error_dict(zone, e)

    return report.to_dict()


def create_server() -> Server:
    """Create and configure the MCP server."""
    server = Server("check-soa")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return [
            Tool(
                name="check_soa",
                description=(
                    "Check that every authoritative name server of a zone answers "
                    "its SOA record authoritatively, reporting the serial per server."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "zone": {
                            "type": "string",
                            "description": "Zone name to check",
                        },
                        "resolver": {
                            "type": "string",
                            "description": "Recursive resolver IP used for discovery (optional, defaults to the system resolvers)",
                        },
                    },
                    "required": ["zone"],
                },
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        logger.info(f"Tool call: {name} with arguments: {arguments}")

        if name != "check_soa":
            error_response = {"error": f"Unknown tool: {name}", "success": False}
            return [TextContent(type="text", text=json.dumps(error_response, indent=2))]

        result = await asyncio.to_thread(
            check_zone,
            arguments["zone"],
            resolver_ip=arguments.get("resolver"),
        )
        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    return server


def main():
    """Run the MCP server."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    server = create_server()

    async def run():
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    asyncio.run(run())


if __name__ == "__main__":
    main()
