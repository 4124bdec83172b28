"""Default gateway discovery.

psutil reports addresses and link state but not gateways, so default
routes are read from the platform's route table tool and attached to
interfaces by the provider.

Commands:
    Linux:   ip -4 route show default
    macOS:   netstat -rn -f inet
    Windows: route print -4 0.0.0.0
"""

import re

from enums import Platform
from logging_config import get_logger
from utils import is_valid_ipv4, run_command, sanitize_for_log

logger = get_logger(__name__)

# (interface name or local address, gateway, metric)
Route = tuple[str, str, str]


def metric_sort_key(metric: str) -> tuple[int, int]:
    """Sort key for route metrics.

    Explicit metrics first (ascending), then "DEFAULT" (route table shows
    no metric), then anything else.
    """
    if metric.isdigit():
        return (0, int(metric))
    if metric == "DEFAULT":
        return (1, 0)
    return (2, 0)


def parse_linux_default_routes(output: str) -> list[Route]:
    """Parse `ip -4 route show default` output.

    Format: "default via 192.168.1.1 dev eth0 proto dhcp metric 100"
    Routes without "via" (point-to-point devices) have no gateway and
    are skipped.

    Args:
        output: Command output

    Returns:
        List of (interface, gateway, metric) tuples.
    """
    routes = []
    for line in output.split("\n"):
        if not line.strip().startswith("default"):
            continue

        gateway_match = re.search(r"via\s+([0-9.]+)", line)
        iface_match = re.search(r"dev\s+(\S+)", line)
        if not gateway_match or not iface_match:
            continue

        gateway = gateway_match.group(1)
        if not is_valid_ipv4(gateway):
            continue

        # Extract metric (explicit only - never guess)
        metric_match = re.search(r"metric\s+(\d+)", line)
        metric = metric_match.group(1) if metric_match else "DEFAULT"

        routes.append((iface_match.group(1), gateway, metric))

    return routes


def parse_macos_default_routes(output: str) -> list[Route]:
    """Parse `netstat -rn -f inet` output.

    Format: "default   192.168.1.1   UGScg   en0"
    Entries whose gateway is a link ("link#17") are skipped.

    Args:
        output: Command output

    Returns:
        List of (interface, gateway, "DEFAULT") tuples in table order.
    """
    routes = []
    for line in output.split("\n"):
        parts = line.split()
        if len(parts) < 4 or parts[0] != "default":
            continue
        if not is_valid_ipv4(parts[1]):
            continue
        routes.append((parts[3], parts[1], "DEFAULT"))
    return routes


def parse_windows_default_routes(output: str) -> list[Route]:
    """Parse `route print -4 0.0.0.0` output.

    Format: "0.0.0.0   0.0.0.0   192.168.1.1   192.168.1.100   25"
    The interface column is the local address, not a name; the caller
    maps it back. "On-link" gateways are skipped.

    Args:
        output: Command output

    Returns:
        List of (local address, gateway, metric) tuples.
    """
    routes = []
    for line in output.split("\n"):
        parts = line.split()
        if len(parts) != 5:
            continue
        destination, netmask, gateway, local_ip, metric = parts
        if destination != "0.0.0.0" or netmask != "0.0.0.0":
            continue
        if not is_valid_ipv4(gateway) or not is_valid_ipv4(local_ip):
            continue
        routes.append((local_ip, gateway, metric))
    return routes


def get_default_gateways(
    platform: Platform,
    addresses: dict[str, list[str]] | None = None,
) -> dict[str, list[str]]:
    """Get IPv4 default gateways per interface.

    Args:
        platform: Host platform
        addresses: Interface name -> IPv4 addresses (needed on Windows,
            where routes name the local address instead of the interface)

    Returns:
        Dict mapping interface name to gateways, lowest metric first.
        Empty dict if the route table cannot be read.
    """
    if platform == Platform.LINUX:
        cmd = ["ip", "-4", "route", "show", "default"]
        parser = parse_linux_default_routes
    elif platform == Platform.MACOS:
        cmd = ["netstat", "-rn", "-f", "inet"]
        parser = parse_macos_default_routes
    elif platform == Platform.WINDOWS:
        cmd = ["route", "print", "-4", "0.0.0.0"]
        parser = parse_windows_default_routes
    else:
        return {}

    result = run_command(cmd)
    if not result.ok or not result.stdout:
        logger.debug(
            "Could not read route table: %s",
            sanitize_for_log(result.error or result.stderr or "no output"),
        )
        return {}

    routes = parser(result.stdout)

    if platform == Platform.WINDOWS:
        owner = {}
        for name, ips in (addresses or {}).items():
            for ip in ips:
                owner.setdefault(ip, name)
        routes = [
            (owner[local_ip], gateway, metric)
            for local_ip, gateway, metric in routes
            if local_ip in owner
        ]

    # Stable sort keeps table order for equal metrics
    routes.sort(key=lambda route: metric_sort_key(route[2]))

    gateways: dict[str, list[str]] = {}
    for iface, gateway, _ in routes:
        entries = gateways.setdefault(iface, [])
        if gateway not in entries:
            entries.append(gateway)

    logger.debug("Default gateways: %s", sanitize_for_log(gateways))
    return gateways
