"""Live network interface snapshot.

Builds NetworkInterfaceInfo objects from psutil (addresses, link state,
speed) and the platform route table (gateways), and classifies each
interface by kind.
"""

import re
import socket
from pathlib import Path
from typing import Protocol

import psutil

import config
from enums import InterfaceKind, OperStatus, Platform
from exceptions import InterfaceDetectionError
from logging_config import get_logger
from models import NetworkInterfaceInfo
from network.gateways import get_default_gateways
from utils import detect_platform, is_safe_argument_name, sanitize_for_log

logger = get_logger(__name__)


class InterfaceProvider(Protocol):
    """Source of interface snapshots (replaced by fakes in tests)."""

    def list_interfaces(self) -> list[NetworkInterfaceInfo]:
        ...


def classify_interface(iface_name: str, ipv4_addresses: list[str]) -> InterfaceKind:
    """Detect interface kind using priority chain.

    Priority:
        1. Loopback (lo, lo0, "Loopback Pseudo-Interface", or 127.x only)
        2. Tunnel name (tun/tap/utun/wg/ppp/wintun..., or contains "vpn")
        3. Wireless (sysfs phy80211, wl* names, wifi/wireless keywords)
        4. Physical

    Args:
        iface_name: Interface name
        ipv4_addresses: IPv4 addresses assigned to the interface

    Returns:
        InterfaceKind enum value
    """
    name_lower = iface_name.lower()

    # Priority 1: Loopback
    if re.match(r"^lo\d*$", name_lower) or name_lower.startswith("loopback"):
        return InterfaceKind.LOOPBACK
    if ipv4_addresses and all(ip.startswith("127.") for ip in ipv4_addresses):
        return InterfaceKind.LOOPBACK

    # Priority 2: Tunnel name patterns
    if "vpn" in name_lower or name_lower.startswith(config.TUNNEL_PREFIXES):
        return InterfaceKind.TUNNEL

    # Priority 3: Wireless
    if _is_wireless(iface_name):
        return InterfaceKind.WIRELESS
    if name_lower.startswith(config.WIRELESS_PREFIXES):
        return InterfaceKind.WIRELESS
    if any(keyword in name_lower for keyword in config.WIRELESS_KEYWORDS):
        return InterfaceKind.WIRELESS

    return InterfaceKind.PHYSICAL


def _is_wireless(iface: str) -> bool:
    """Check if wireless via phy80211 marker (Linux sysfs).

    Args:
        iface: Interface name

    Returns:
        True if wireless interface, False otherwise.
    """
    try:
        return (Path("/sys/class/net") / iface / "phy80211").exists()
    except OSError:
        return False


class PsutilInterfaceProvider:
    """Interface snapshot backed by psutil and the OS route table."""

    def __init__(self, platform: Platform | None = None) -> None:
        self.platform = platform or detect_platform()

    def list_interfaces(self) -> list[NetworkInterfaceInfo]:
        """Query all interfaces (no caching).

        Returns:
            Interfaces in OS enumeration order.

        Raises:
            InterfaceDetectionError: If psutil cannot read interface data.
        """
        try:
            addrs = psutil.net_if_addrs()
            stats = psutil.net_if_stats()
        except (psutil.Error, OSError) as e:
            raise InterfaceDetectionError(f"Cannot enumerate interfaces: {e}") from e

        names = list(addrs) + [name for name in stats if name not in addrs]

        ipv4: dict[str, list[str]] = {}
        for name in names:
            ipv4[name] = [
                entry.address
                for entry in addrs.get(name, [])
                if entry.family == socket.AF_INET
            ]

        gateways = get_default_gateways(self.platform, ipv4)

        interfaces = []
        for name in names:
            if not is_safe_argument_name(name):
                logger.debug("Skipping interface with unusable name: %s", sanitize_for_log(name))
                continue

            stat = stats.get(name)
            interfaces.append(
                NetworkInterfaceInfo(
                    name=name,
                    description=name,
                    status=OperStatus.UP if stat and stat.isup else OperStatus.DOWN,
                    kind=classify_interface(name, ipv4[name]),
                    ipv4_addresses=ipv4[name],
                    gateways=gateways.get(name, []),
                    speed=stat.speed if stat else 0,
                )
            )

        logger.debug("Found %d interfaces", len(interfaces))
        return interfaces


def probe_local_address(
    host: str = config.PROBE_HOST,
    port: int = config.PROBE_PORT,
) -> str | None:
    """Get the local IPv4 address the OS would use for default-route traffic.

    A UDP connect() sends no packet; it only makes the kernel pick a
    route and source address.

    Args:
        host: External address to route towards
        port: Port (irrelevant for routing, must be non-zero)

    Returns:
        Local IPv4 address or None if there is no route.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect((host, port))
            address = sock.getsockname()[0]
    except OSError as e:
        logger.debug("Route probe to %s failed: %s", host, sanitize_for_log(str(e)))
        return None

    logger.info("Local IP connecting to internet appears to be: %s", address)
    return address
