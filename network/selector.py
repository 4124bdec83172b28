"""Primary interface and gateway selection.

Physical enumeration alone is ambiguous on multi-homed hosts (VPN
adapters, virtual switches, docker bridges). The route probe is the only
reliable signal; the remaining rules are best-effort fallbacks.
"""

from typing import Callable

import config
from enums import InterfaceKind, Platform
from exceptions import InterfaceDetectionError
from logging_config import get_logger
from models import NetworkInterfaceInfo, PrimaryInterface
from network.interfaces import InterfaceProvider, probe_local_address
from utils import is_valid_ipv4, sanitize_for_log

logger = get_logger(__name__)

DETECTION_ERRORS = (InterfaceDetectionError, OSError, ValueError, RuntimeError)


def fallback_interface_name(platform: Platform) -> str:
    """OS-specific default interface name."""
    return config.FALLBACK_INTERFACE_NAMES.get(platform.value, config.FALLBACK_INTERFACE_NAME)


def is_wireless_candidate(iface: NetworkInterfaceInfo) -> bool:
    """Name/description keyword match, or classified as wireless."""
    if iface.kind == InterfaceKind.WIRELESS:
        return True
    text = f"{iface.name} {iface.description}".lower()
    return any(keyword in text for keyword in config.WIRELESS_KEYWORDS)


def _fastest(candidates: list[NetworkInterfaceInfo]) -> NetworkInterfaceInfo | None:
    """Highest speed wins; on equal speed the first enumerated wins."""
    best = None
    highest_speed = -1
    for iface in candidates:
        if iface.speed > highest_speed:
            highest_speed = iface.speed
            best = iface
    return best


class InterfaceSelector:
    """Selects the interface carrying the default route, and its gateway.

    Never raises: every failure degrades to OS default values.
    """

    def __init__(
        self,
        provider: InterfaceProvider,
        platform: Platform,
        local_address_probe: Callable[[], str | None] = probe_local_address,
    ) -> None:
        self.provider = provider
        self.platform = platform
        self.local_address_probe = local_address_probe

    def select_primary_interface(self) -> str:
        """Select the primary interface name.

        Priority (first match wins):
            1. Up, non-loopback interface owning the route probe address
            2. Fastest up wireless interface with IPv4 and gateway
            3. Fastest up non-loopback, non-tunnel interface with IPv4 and gateway
            4. First up non-loopback interface with any IPv4 address
            5. OS fallback name (Ethernet / en0 / eth0)

        Returns:
            Interface name.
        """
        try:
            name = self._select(self.provider.list_interfaces())
        except DETECTION_ERRORS as e:
            logger.warning("Error detecting network interface: %s", sanitize_for_log(str(e)))
            name = None

        if name:
            return name

        name = fallback_interface_name(self.platform)
        logger.warning("Could not detect network interface, using default: %s", name)
        return name

    def _select(self, interfaces: list[NetworkInterfaceInfo]) -> str | None:
        # Rule 1: exact match for the routed local address
        local_ip = self.local_address_probe()
        if local_ip:
            for iface in interfaces:
                if iface.is_up and not iface.is_loopback and local_ip in iface.ipv4_addresses:
                    logger.info(
                        "Found exact interface match: %s (%s) with IP %s",
                        sanitize_for_log(iface.name),
                        sanitize_for_log(iface.description),
                        local_ip,
                    )
                    return iface.name

        # Rule 2: wireless with IPv4 and gateway
        wireless = _fastest(
            [
                iface
                for iface in interfaces
                if iface.is_up
                and is_wireless_candidate(iface)
                and iface.ipv4_addresses
                and iface.gateways
            ]
        )
        if wireless:
            logger.info(
                "Using wireless interface with highest speed: %s (%s)",
                sanitize_for_log(wireless.name),
                sanitize_for_log(wireless.description),
            )
            return wireless.name

        # Rule 3: any physical interface with IPv4 and gateway
        wired = _fastest(
            [
                iface
                for iface in interfaces
                if iface.is_up
                and iface.kind not in (InterfaceKind.LOOPBACK, InterfaceKind.TUNNEL)
                and iface.ipv4_addresses
                and iface.gateways
            ]
        )
        if wired:
            logger.info(
                "Using interface with highest speed and gateway: %s (%s)",
                sanitize_for_log(wired.name),
                sanitize_for_log(wired.description),
            )
            return wired.name

        # Rule 4: anything up with IPv4
        for iface in interfaces:
            if iface.is_up and not iface.is_loopback and iface.ipv4_addresses:
                logger.info(
                    "Found usable interface: %s (%s)",
                    sanitize_for_log(iface.name),
                    sanitize_for_log(iface.description),
                )
                return iface.name

        return None

    def select_gateway(self) -> str:
        """Select the IPv4 gateway of the primary interface.

        Re-runs interface selection. If the selected interface has no IPv4
        gateway, the first one found on any up, non-loopback interface is
        used (enumeration order, no speed tie-break).

        Returns:
            Gateway address, or 192.168.1.1 if none found.
        """
        primary = self.select_primary_interface()

        try:
            interfaces = self.provider.list_interfaces()
        except DETECTION_ERRORS as e:
            logger.warning("Error detecting gateway: %s", sanitize_for_log(str(e)))
            interfaces = []

        for iface in interfaces:
            if iface.name != primary:
                continue
            gateway = next((gw for gw in iface.gateways if is_valid_ipv4(gw)), None)
            if gateway:
                logger.info(
                    "Found gateway: %s on interface %s", gateway, sanitize_for_log(iface.name)
                )
                return gateway
            break

        for iface in interfaces:
            if not iface.is_up or iface.is_loopback:
                continue
            gateway = next((gw for gw in iface.gateways if is_valid_ipv4(gw)), None)
            if gateway:
                logger.info(
                    "Found gateway: %s on interface %s (fallback)",
                    gateway,
                    sanitize_for_log(iface.name),
                )
                return gateway

        logger.warning("Could not detect gateway, using default: %s", config.DEFAULT_GATEWAY)
        return config.DEFAULT_GATEWAY

    def select_primary(self, include_gateway: bool = False) -> PrimaryInterface:
        """Select primary interface and, if requested, its gateway."""
        name = self.select_primary_interface()
        gateway = self.select_gateway() if include_gateway else None
        return PrimaryInterface(name=name, gateway=gateway)

    def interface_exists(self, name: str) -> bool:
        """Check whether an interface with this name currently exists."""
        try:
            return any(iface.name == name for iface in self.provider.list_interfaces())
        except DETECTION_ERRORS as e:
            logger.debug("Interface lookup failed: %s", sanitize_for_log(str(e)))
            return False
