"""Linux tunnel setup (kernel TUN device, configured with ip and sysctl)."""

import config
from enums import Platform
from logging_config import get_logger
from models import ConfigStep, PrimaryInterface
from platforms.base import TunnelStrategy
from utils import sanitize_for_log, validate_interface_name

logger = get_logger(__name__)


class LinuxStrategy(TunnelStrategy):
    """The TUN device and routes are set up before tun2socks starts.

    The original default route is re-added at a higher metric so it stays
    available as a fallback, and reverse-path filtering is disabled because
    return traffic may arrive on the primary interface.
    """

    platform = Platform.LINUX
    device = config.LINUX_DEVICE
    needs_gateway = True
    configure_before_start = True

    def configuration_steps(self, primary: PrimaryInterface) -> list[ConfigStep]:
        device = self.device
        address = config.LINUX_TUN_ADDRESS
        gateway = primary.gateway or config.DEFAULT_GATEWAY

        steps = [
            ConfigStep(
                "Creating TUN interface",
                ("ip", "tuntap", "add", "mode", "tun", "dev", device),
            ),
            ConfigStep(
                "Assigning TUN address",
                ("ip", "addr", "add", f"{address}/{config.LINUX_TUN_PREFIX}", "dev", device),
            ),
            ConfigStep(
                "Bringing TUN interface up",
                ("ip", "link", "set", "dev", device, "up"),
            ),
            ConfigStep(
                "Removing default route",
                ("ip", "route", "del", "default"),
            ),
            ConfigStep(
                "Routing default traffic through TUN",
                (
                    "ip", "route", "add", "default", "via", address,
                    "dev", device, "metric", str(config.LINUX_TUN_METRIC),
                ),
            ),
            ConfigStep(
                "Restoring original default route",
                (
                    "ip", "route", "add", "default", "via", gateway,
                    "dev", primary.name, "metric", str(config.LINUX_FALLBACK_METRIC),
                ),
            ),
            ConfigStep(
                "Disabling rp_filter",
                ("sysctl", "net.ipv4.conf.all.rp_filter=0"),
            ),
        ]

        if validate_interface_name(primary.name) and " " not in primary.name:
            steps.append(
                ConfigStep(
                    f"Disabling rp_filter on {primary.name}",
                    ("sysctl", f"net.ipv4.conf.{primary.name}.rp_filter=0"),
                )
            )
        else:
            logger.warning(
                "Skipping rp_filter for unusual interface name: %s",
                sanitize_for_log(primary.name),
            )

        return steps
