"""Windows tunnel setup (wintun adapter, configured with netsh)."""

import config
from enums import Platform
from models import ConfigStep, PrimaryInterface
from platforms.base import TunnelStrategy


class WindowsStrategy(TunnelStrategy):
    """tun2socks creates the wintun adapter; netsh configures it afterwards."""

    platform = Platform.WINDOWS
    device = config.WINDOWS_DEVICE

    def configuration_steps(self, primary: PrimaryInterface) -> list[ConfigStep]:
        name = f"name={self.device}"
        return [
            ConfigStep(
                "Configuring wintun interface",
                (
                    "netsh", "interface", "ipv4", "set", "address", name,
                    "source=static",
                    f"addr={config.WINDOWS_TUN_ADDRESS}",
                    f"mask={config.WINDOWS_TUN_NETMASK}",
                ),
            ),
            ConfigStep(
                "Configuring DNS settings",
                (
                    "netsh", "interface", "ipv4", "set", "dnsservers", name,
                    "static",
                    f"address={config.WINDOWS_TUN_DNS}",
                    "register=none",
                    "validate=no",
                ),
            ),
            ConfigStep(
                "Configuring routing",
                (
                    "netsh", "interface", "ipv4", "add", "route", "0.0.0.0/0",
                    self.device,
                    config.WINDOWS_TUN_ADDRESS,
                    f"metric={config.WINDOWS_ROUTE_METRIC}",
                ),
            ),
        ]
