"""macOS tunnel setup (utun device, configured with ifconfig and route)."""

import config
from enums import Platform
from models import ConfigStep, PrimaryInterface
from platforms.base import TunnelStrategy


class MacOSStrategy(TunnelStrategy):
    """tun2socks creates the utun device; ifconfig and route configure it.

    Instead of replacing the default route, the address space is covered
    by eight more specific blocks, so the original default route stays in
    place for the tunnel's own carrier traffic.
    """

    platform = Platform.MACOS
    device = config.MACOS_DEVICE

    def configuration_steps(self, primary: PrimaryInterface) -> list[ConfigStep]:
        address = config.MACOS_TUN_ADDRESS
        steps = [
            ConfigStep(
                f"Configuring {self.device} interface",
                ("ifconfig", self.device, address, address, "up"),
            ),
        ]
        for network in [*config.MACOS_ROUTE_LADDER, config.TUNNEL_NETWORK]:
            steps.append(
                ConfigStep(
                    f"Routing {network}",
                    ("route", "add", "-net", network, address),
                )
            )
        return steps
