"""Configuration constants for sockstun.

All configurable values stored here for easy customization.
Single source of truth for all constants and configuration.
"""

from enum import IntEnum

# Primary Interface Detection
# Connecting a UDP socket sends nothing; the OS only resolves the route,
# which tells us the local address used for default-route traffic.
PROBE_HOST: str = "8.8.8.8"
PROBE_PORT: int = 53

FALLBACK_INTERFACE_NAMES: dict[str, str] = {
    "windows": "Ethernet",
    "macos": "en0",
    "linux": "eth0",
}
FALLBACK_INTERFACE_NAME: str = "eth0"
DEFAULT_GATEWAY: str = "192.168.1.1"

WIRELESS_KEYWORDS: tuple[str, ...] = ("wireless", "wifi", "wi-fi")

# Interface name prefixes used for classification (psutil has no type info)
TUNNEL_PREFIXES: tuple[str, ...] = (
    "tun",
    "tap",
    "utun",
    "wg",
    "ppp",
    "ipsec",
    "gif",
    "stf",
    "wintun",
)
WIRELESS_PREFIXES: tuple[str, ...] = ("wl", "wlan")

# Proxy
DEFAULT_PROXY_PORT: int = 1080
PROXY_SCHEME: str = "socks5"

# Tunnel Executable
TUN2SOCKS_BINARY: str = "tun2socks"
TUN_STDOUT_PREFIX: str = "[tun] "
TUN_STDERR_PREFIX: str = "[tun ERROR] "

# Grace period for tun2socks to exit after Ctrl+C
TERMINATE_TIMEOUT_SECONDS: float = 5.0

# Readiness wait for the virtual device (Windows/macOS).
# Worst case equals the historical fixed 5 second delay.
READINESS_TIMEOUT_SECONDS: float = 5.0
READINESS_POLL_SECONDS: float = 0.5

# Windows (wintun adapter)
WINDOWS_DEVICE: str = "wintun"
WINDOWS_TUN_ADDRESS: str = "192.168.123.1"
WINDOWS_TUN_NETMASK: str = "255.255.255.0"
WINDOWS_TUN_DNS: str = "8.8.8.8"
WINDOWS_ROUTE_METRIC: int = 1

# macOS (utun device)
MACOS_DEVICE: str = "utun123"
MACOS_TUN_ADDRESS: str = "198.18.0.1"

# Eight exponentially growing blocks: 0.0.0.0/0 minus 0.0.0.0/8.
# The tunnel block is added as a more specific route inside 128.0.0.0/1.
MACOS_ROUTE_LADDER: list[str] = [
    "1.0.0.0/8",
    "2.0.0.0/7",
    "4.0.0.0/6",
    "8.0.0.0/5",
    "16.0.0.0/4",
    "32.0.0.0/3",
    "64.0.0.0/2",
    "128.0.0.0/1",
]
TUNNEL_NETWORK: str = "198.18.0.0/15"

# Linux (kernel TUN device)
LINUX_DEVICE: str = "tun0"
LINUX_TUN_ADDRESS: str = "198.18.0.1"
LINUX_TUN_PREFIX: int = 15
LINUX_TUN_METRIC: int = 1
LINUX_FALLBACK_METRIC: int = 10

# Command Execution
TIMEOUT_SECONDS: int = 10

# Required System Commands (per platform)
REQUIRED_COMMANDS: dict[str, list[str]] = {
    "linux": ["ip", "sysctl"],
    "macos": ["ifconfig", "route", "netstat"],
    "windows": ["netsh", "route"],
}

INSTALL_HINTS: dict[str, str] = {
    "ip": "sudo apt install iproute2",
    "sysctl": "sudo apt install procps",
    "ifconfig": "part of the macOS base system (check PATH)",
    "route": "part of the base system (check PATH)",
    "netstat": "part of the macOS base system (check PATH)",
    "netsh": "part of Windows (check PATH)",
}

# Egress Check
IPINFO_URL: str = "https://ipinfo.io/json"
RETRY_ATTEMPTS: int = 3
RETRY_BACKOFF_FACTOR: float = 1.0

# Report Table Configuration
TABLE_COLUMNS: list[tuple[str, int]] = [
    ("STEP", 34),
    ("COMMAND", 60),
    ("EXIT", 6),
    ("STATUS", 8),
]

COLUMN_SEPARATOR: str = "   "  # 3 spaces
TABLE_WIDTH: int = 117


class ExitCode(IntEnum):
    """Exit codes for the sockstun tool.

    Only "ran" versus "did not run" is distinguished for tunnel runs.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENTS = 4


# Tool Metadata
VERSION: str = "1.0.0"
TOOL_NAME: str = "sockstun"
