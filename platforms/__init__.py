"""Per-OS tunnel setup strategies."""

from .base import TunnelStrategy
from .linux import LinuxStrategy
from .macos import MacOSStrategy
from .windows import WindowsStrategy

__all__ = [
    "TunnelStrategy",
    "LinuxStrategy",
    "MacOSStrategy",
    "WindowsStrategy",
]
