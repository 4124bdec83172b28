"""Type-safe enumerations for sockstun.

All categorical values use enum types for type safety and consistency.
"""

from enum import Enum


class InterfaceKind(str, Enum):
    """Interface classification used by primary interface selection."""

    PHYSICAL = "physical"
    LOOPBACK = "loopback"
    TUNNEL = "tunnel"
    WIRELESS = "wireless"


class OperStatus(str, Enum):
    """Operational status of an interface."""

    UP = "up"
    DOWN = "down"


class Platform(str, Enum):
    """Host operating system families."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    UNSUPPORTED = "unsupported"


class RunState(str, Enum):
    """Tunnel run lifecycle.

    INIT -> PRIVILEGE_CHECK -> INTERFACE_DETECTED -> PROCESS_STARTED
    -> INTERFACE_CONFIGURED -> RUNNING -> EXITED | FAILED

    Linux configures the interface before the process starts, so it visits
    INTERFACE_CONFIGURED before PROCESS_STARTED.
    """

    INIT = "init"
    PRIVILEGE_CHECK = "privilege_check"
    INTERFACE_DETECTED = "interface_detected"
    PROCESS_STARTED = "process_started"
    INTERFACE_CONFIGURED = "interface_configured"
    RUNNING = "running"
    EXITED = "exited"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.EXITED, RunState.FAILED)
