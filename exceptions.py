"""Custom exceptions for sockstun."""


class SocksTunError(Exception):
    """Base exception for tunnel setup errors."""


class InterfaceDetectionError(SocksTunError):
    """Raised when the OS interface snapshot cannot be read."""


class UnsupportedPlatformError(SocksTunError):
    """Raised when no tunnel strategy exists for the host OS."""


class TunnelStartError(SocksTunError):
    """Raised when the tunnel executable cannot be spawned."""


class ProxyConfigError(SocksTunError, ValueError):
    """Raised when proxy settings cannot be parsed."""
