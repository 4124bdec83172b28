"""Utilities package for sockstun.

Provides system command execution, input validation, and text formatting.
"""

from .formatters import (
    cleanup_isp_name,
    format_command,
    mask_tunnel_arguments,
    shorten_text,
)
from .system import (
    command_exists,
    detect_platform,
    is_elevated,
    run_command,
    sanitize_for_log,
)
from .validators import is_safe_argument_name, is_valid_ipv4, validate_interface_name

__all__ = [
    # System
    "run_command",
    "command_exists",
    "detect_platform",
    "is_elevated",
    "sanitize_for_log",
    # Validators
    "validate_interface_name",
    "is_safe_argument_name",
    "is_valid_ipv4",
    # Formatters
    "cleanup_isp_name",
    "format_command",
    "mask_tunnel_arguments",
    "shorten_text",
]
