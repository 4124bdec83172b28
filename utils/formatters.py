"""Text formatting utilities for DISPLAY ONLY.

All cleanup functions work on DISPLAY DATA, never on raw data.
"""

import re

from models import ProxyEndpoint


def cleanup_isp_name(isp: str) -> str:
    """Clean ISP name for DISPLAY (raw data unchanged).

    Examples:
        "AS12345 Comcast Cable" → "Comcast Cable"

    Args:
        isp: ISP name from ipinfo.io (may include AS number)

    Returns:
        Cleaned ISP name for display.
    """
    if isp in ("--", "N/A", "QUERY FAILED"):
        return isp

    cleaned = re.sub(r"^AS\d+\s+", "", isp).strip()

    return cleaned or isp


def mask_tunnel_arguments(args: list[str], proxy: ProxyEndpoint) -> list[str]:
    """Replace the proxy URL in tunnel arguments with its masked form.

    Args:
        args: Tunnel executable argv (without the executable)
        proxy: Proxy the arguments were built from

    Returns:
        New list safe to log or export.
    """
    url = proxy.to_url()
    return [proxy.masked_url() if arg == url else arg for arg in args]


def format_command(cmd: list[str] | tuple[str, ...]) -> str:
    """Render argv for display, quoting arguments containing spaces."""
    return " ".join(f'"{part}"' if " " in part else part for part in cmd)


def shorten_text(text: str, max_length: int) -> str:
    """Truncate text to fit column width.

    Tries to break at word boundary.
    Adds "..." if truncated.

    Args:
        text: Text to truncate
        max_length: Maximum length (including "..." if truncated)

    Returns:
        Truncated text with "..." if needed.
    """
    if len(text) <= max_length:
        return text

    # Truncate with space for "..."
    truncated = text[: max_length - 3]

    # Try to break at word boundary
    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.7:  # Good break point
        return truncated[:last_space] + "..."

    return truncated + "..."
