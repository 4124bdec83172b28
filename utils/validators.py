"""Input validation utilities.

Provides validation for interface names and IP addresses.
Interface names end up in command arguments. The strict check applies
where a name is embedded in a key (sysctl), the lenient one everywhere else.
"""

import ipaddress
import re


def validate_interface_name(name: str) -> bool:
    """Validate interface name (security check).

    Allowed characters: letters, digits, space and [._:@()#*-]
    Note: spaces and parentheses occur in Windows friendly names
    ("Wi-Fi 2", "vEthernet (WSL)", "Local Area Connection* 2"),
    @ in veth pairs (eth0@if2).
    Max length: 256

    Args:
        name: Interface name to validate

    Returns:
        True if valid, False otherwise.
    """
    if not name or not name.strip():
        return False

    if len(name) > 256:
        return False

    if name.startswith("-"):
        return False

    if not re.match(r"^[a-zA-Z0-9 ._:@()#*-]+$", name):
        return False

    return True


def is_safe_argument_name(name: str) -> bool:
    """Check an interface name can be passed as a command argument.

    Localized Windows adapter names ("Беспроводная сеть",
    "Connexion réseau sans fil") are accepted. Commands never go through
    a shell, so only names that could be read as an option or that carry
    control characters are rejected.

    Args:
        name: Interface name as reported by the OS

    Returns:
        True if usable, False otherwise.
    """
    if not name or not name.strip():
        return False

    if len(name) > 256:
        return False

    if name.startswith("-"):
        return False

    return name.isprintable()


def is_valid_ipv4(address: str | None) -> bool:
    """Validate IPv4 address.

    Args:
        address: IPv4 address string or None

    Returns:
        True if valid IPv4 address, False otherwise.
    """
    if not address:
        return False
    try:
        ipaddress.IPv4Address(address)
        return True
    except ValueError:
        return False
