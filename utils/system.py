"""System command execution utilities.

Provides safe command execution with timeout protection, platform
detection and the privilege check.
Never uses shell=True to prevent command injection.
"""

import ctypes
import os
import re
import shutil
import subprocess
import sys
from typing import Any

import config
from enums import Platform
from models import CommandResult


def run_command(cmd: list[str]) -> CommandResult:
    """Execute system command safely.

    Security:
        - NEVER shell=True
        - Timeout: 10 seconds

    Never raises: spawn failures and timeouts are reported in the
    result's error field.

    Args:
        cmd: Command as list (e.g., ["ip", "route", "show"])

    Returns:
        CommandResult with exit code and captured (stripped) output.
    """
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=config.TIMEOUT_SECONDS,
            check=False,  # Don't raise on non-zero exit
            shell=False,  # CRITICAL: Never use shell=True
        )
    except subprocess.TimeoutExpired:
        return CommandResult(
            command=list(cmd),
            error=f"timed out after {config.TIMEOUT_SECONDS}s",
        )
    except FileNotFoundError:
        return CommandResult(command=list(cmd), error="command not found")
    except (OSError, ValueError, RuntimeError) as e:
        return CommandResult(command=list(cmd), error=str(e))

    return CommandResult(
        command=list(cmd),
        returncode=result.returncode,
        stdout=(result.stdout or "").strip(),
        stderr=(result.stderr or "").strip(),
    )


def command_exists(cmd: str) -> bool:
    """Check if command exists in PATH.

    Args:
        cmd: Command name (e.g., "ip", "netsh")

    Returns:
        True if command is available, False otherwise.
    """
    return shutil.which(cmd) is not None


def detect_platform() -> Platform:
    """Map sys.platform to a supported platform family."""
    if sys.platform == "win32":
        return Platform.WINDOWS
    if sys.platform == "darwin":
        return Platform.MACOS
    if sys.platform.startswith("linux"):
        return Platform.LINUX
    return Platform.UNSUPPORTED


def is_elevated(platform: Platform) -> bool:
    """Check whether the current process may reconfigure the network.

    Windows: member of the built-in Administrators group.
    Unix: effective user name is exactly "root".

    Args:
        platform: Host platform

    Returns:
        True if privileged, False otherwise (including on lookup errors).
    """
    if platform == Platform.WINDOWS:
        try:
            return ctypes.windll.shell32.IsUserAnAdmin() != 0
        except (AttributeError, OSError):
            return False

    try:
        import pwd  # Unix only

        return pwd.getpwuid(os.geteuid()).pw_name == "root"
    except (ImportError, AttributeError, KeyError):
        return False


def sanitize_for_log(value: Any) -> str:
    """Sanitize values before logging to prevent log injection.

    Removes:
        - Newlines
        - ANSI escape codes
        - Control characters

    Max length: 200 characters

    Args:
        value: Value to sanitize (any type, will be converted to string)

    Returns:
        Sanitized string safe for logging.
    """
    text = str(value)

    # Remove newlines
    text = text.replace("\n", " ").replace("\r", " ")

    # Remove ANSI escape codes
    text = re.sub(r"\x1b\[[0-9;]*m", "", text)

    # Remove control characters
    text = "".join(c for c in text if c.isprintable() or c.isspace())

    # Truncate
    if len(text) > 200:
        text = text[:197] + "..."

    return text
