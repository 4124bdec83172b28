"""Run summary formatting and display.

Prints the configuration steps of a tunnel run as a color-coded table.
"""

import sys
from typing import TextIO

import config
from colors import Color
from enums import RunState
from models import CommandResult, RunReport
from utils import cleanup_isp_name, format_command, shorten_text


def format_report(report: RunReport, file: TextIO | None = None) -> None:
    """Format and print the run summary to specified file or stdout.

    Process:
        1. Print header with platform, interface and gateway
        2. Print one row per configuration command (green ok, red failed)
        3. Print footer with terminal state and tunnel exit code

    Args:
        report: Finished RunReport
        file: Optional file handle (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    print("=" * config.TABLE_WIDTH, file=file)
    print(f"{Color.CYAN}Tunnel Setup Summary{Color.RESET}", file=file)
    print("=" * config.TABLE_WIDTH, file=file)

    print(f"Platform:   {report.platform.value}", file=file)
    print(f"Interface:  {report.interface or '--'}", file=file)
    print(f"Gateway:    {report.gateway or '--'}", file=file)
    if report.tunnel_command:
        command = shorten_text(format_command(report.tunnel_command), config.TABLE_WIDTH - 12)
        print(f"Tunnel:     {command}", file=file)
    if report.egress:
        print(
            f"Egress:     {report.egress.external_ip} "
            f"({cleanup_isp_name(report.egress.isp)}, {report.egress.country})",
            file=file,
        )

    if report.commands:
        print("=" * config.TABLE_WIDTH, file=file)
        headers = [name.ljust(width) for name, width in config.TABLE_COLUMNS]
        print(config.COLUMN_SEPARATOR.join(headers), file=file)
        print("-" * config.TABLE_WIDTH, file=file)
        for result in report.commands:
            print(_format_row(result), file=file)

    print("=" * config.TABLE_WIDTH, file=file)
    state_color = Color.GREEN if report.state == RunState.EXITED else Color.RED
    footer = f"Result: {state_color}{report.state.value.upper()}{Color.RESET}"
    if report.tunnel_exit_code is not None:
        footer += f" (tun2socks exit code {report.tunnel_exit_code})"
    if report.error:
        footer += f" - {report.error}"
    print(footer, file=file)
    failed = len(report.failed_commands)
    if failed:
        print(
            f"{Color.YELLOW}{failed} configuration command(s) failed; "
            f"changes already applied were not rolled back{Color.RESET}",
            file=file,
        )


def _format_row(result: CommandResult) -> str:
    """Format one command row (padding applied before coloring)."""
    widths = [width for _, width in config.TABLE_COLUMNS]
    exit_text = "--" if result.returncode is None else str(result.returncode)
    status = "OK" if result.ok else "FAILED"

    cells = [
        shorten_text(result.description or "--", widths[0]).ljust(widths[0]),
        shorten_text(format_command(result.command), widths[1]).ljust(widths[1]),
        exit_text.ljust(widths[2]),
        status.ljust(widths[3]),
    ]

    color = Color.GREEN if result.ok else Color.RED
    return f"{color}{config.COLUMN_SEPARATOR.join(cells)}{Color.RESET}"
