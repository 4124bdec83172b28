"""JSON export functionality.

Exports a tunnel run report to JSON format with metadata.
The proxy password never appears: tunnel_command is stored masked.
"""

import json
from datetime import datetime, timezone
from typing import Any

import config
from models import CommandResult, RunReport


def export_to_json(report: RunReport, indent: int = 2) -> str:
    """Export to JSON format with metadata.

    Args:
        report: Finished RunReport
        indent: JSON indentation (default 2)

    Returns:
        JSON string with metadata and report data.
    """
    metadata = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "tool": config.TOOL_NAME,
        "version": config.VERSION,
        "summary": {
            "ran": report.ran,
            "command_count": len(report.commands),
            "failed_commands": len(report.failed_commands),
        },
    }

    output = {
        "metadata": metadata,
        "run": _report_to_dict(report),
    }

    return json.dumps(output, indent=indent)


def _report_to_dict(report: RunReport) -> dict[str, Any]:
    """Convert RunReport to dictionary (flatten nested structure)."""
    return {
        "platform": report.platform.value,
        "state": report.state.value,
        "history": [state.value for state in report.history],
        "interface": report.interface,
        "gateway": report.gateway,
        "tunnel_command": report.tunnel_command,
        "tunnel_exit_code": report.tunnel_exit_code,
        "error": report.error,
        # Egress information (nested in model, flat in JSON)
        "egress_ip": report.egress.external_ip if report.egress else None,
        "egress_isp": report.egress.isp if report.egress else None,
        "egress_country": report.egress.country if report.egress else None,
        "commands": [_command_to_dict(result) for result in report.commands],
    }


def _command_to_dict(result: CommandResult) -> dict[str, Any]:
    """Convert CommandResult to dictionary."""
    return {
        "description": result.description,
        "command": result.command,
        "returncode": result.returncode,
        "ok": result.ok,
        "stdout": result.stdout,
        "stderr": result.stderr,
        "error": result.error,
    }
