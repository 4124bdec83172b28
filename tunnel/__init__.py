"""Tunnel process supervision and configuration command execution."""

from .commands import CommandExecutor, CommandRunner
from .supervisor import ProcessLauncher, TunnelProcess, TunnelProcessSupervisor

__all__ = [
    "CommandExecutor",
    "CommandRunner",
    "ProcessLauncher",
    "TunnelProcess",
    "TunnelProcessSupervisor",
]
