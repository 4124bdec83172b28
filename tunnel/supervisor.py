"""Tunnel process supervision.

Launches the tunnel executable with both output streams piped, drains
each stream line by line into the log, and exposes an awaitable exit.
"""

import asyncio
import contextlib
import logging
from typing import Any, Awaitable, Callable

import config
from exceptions import TunnelStartError
from logging_config import get_logger
from utils import sanitize_for_log

logger = get_logger(__name__)

ProcessLauncher = Callable[..., Awaitable[Any]]


async def _pump(
    reader: asyncio.StreamReader | None,
    buffer: list[str],
    prefix: str,
    level: int,
) -> None:
    """Forward each line of a stream to the log until EOF.

    Only this coroutine writes to its buffer.
    """
    if reader is None:
        return
    while True:
        try:
            raw = await reader.readline()
        except ValueError:
            # Line longer than the stream limit; the reader has discarded it
            logger.warning("%sline too long, dropped", prefix)
            continue
        if not raw:
            break
        line = raw.decode(errors="replace").rstrip("\r\n")
        buffer.append(line)
        logger.log(level, "%s%s", prefix, sanitize_for_log(line))


class TunnelProcess:
    """Handle for one running tunnel executable.

    Owned by the strategy that started it; terminal once the process exits.
    """

    def __init__(self, process: Any) -> None:
        self.process = process
        self.stdout_lines: list[str] = []
        self.stderr_lines: list[str] = []
        self._readers: list[asyncio.Task] = []

    @property
    def pid(self) -> int | None:
        return getattr(self.process, "pid", None)

    @property
    def returncode(self) -> int | None:
        return self.process.returncode

    def attach_readers(self) -> None:
        """Start one reader task per output stream."""
        self._readers = [
            asyncio.create_task(
                _pump(self.process.stdout, self.stdout_lines, config.TUN_STDOUT_PREFIX, logging.INFO)
            ),
            asyncio.create_task(
                _pump(self.process.stderr, self.stderr_lines, config.TUN_STDERR_PREFIX, logging.ERROR)
            ),
        ]

    async def wait(self) -> int:
        """Suspend until the process exits (no timeout) and output is drained.

        Returns:
            Process exit code.
        """
        returncode = await self.process.wait()
        if self._readers:
            await asyncio.gather(*self._readers)
        return returncode

    def terminate(self) -> None:
        """Ask the process to stop (no-op if it already exited)."""
        if self.process.returncode is not None:
            return
        with contextlib.suppress(ProcessLookupError):
            self.process.terminate()

    def partial_output(self) -> tuple[str, str]:
        """Output captured so far as (stdout, stderr)."""
        return "\n".join(self.stdout_lines), "\n".join(self.stderr_lines)


class TunnelProcessSupervisor:
    """Starts the tunnel executable and streams its output."""

    def __init__(self, launcher: ProcessLauncher = asyncio.create_subprocess_exec) -> None:
        self.launcher = launcher

    async def start(self, executable: str, args: list[str]) -> TunnelProcess:
        """Spawn the tunnel executable.

        Args:
            executable: Path to the tunnel executable
            args: Arguments (argv without the executable)

        Returns:
            TunnelProcess handle with output readers attached.

        Raises:
            TunnelStartError: If the process cannot be spawned.
        """
        try:
            process = await self.launcher(
                executable,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise TunnelStartError(f"Cannot start {executable}: {e}") from e

        handle = TunnelProcess(process)
        handle.attach_readers()
        logger.debug("Tunnel process started (pid %s)", handle.pid)
        return handle
