"""Configuration command runner.

Runs one-shot OS configuration commands synchronously. Failures are
logged and recorded, never raised: a failed sysctl must not abort the
whole tunnel setup.
"""

from typing import Callable

from logging_config import get_logger
from models import CommandResult
from utils import format_command, run_command, sanitize_for_log

logger = get_logger(__name__)

CommandExecutor = Callable[[list[str]], CommandResult]


class CommandRunner:
    """Sequential, blocking command execution with result collection."""

    def __init__(self, executor: CommandExecutor = run_command) -> None:
        self.executor = executor
        self.results: list[CommandResult] = []

    def run(self, command: str, *args: str, description: str = "") -> CommandResult:
        """Run a command and wait for it to exit.

        Args:
            command: Executable name
            *args: Arguments
            description: Human-readable step name for logs and reports

        Returns:
            CommandResult (also appended to self.results).
        """
        argv = [command, *args]
        result = self.executor(argv)
        result.description = description
        self.results.append(result)

        rendered = sanitize_for_log(format_command(argv))

        if result.stdout:
            logger.debug("%s", sanitize_for_log(result.stdout))

        if result.error:
            logger.warning("Error executing command %s: %s", rendered, sanitize_for_log(result.error))
        elif result.returncode != 0:
            logger.warning(
                "Command %s exited with %d: %s",
                rendered,
                result.returncode,
                sanitize_for_log(result.stderr or "no output"),
            )
        else:
            logger.info("Executed command: %s", rendered)

        return result
