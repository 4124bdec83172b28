"""Logging configuration for sockstun.

Everything sockstun reports goes through the root logger: selection
decisions, each configuration command, and the tunnel's own output
relayed line by line with "[tun] " / "[tun ERROR] " prefixes. Messages
use % arguments so untrusted text (interface names, tunnel output) is
never interpreted as a format string.
"""

import logging
from pathlib import Path

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that would otherwise interleave with relayed tunnel output
NOISY_LOGGERS = ("urllib3", "requests", "asyncio")


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name.

    The record is restored after formatting, so a file handler attached to
    the same logger still writes plain level names.
    """

    COLORS = {
        "DEBUG": "\033[96m",  # Cyan
        "INFO": "\033[92m",  # Green
        "WARNING": "\033[93m",  # Yellow
        "ERROR": "\033[91m",  # Red
        "CRITICAL": "\033[95m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    use_colors: bool = True,
) -> None:
    """Attach console (and optional file) handlers to the root logger.

    tun2socks stdout is relayed at INFO, so INFO is the default console
    level; --quiet keeps only warnings and tunnel errors. The log file
    always records DEBUG, which includes every command's stdout/stderr.

    Args:
        verbose: Show DEBUG on the console (wins over quiet)
        quiet: Show WARNING and above on the console
        log_file: Path for a full DEBUG log of the run
        use_colors: Color level names on the console
    """
    level = _console_level(verbose, quiet)

    root_logger = logging.getLogger()
    # The file handler needs DEBUG records; the console handler filters its own
    root_logger.setLevel(logging.DEBUG if log_file else level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    if use_colors:
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT))
    else:
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    if not verbose:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__ (e.g. "tunnel.supervisor")."""
    return logging.getLogger(name)
