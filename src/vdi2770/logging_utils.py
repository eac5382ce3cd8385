"""Root logging setup for the command line. The library itself only creates loggers."""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def configure_logging(
    level: int = logging.WARNING,
    *,
    rich_output: bool = True,
    stderr_level: int = logging.WARNING,
    formatter: logging.Formatter | None = None,
) -> None:
    """Configure root logging.

    With ``rich_output`` all records go to a ``RichHandler`` on stderr, so
    they never mix with report output on stdout. Otherwise DEBUG/INFO go to
    stdout and WARNING and above to stderr.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if rich_output:
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)
        return

    if formatter is None:
        formatter = logging.Formatter("%(name)s - %(levelname)s - %(message)s")

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_MaxLevelFilter(stderr_level - 1))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)


def level_from_verbosity(verbosity: int) -> int:
    """0 -> WARNING, 1 -> INFO, 2+ -> DEBUG."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG
