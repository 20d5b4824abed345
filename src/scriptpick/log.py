"""Structured logging setup.

Log output always goes to stderr. Stdout belongs to the ``Running:`` header
and to the script being launched.
"""

import logging
import sys
from typing import Any

import structlog


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Resolved per logger so a swapped sys.stderr (e.g. under test runners) is honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for the current process.

    Args:
        verbose: Emit debug events instead of warnings and errors only.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
