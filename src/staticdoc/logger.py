"""Logging configuration for staticdoc with custom verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Define custom levels between standard logging levels
PAGES_LEVEL = 25  # Between INFO (20) and WARNING (30) - for verbosity level 1
LINKS_LEVEL = 15  # Between DEBUG (10) and INFO (20) - for verbosity level 2

logging.addLevelName(PAGES_LEVEL, "PAGES")
logging.addLevelName(LINKS_LEVEL, "LINKS")

# Verbosity level constants for external use
VERBOSITY_WARNINGS = 0  # Warnings and errors only
VERBOSITY_PAGES = 1  # Show every written page
VERBOSITY_LINKS = 2  # Show every resolved link
VERBOSITY_DEBUG = 3  # Full debug output


class StaticdocLogger(logging.Logger):
    """Custom logger with semantic verbosity methods.

    Provides methods that correspond to verbosity levels:
    - pages(): verbosity level 1 - one line per rendered page
    - links(): verbosity level 2 - relationship links as they resolve
    - debug(): verbosity level 3 - full details
    """

    def pages(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log page output (verbosity level 1)."""
        if self.isEnabledFor(PAGES_LEVEL):
            self._log(PAGES_LEVEL, msg, args, **kwargs)

    def links(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log link resolution (verbosity level 2)."""
        if self.isEnabledFor(LINKS_LEVEL):
            self._log(LINKS_LEVEL, msg, args, **kwargs)


def get_logger() -> StaticdocLogger:
    """Get the staticdoc logger instance (singleton).

    Returns the same logger instance on every call. Use setup_logger()
    to configure it before first use.
    """
    logging.setLoggerClass(StaticdocLogger)
    logger = logging.getLogger("staticdoc")
    assert isinstance(logger, StaticdocLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the staticdoc logger with verbosity level.

    Can be called multiple times to reconfigure the logger.

    Args:
        verbosity: 0=warnings, 1=pages, 2=links, 3=debug
        stream: Optional output stream (defaults to sys.stderr, useful for testing)
    """
    logger = get_logger()

    logger.handlers.clear()

    level_map = {
        0: logging.WARNING,
        1: PAGES_LEVEL,
        2: LINKS_LEVEL,
        3: logging.DEBUG,
    }
    logger.setLevel(level_map.get(verbosity, logging.WARNING))

    output_stream = stream if stream is not None else sys.stderr

    handler = logging.StreamHandler(output_stream)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Reset the logger to clean state.

    Useful for testing to ensure clean state between tests.
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
