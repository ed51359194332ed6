"""Logging configuration for the event planner."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "event_planner"


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Configure and return the package logger.

    Args:
        verbose: Log debug output instead of warnings only
        console: Console to log to (default: stderr)

    Returns:
        The configured "event_planner" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)

    # Prevent duplicate handlers
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger
