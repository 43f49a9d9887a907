"""Logging configuration for the Parakeet CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "parakeet"


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> logging.Logger:
    """Route ``parakeet.*`` log records to stderr through a single Rich handler.

    Calling this again replaces the handler, so repeated CLI invocations in one
    process (as in tests) do not duplicate output.

    Args:
        level: Logging level name.
        console: Console to render to; defaults to a stderr console.

    Returns:
        logging.Logger: The configured package logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger


__all__ = ["configure_logging"]
