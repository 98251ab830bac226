"""Logging setup for the ``calcpad`` namespace."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.WARNING, console: Console | None = None) -> logging.Logger:
    """Configure the ``calcpad`` logger with a Rich handler on stderr.

    Safe to call more than once; existing handlers are replaced so repeated
    CLI invocations in one process don't duplicate output.
    """
    logger = logging.getLogger("calcpad")
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        level=level,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    return logger
