"""Logging setup routed through rich."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import AppInfo


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Configure the application logger and return it."""
    logger = logging.getLogger(AppInfo.NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Re-running the CLI in one process (tests) must not stack handlers
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
