"""Logging setup for the command line scripts."""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# LOG_LEVEL=DEBUG / INFO / WARNING / ERROR overrides the default
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def setup_logging(
    verbose: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Call once at program start. Library modules only get loggers."""
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )
