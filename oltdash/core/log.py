"""Logging configuration for oltdash."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING") -> None:
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger()
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        show_time=False,
    )
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))
    logging.getLogger("httpcore").setLevel(logging.WARNING)
