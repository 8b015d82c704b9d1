"""Loguru sink configuration.

Library modules log through ``from loguru import logger`` directly; only
the CLI calls :func:`configure_logging` to decide where records go.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT: str = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "WARNING", log_file: str | Path | None = None) -> None:
    """Replace loguru's default sink with a stderr sink and an optional file sink."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)
    if log_file is not None:
        logger.add(
            str(log_file),
            level="DEBUG",
            rotation="5 MB",
            retention=3,
            encoding="utf-8",
            enqueue=True,
            backtrace=True,
        )
