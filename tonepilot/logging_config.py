"""Loguru logging configuration."""

import os
import sys

from loguru import logger

LOG_FORMAT = "<level>{time:YYYY-MM-DD HH:mm:ss} | {name}:{function}:{line} | {message}</level>"


def setup_logging(level: str | None = None) -> int:
    """
    Replace loguru's handlers with a single stderr sink.

    Args:
        level: Level name (any case). Defaults to $LOG_LEVEL, then INFO.

    Returns:
        The loguru handler id, for callers that want to remove it later.
    """
    level = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()

    logger.remove()
    return logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )
