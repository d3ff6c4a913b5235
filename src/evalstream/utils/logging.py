"""Loguru setup for evaluation runs."""

import os
import sys
from pathlib import Path

from loguru import logger

LEVEL_ENV = "EVALSTREAM_LOG_LEVEL"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <7}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}"


def setup_logging(
    level: str | None = None,
    log_file: str | Path | None = None,
    only_evalstream: bool = False,
) -> None:
    """Replace loguru handlers with a console handler and an optional file handler.

    Args:
        level: Minimum level. Falls back to $EVALSTREAM_LOG_LEVEL, then INFO.
        log_file: Optional file for the same records (parent dirs are created).
        only_evalstream: Drop records that do not come from the evalstream package.
    """
    level = (level or os.environ.get(LEVEL_ENV) or "INFO").upper()
    record_filter = "evalstream" if only_evalstream else None

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, filter=record_filter, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_path, level=level, format=FILE_FORMAT, filter=record_filter)

    logger.debug(f"evalstream logging at {level}")
