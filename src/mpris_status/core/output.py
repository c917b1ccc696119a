"""
Logging setup using Loguru.

Diagnostics go to stderr; stdout carries only report output read by
status bars.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def setup_loguru(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """
    Configure loguru sinks.

    Args:
        level: Minimum level for the stderr sink (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path for a rotating file sink that captures DEBUG and up
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format="{level}: {message}",
        colorize=False,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention=5,  # Keep 5 backup files
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
            enqueue=False,  # Synchronous writes
        )

    logger.debug(f"Loguru initialized (level={level}, log_file={log_file})")
