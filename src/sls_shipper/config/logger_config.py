"""Logger configuration for the log shipper."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None, rotation: str = "10 MB", retention: str = "7 days") -> None:
    """Configure loguru logger for console and optional file output.

    Dropped oversized logs and log groups are reported as warnings, so the
    console sink should stay at WARNING or lower in production.

    Args:
        level: Minimum level for every sink
        log_file: Optional path of a rotating log file
        rotation: Rotation policy for the log file
        retention: Retention policy for rotated files
    """

    # Remove default loguru handler
    logger.remove()

    logger.add(
        sink=sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if log_file is not None:
        logger.add(
            sink=str(log_file),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=level,
            rotation=rotation,
            retention=retention,
            compression="gz",  # Compress rotated logs
            enqueue=True,  # Thread-safe logging
        )

        logger.info(f"File logging enabled: {log_file}")
