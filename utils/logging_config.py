"""
Loguru sinks for the admin data layer: console, app.log and error.log.
"""

import sys
from pathlib import Path

from loguru import logger

from config import DEBUG, LOG_DIR, LOG_LEVEL

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(log_dir: str = LOG_DIR, level: str = LOG_LEVEL):
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()

    logger.add(
        sink=sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level="DEBUG" if DEBUG else level,
        colorize=True,
        diagnose=DEBUG,
    )

    logger.add(
        sink=log_path / "app.log",
        rotation="100 MB",
        retention="10 days",
        format=FILE_FORMAT,
        level=level,
        diagnose=DEBUG,
        enqueue=True,
        compression="zip",
    )

    # Errors only
    logger.add(
        sink=log_path / "error.log",
        rotation="50 MB",
        retention="30 days",
        format=FILE_FORMAT,
        level="ERROR",
        backtrace=True,
        diagnose=DEBUG,
        enqueue=True,
        compression="zip",
    )

    logger.info("Logging configured in {}", log_path)
    return logger
