"""Structured logging configuration."""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[job_id]}</magenta> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[job_id]} | {name}:{function}:{line} | {message}"

# Records logged outside a job show this in the job column
NO_JOB = "-"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure logging with a console sink and an optional rotating file sink.

    Every record carries a `job_id` field so lines from the queue worker can
    be told apart from CLI and startup output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to log file
        rotation: Log rotation size
        retention: Log retention period
    """
    logger.remove()
    logger.configure(extra={"job_id": NO_JOB})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=log_level, colorize=True)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # enqueue: the worker thread and the main thread share this file
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=log_level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            enqueue=True,
        )


def setup_logging_from_settings(settings: Any) -> None:
    """Configure logging from application settings (debug forces DEBUG level)."""
    level = "DEBUG" if settings.debug else settings.log_level
    log_file = Path(settings.log_file) if settings.log_file else None
    setup_logging(log_level=level, log_file=log_file)


def get_logger(name: str, **context: Any) -> Any:
    """
    Get a logger instance with optional context.

    Args:
        name: Logger name (typically __name__)
        **context: Additional context fields (job_id, scene_index, etc.)

    Returns:
        Logger instance with bound context
    """
    return logger.bind(name=name, **context)


setup_logging()
