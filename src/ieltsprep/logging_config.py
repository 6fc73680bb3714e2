"""Logging configuration for the vocabulary core."""
import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from ieltsprep.config import LoggingSettings, settings


def setup_logging(
    first_message: str = "",
    level: Optional[Union[int, str]] = None,
    config: Optional[LoggingSettings] = None,
) -> logging.Logger:
    """Configure logging for the entire application.

    Args:
        first_message: Optional banner written once handlers are attached.
        level: Optional logging level. If None, uses LOG_LEVEL.
        config: Logging settings, defaults to the global settings.
    """
    config = config or settings.logging

    if level is None:
        level = config.level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    formatter = logging.Formatter(config.format)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if first_message:
        root_logger.info(first_message)
    root_logger.debug(f"Logging configured with level: {logging.getLevelName(level)}")

    if config.dir is not None:
        log_dir = Path(config.dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / "ieltsprep.log"
        file_handler = TimedRotatingFileHandler(
            log_file,
            when=config.rotation,
            interval=config.interval,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.debug(
            f"Log file: {log_file} (rotation: {config.rotation}, "
            f"interval: {config.interval}, backup_count: {config.backup_count})"
        )

    # Set logging levels for third-party libraries
    logging.getLogger("faker").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return root_logger
