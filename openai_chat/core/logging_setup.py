"""Logging setup for applications embedding the client."""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

from openai_chat.core.config import get_settings

PACKAGE_LOGGER = "openai_chat"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5  # Keep 5 backup files


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """Attach console (and optional rotating file) handlers to the package logger.

    Args:
        level: Log level name; defaults to settings.LOG_LEVEL
        log_file: Optional path for a rotating log file

    Returns:
        The configured package logger
    """
    level = (level or get_settings().LOG_LEVEL).upper()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    # Replace handlers from a previous call
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.setLevel(level)
    return package_logger
