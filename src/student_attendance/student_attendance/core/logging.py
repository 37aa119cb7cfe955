from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .constants import LOG_BACKUP_COUNT, LOG_FILE_NAME, LOG_FORMAT, LOG_MAX_BYTES

ROOT_LOGGER_NAME = "student_attendance"


def configure_logging(level: str = "INFO", *, log_dir: Optional[str | Path] = None) -> logging.Logger:
    """Attach console (and optionally rotating file) handlers to the package logger.

    Safe to call more than once: handlers are only added the first time.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level.upper())

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path / LOG_FILE_NAME,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
