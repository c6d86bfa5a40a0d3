# core/logging_config.py
"""
Logging for the service: console always, rotating file when LOG_TO_FILE is set.
"""

from __future__ import annotations

import logging
from logging.config import dictConfig
from pathlib import Path

from core.config import Settings


BASE_DIR = Path(__file__).resolve().parent.parent

LOG_FILE_NAME = "marketing_analyzer.log"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FORMAT_FILE = "%(asctime)s | %(levelname)s | %(name)s | %(module)s:%(lineno)d | %(message)s"


def _log_dir(settings: Settings) -> Path:
    log_dir = Path(settings.LOG_DIR)
    if not log_dir.is_absolute():
        log_dir = BASE_DIR / log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def setup_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.APP_DEBUG else "INFO"

    handlers: dict = {
        "console": {"class": "logging.StreamHandler", "formatter": "console", "level": level},
    }
    if settings.LOG_TO_FILE:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "file",
            "filename": str(_log_dir(settings) / LOG_FILE_NAME),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 10,
            "encoding": "utf-8",
            "level": level,
        }

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"format": LOG_FORMAT},
                "file": {"format": LOG_FORMAT_FILE},
            },
            "handlers": handlers,
            "root": {"level": level, "handlers": list(handlers)},
            # SQL echo only while debugging; access lines are noise here
            "loggers": {
                "uvicorn.access": {"level": "WARNING"},
                "sqlalchemy.engine": {"level": "INFO" if settings.APP_DEBUG else "WARNING"},
            },
        }
    )


logger = logging.getLogger("marketing_analyzer")
