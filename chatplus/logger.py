"""Application logger writing to a rotating file and to standard output."""

from __future__ import annotations

import logging
import os
import sys
import threading
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "chatplus"
LOG_FILE = Path("logs") / "app.log"
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5
MAX_AGE_DAYS = 30

_FORMAT = "%(asctime)s\t%(levelname)s\t%(filename)s:%(lineno)d\t%(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_lock = threading.Lock()
_logger: logging.Logger | None = None


def log_level(name: str | None) -> int:
    """Map a level name to a logging level; anything unknown is INFO."""
    levels = {
        "DEBUG": logging.DEBUG,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
    }
    return levels.get((name or "").upper(), logging.INFO)


def _prune_old_backups(log_file: Path) -> None:
    cutoff = time.time() - MAX_AGE_DAYS * 86400
    for backup in log_file.parent.glob(log_file.name + ".*"):
        try:
            if backup.stat().st_mtime < cutoff:
                backup.unlink()
        except OSError:
            pass


def get_logger() -> logging.Logger:
    """Return the shared application logger, configuring it on first use."""
    global _logger
    with _lock:
        if _logger is not None:
            return _logger
        level = log_level(os.environ.get("LOG_LEVEL"))
        formatter = logging.Formatter(_FORMAT, _DATE_FORMAT)

        log_file = LOG_FILE.resolve()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _prune_old_backups(log_file)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)

        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(level)
        logger.propagate = False
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.addHandler(file_handler)
        logger.addHandler(console_handler)
        _logger = logger
        return logger