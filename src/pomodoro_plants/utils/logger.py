"""Application-wide logger writing to platformdirs user_log_dir.

One rotating file handler is attached to the ``pomodoro_plants`` logger.
Components log through children of it (``pomodoro_plants.store``,
``pomodoro_plants.controller``, ...) so the file shows who wrote each line.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "pomodoro_plants"
_LOG_FILE = "garden.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _configure() -> logging.Logger:
    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or the child logger for ``component``.

    The file handler is set up on the first call.
    """
    global _logger
    if _logger is None:
        _logger = _configure()
    if component is None:
        return _logger
    return _logger.getChild(component)
