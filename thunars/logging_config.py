"""Logging setup for the thunars process.

The terminal belongs to the UI while the browser runs, so records only go
to a log file. Without one, a ``NullHandler`` keeps library logging quiet.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOGGER_NAME = "thunars"
LOG_FILE_ENV = "THUNARS_LOG_FILE"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = "WARNING", log_file: Path | None = None) -> logging.Logger:
    """Configure the ``thunars`` logger and return it.

    ``log_file`` falls back to ``$THUNARS_LOG_FILE`` when omitted. Existing
    handlers are replaced so repeated calls (tests, re-entry) do not stack.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level_name = level.upper() if level.upper() in VALID_LEVELS else "WARNING"
    logger.setLevel(getattr(logging, level_name))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if log_file is None:
        env_path = os.environ.get(LOG_FILE_ENV, "").strip()
        if env_path:
            log_file = Path(env_path).expanduser()

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, level_name))
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)
    return logger


__all__ = ["LOGGER_NAME", "LOG_FILE_ENV", "setup_logging"]
