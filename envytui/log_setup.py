"""Logging configuration.

The dashboard owns the screen, so log records only ever go to a file. Without
a log file the package logger gets a ``NullHandler``.
"""

from __future__ import annotations

import logging
from pathlib import Path

PACKAGE_LOGGER = "envytui"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(log_file: Path | None = None, *, debug: bool = False) -> logging.Logger:
    """Attach handlers to the package logger and return it.

    Existing root handlers are left alone so embedding applications keep
    their own configuration.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(str(log_file), mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    return logger
