"""Logging setup.

The terminal belongs to the editor while it runs, so records go to a file or
nowhere at all.
"""
from __future__ import annotations

import logging
import os

LOG_ENV_VAR = "ZEN_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(path: str | None = None, level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("zen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    path = path or os.environ.get(LOG_ENV_VAR)
    if not path:
        logger.addHandler(logging.NullHandler())
        return logger

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.info("logging to %s at %s", path, logging.getLevelName(logger.level))
    return logger
