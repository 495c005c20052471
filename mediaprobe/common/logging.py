# mediaprobe/common/logging.py
from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "mediaprobe", level: int | str = logging.INFO) -> logging.Logger:
    """
    Return a named logger. If neither the root logger nor this logger has
    handlers yet, install a basicConfig once so library use still prints.
    `level` accepts an int or a level name ("DEBUG", "info", ...).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT)
    logger.setLevel(level)
    return logger
