from __future__ import annotations

import logging
import sys

LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def init_log(log_level: str | None = None) -> logging.Logger:
    """Configure the ``wavelines`` logger tree; ``None`` keeps it silent."""
    logger = logging.getLogger("wavelines")
    if log_level is None:
        logger.addHandler(logging.NullHandler())
        return logger

    level = LEVELS.get(log_level.lower())
    if level is None:
        raise ValueError(f"Invalid log level. Available options: {', '.join(LEVELS)}")

    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    log_console = logging.StreamHandler(sys.stdout)
    log_console.setLevel(level)
    log_console.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname).1s] %(message)s",
            datefmt="%y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(log_console)
    return logger
