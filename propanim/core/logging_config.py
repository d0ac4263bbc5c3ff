"""
Logging configuration for the animation engine.

Thin helpers over the standard ``logging`` module.
"""

import functools
import logging
import time
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ROOT_LOGGER_NAME = "propanim"


def get_logger(name: str) -> logging.Logger:
    """Get a logger; module names outside the package are nested under it."""
    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO)
        log_file: Optional file path for logging output
        fmt: Record format string

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers from a previous call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_performance(func):
    """Decorator logging wall time of the wrapped call at DEBUG level."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug(f"{func.__name__} took {elapsed:.3f}ms")
        return result

    return wrapper


class LogContext:
    """
    Temporarily change the level of a logger.

    Usage:
        with LogContext("propanim.timeline", logging.DEBUG):
            timeline.update(0.016)
    """

    def __init__(self, name: str = _ROOT_LOGGER_NAME, level: int = logging.DEBUG):
        self.logger = get_logger(name)
        self.level = level
        self._previous = None

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc, tb) -> None:
        self.logger.setLevel(self._previous)


__all__ = [
    "get_logger",
    "setup_logging",
    "log_performance",
    "LogContext",
]
