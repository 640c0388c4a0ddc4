"""
Logging helpers for the proteoclean package.

All modules obtain their logger through :func:`get_logger` so that the
package hierarchy ("proteoclean.*") can be configured in one place.
"""

import functools
import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

DEFAULT_FORMAT = "%(asctime)s [%(funcName)s] - %(message)s"
PACKAGE_LOGGER = "proteoclean"


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger for the given name.

    Parameters
    ----------
    name : str
        Dotted logger name, usually "proteoclean.<module>".

    Returns
    -------
    logging.Logger
        Logger with a NullHandler attached so library use stays silent
        until the application configures logging.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Configure the package logger.

    Parameters
    ----------
    level : int or str, optional
        Logging level (name or number).
    log_file : str or Path, optional
        If given, log records are also written to this file.
    log_format : str, optional
        Format string used for every handler.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(log_format)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    logger.addHandler(stream_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger


def log_execution_time(logger: logging.Logger, level: int = logging.DEBUG) -> Callable:
    """Decorator logging how long the wrapped function took."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            result = func(*args, **kwargs)
            logger.log(level, "%s finished in %.2f seconds", func.__name__, time.time() - start_time)
            return result

        return wrapper

    return decorator


def log_function_call(logger: logging.Logger, level: int = logging.DEBUG) -> Callable:
    """Decorator logging the call and keyword arguments of the wrapped function."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger.log(level, "Calling %s(%s)", func.__name__, ", ".join(sorted(kwargs)))
            return func(*args, **kwargs)

        return wrapper

    return decorator
