"""
Default logging setup applied when the package is imported.
"""

import logging

from proteoclean.core.logger import PACKAGE_LOGGER, get_logger


def initialize_logging(level: int = logging.WARNING, capture_warnings: bool = True) -> None:
    """
    Initialise the package logger with library-friendly defaults.

    The package logger only gets a NullHandler and a level; applications and
    the CLI attach real handlers through ``configure_logging``.
    """
    logger = get_logger(PACKAGE_LOGGER)
    if logger.level == logging.NOTSET:
        logger.setLevel(level)

    if capture_warnings:
        logging.captureWarnings(True)
