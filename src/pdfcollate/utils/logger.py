"""
PdfCollate - Logger Module

This module sets up logging for the application.
"""

import logging

from pdfcollate.config import LOG_FORMAT, LOG_LEVEL, LOGGER_NAME


def setup_logger(log_level=None, log_format=None, logger_name=None):
    """Set up and configure the application logger

    Args:
        log_level: Logging level to use (default: LOG_LEVEL from config)
        log_format: Logging format string (default: LOG_FORMAT from config)
        logger_name: Name for the logger (default: PdfCollate)

    Returns:
        A configured Logger instance
    """
    if log_level is None:
        log_level = LOG_LEVEL
    if log_format is None:
        log_format = LOG_FORMAT
    if logger_name is None:
        logger_name = LOGGER_NAME

    # Configure basic logging settings
    logging.basicConfig(level=log_level, format=log_format)

    # Create and return the logger
    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of the application logger and the root handler.

    Args:
        level: A logging level number or name (e.g. "DEBUG")
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = LOG_LEVEL
    logging.getLogger().setLevel(level)
    logger.setLevel(level)


# Create a singleton logger instance
logger = setup_logger()
