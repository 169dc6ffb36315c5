"""Logging configuration for the renderer."""

import logging
from typing import Optional

from config import LOG_FORMAT, LOG_LEVEL


def setup_logging(name: Optional[str] = None, level: Optional[str] = None) -> logging.Logger:
    """
    Set up console logging.

    Args:
        name: Logger name, the root logger when None
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    if level is None:
        level = LOG_LEVEL

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Calling twice must not duplicate output
    if not any(getattr(handler, "_raytracer_console", False) for handler in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        console_handler._raytracer_console = True
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(getattr(logging, level.upper(), logging.INFO))

    return logger
