"""
Logging configuration for discord-notify

Log records go to stderr so stdout stays free for callers piping the tool.
"""

import logging
import sys
from typing import Union


LOGGER_NAME = "discord_notify"
LOG_FORMAT = '[%(name)s] %(levelname)s: %(message)s'


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Threshold for the console handler

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Only add a handler once
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)
        logger.propagate = False

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
