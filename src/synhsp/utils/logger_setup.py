#!/usr/bin/env python

"""Configure the loguru logger for CLI runs."""

import sys
from loguru import logger

LOG_FORMAT = (
    "<level>{level: <7}</level> | "
    "<cyan>{time:HH:mm:ss}</cyan> | "
    "<magenta>{module}:{line}</magenta> | "
    "<level>{message}</level>"
)


def set_log_level(log_level: str = "INFO") -> int:
    """Remove existing sinks and log to stderr at the given level.

    Returns the id of the new sink so callers (mostly tests) can
    remove it again.
    """
    logger.remove()
    return logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=LOG_FORMAT,
        colorize=sys.stderr.isatty(),
        enqueue=False,
    )
