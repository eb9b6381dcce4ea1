"""Logging setup. Records go to stderr; stdout stays clean for output."""

import sys

from loguru import logger

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> <dim>{name}</dim> {message}"


def configure_logging(verbose: bool = False) -> None:
    """Replace loguru's default sink with a stderr sink at WARNING (DEBUG when verbose)."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format=LOG_FORMAT,
        colorize=None,
        backtrace=verbose,
        diagnose=False,  # variable values may hold secrets
    )
