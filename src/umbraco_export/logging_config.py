"""Logging configuration for umbraco-export."""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Send umbraco_export log records to stderr.

    The package disables its own loguru records on import so library users
    see nothing unless they opt in; the CLI opts in through this function.
    """
    logger.remove()
    logger.enable("umbraco_export")
    if quiet:
        level = "WARNING"
    elif verbose:
        level = "DEBUG"
    else:
        level = "INFO"
    fmt = "{level.icon} {name}: {message}" if verbose else "{level.icon} {message}"
    logger.add(sys.stderr, level=level, format=fmt)
