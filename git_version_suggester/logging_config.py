"""
Logging configuration for the git version suggester.

Centralized logging setup to avoid circular imports. Log records go to
stderr so that stdout only carries the suggested version.
"""

import sys

from loguru import logger
from rich.console import Console

LOG_FORMAT = '<green>{time:YYYY/MM/DD HH:mm:ss}</green> | {level.icon}  - <level>{message}</level>'


def setup_logging(log_level: str = 'INFO', console: Console = None) -> None:
    """
    Set up logging configuration with an optional shared Rich console.

    Args:
        log_level: Logging level (TRACE, DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL)
        console: Rich Console instance writing to stderr (optional)
    """
    # Register custom VERBOSE level (between INFO=20 and DEBUG=10)
    try:
        logger.level("VERBOSE", no=15, color="<cyan>", icon="ℹ️")
    except (TypeError, ValueError):
        # Level already exists, which is fine
        pass

    logger.remove()

    if console:
        logger.add(
            lambda msg: console.print(msg, end='', markup=False, highlight=False),
            level=log_level,
            format=LOG_FORMAT
        )
    else:
        logger.add(
            sys.stderr,
            level=log_level,
            format=LOG_FORMAT,
            colorize=True
        )
