"""Loguru setup.

Logs go to stderr so stdout stays pure JSON. Quiet (WARNING) unless `--verbose`.
"""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def setup_logging(*, verbose: bool = False) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="INFO" if verbose else "WARNING",
        format=LOG_FORMAT,
        colorize=None,
    )
