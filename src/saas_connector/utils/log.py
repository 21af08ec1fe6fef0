"""Logging setup for saas-connector."""

import sys
from typing import TextIO

from loguru import logger

from saas_connector.config import get_settings

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"


def setup_logging(level: str | None = None, sink: TextIO | None = None) -> int:
    """Replace loguru's default handler with the connector format.

    Args:
        level: Minimum level to emit. Defaults to the configured ``log_level``.
        sink: Stream to write to. Defaults to stderr.

    Returns:
        Handler id of the added sink.
    """
    logger.remove()
    return logger.add(sink or sys.stderr, level=level or get_settings().log_level, format=LOG_FORMAT)
