"""Logging setup for processes embedding the engine. Modules only ever call `logging.getLogger(__name__)`."""

import logging

from src.core.config import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: str | int = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
