"""Logging configuration using Loguru."""

import sys

from loguru import logger

from hydroguard.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}"


def setup_logging(level: str | None = None) -> None:
    logger.remove()
    logger.configure(extra={"name": "hydroguard"})
    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=(level or settings.LOG_LEVEL).upper(),
        colorize=True,
    )


def get_logger(name: str):
    return logger.bind(name=name)


setup_logging()
