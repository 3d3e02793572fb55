"""Centralized logging configuration."""

import sys

from loguru import logger

log_format = ' | '.join(
    (
        '<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>',
        '<lvl>{level:<8}</>',
        '<c>{name}::{function}:{line}</>',
        '{message}',
    )
)


def configure_logging(settings):
    """Replace loguru's default handler with the console (and optional file) sinks."""
    logger.remove()  # Avoid duplicate output from the default handler
    logger.add(sys.stderr, format=log_format, level=settings.LOG_LEVEL)

    if settings.LOG_FILE:
        logger.add(
            str(settings.LOG_FILE),
            format=log_format,
            level='DEBUG',
            rotation=settings.LOG_ROTATION,
            retention=settings.LOG_RETENTION,
            compression='zip',
        )
    return logger
