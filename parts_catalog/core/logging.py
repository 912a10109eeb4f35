"""
Logging configuration
"""

import sys

from loguru import logger

from parts_catalog.core.config import settings


def setup_logging():
    """Setup logging configuration"""
    # Remove default handler
    logger.remove()

    if settings.log_json:
        logger.add(sys.stderr, level=settings.log_level, serialize=True)
        return

    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> | {extra}",
        colorize=True,
    )


# Create logger instance
log = logger
