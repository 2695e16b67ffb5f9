"""Logging configuration for the application."""

import logging
import sys

from roster.config import Settings


def resolve_level(settings: Settings) -> int:
    """Pick the log level for the given settings.

    An explicit ``log_level`` wins; otherwise debug mode means DEBUG and
    everything else INFO.

    Args:
        settings: Application settings

    Returns:
        Numeric logging level
    """
    if settings.log_level:
        return logging.getLevelName(settings.log_level)
    if settings.debug:
        return logging.DEBUG
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Args:
        settings: Application settings
    """
    level = resolve_level(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Keep driver chatter out unless SQL echo is on
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    logging.getLogger("roster").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
