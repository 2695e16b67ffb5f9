#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import logging
import sys

import logfire
import uvicorn

from roster.config import load_settings
from roster.util.logging import get_logger, resolve_level, setup_logging
from roster.util.observability import configure_logfire
from roster.util.worker import reset_worker_counter

logger = get_logger(__name__)


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    # Invalid configuration is fatal: let ConfigurationError end the process
    settings = load_settings()

    setup_logging(settings)
    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    reset_worker_counter()

    try:
        logger.info(
            f"Starting server at {settings.host}:{settings.port} "
            f"with {settings.storage} storage"
        )

        # This will import the app, which builds the container from the same env
        uvicorn.run(
            "roster.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level=logging.getLevelName(resolve_level(settings)).lower(),
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
