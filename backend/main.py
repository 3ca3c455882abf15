"""Creator Access Core - lifecycle hooks for the embedding application.

The core has no server of its own. The host application calls
``lifespan()`` (or ``startup()`` / ``shutdown()``) around its own lifecycle
and then uses ``services.get_content_access_service()`` and
``services.get_handle_service()`` in-process.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from infrastructure.config import get_settings
from infrastructure.database import close_db, init_db
from infrastructure.logging_config import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


async def startup() -> None:
    # Configure logging before anything else so all startup messages use the
    # correct format: JSON when requested or in production, human-readable otherwise.
    setup_logging(
        json_output=settings.log_json or settings.is_production,
        level="DEBUG" if settings.debug else settings.log_level,
    )

    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    logger.info("Environment: %s", settings.environment)
    logger.info(
        "Handle allocation: max_length=%d fallback=%s max_attempts=%d backoff_ms=%d",
        settings.handle_max_length,
        settings.handle_fallback_prefix,
        settings.handle_max_suffix_attempts,
        settings.handle_retry_backoff_ms,
    )

    settings.validate_production_settings()

    if settings.is_development:
        logger.info("Development mode - initializing database...")
        await init_db()


async def shutdown() -> None:
    logger.info("Shutting down %s", settings.app_name)
    await close_db()


@asynccontextmanager
async def lifespan() -> AsyncIterator[None]:
    """Run startup/shutdown around the host application's lifetime."""
    await startup()
    try:
        yield
    finally:
        await shutdown()
