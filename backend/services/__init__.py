"""
Service layer for business logic.
"""

from functools import lru_cache

from infrastructure.database.connection import async_session_maker
from infrastructure.database.repositories import (
    SqlContentRepository,
    SqlHandleRepository,
    SqlPrincipalRepository,
    SqlSubscriptionRepository,
)
from services.content_access import ContentAccessService
from services.handle_service import HandleService


@lru_cache
def get_content_access_service() -> ContentAccessService:
    """Get singleton content access service backed by the database."""
    return ContentAccessService(
        principals=SqlPrincipalRepository(async_session_maker),
        content=SqlContentRepository(async_session_maker),
        subscriptions=SqlSubscriptionRepository(async_session_maker),
    )


@lru_cache
def get_handle_service() -> HandleService:
    """Get singleton handle service backed by the database."""
    return HandleService(
        handles=SqlHandleRepository(async_session_maker),
        principals=SqlPrincipalRepository(async_session_maker),
    )
