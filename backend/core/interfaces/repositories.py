"""Repository interfaces for data access."""

from abc import ABC, abstractmethod
from enum import StrEnum

from ..domain.content import ContentItem, ContentKind
from ..domain.subscription import Subscription
from ..domain.user import Handle, Principal


class InsertOutcome(StrEnum):
    """Result of an atomic insert-if-absent."""

    INSERTED = "inserted"
    CONFLICT = "conflict"


class PrincipalRepository(ABC):
    """Abstract repository for Principal entities."""

    @abstractmethod
    async def get_by_id(self, principal_id: str) -> Principal | None:
        """Get principal by ID."""
        ...

    @abstractmethod
    async def list_without_handle(self, limit: int = 100) -> list[Principal]:
        """List principals that have not been assigned a handle yet."""
        ...


class ContentRepository(ABC):
    """Abstract repository for ContentItem entities."""

    @abstractmethod
    async def find_content_by_id(
        self, content_id: str, kind: ContentKind | None = None
    ) -> ContentItem | None:
        """Get content item by ID, optionally restricted to one kind."""
        ...


class SubscriptionRepository(ABC):
    """Abstract repository for Subscription entities (read-only here)."""

    @abstractmethod
    async def find_active_subscription(
        self, subscriber_id: str, creator_id: str
    ) -> Subscription | None:
        """Get any active subscription from subscriber to creator."""
        ...


class HandleRepository(ABC):
    """Abstract repository for Handle entities.

    ``try_insert_handle`` is the only synchronization primitive the
    allocator relies on: it must be atomic with respect to concurrent
    callers and must leave no row behind when it reports a conflict.
    """

    @abstractmethod
    async def try_insert_handle(self, value: str, owner_id: str) -> InsertOutcome:
        """Insert the handle unless its value is taken (case-insensitive).

        Raises HandleAlreadyAssignedError if *owner_id* already has a handle.
        """
        ...

    @abstractmethod
    async def find_handle_by_owner(self, owner_id: str) -> Handle | None:
        """Get the handle owned by a principal."""
        ...

    @abstractmethod
    async def find_handle_by_value(self, value: str) -> Handle | None:
        """Get a handle by value, ignoring case."""
        ...
