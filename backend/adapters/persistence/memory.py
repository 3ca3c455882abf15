"""
In-memory implementation of every core repository interface.

Useful for tests and for embedding the core without a database. All
mutations happen under one ``threading.Lock`` and never await while
holding it, so insert-if-absent stays atomic for concurrent tasks and
for threads driving their own event loops.
"""

import threading

from core.domain.content import ContentItem, ContentKind
from core.domain.subscription import Subscription
from core.domain.user import Handle, Principal
from core.errors import HandleAlreadyAssignedError
from core.interfaces.repositories import (
    ContentRepository,
    HandleRepository,
    InsertOutcome,
    PrincipalRepository,
    SubscriptionRepository,
)


class InMemoryStore(
    PrincipalRepository,
    ContentRepository,
    SubscriptionRepository,
    HandleRepository,
):
    """Single object satisfying all repository interfaces."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._principals: dict[str, Principal] = {}
        self._content: dict[str, ContentItem] = {}
        self._subscriptions: list[Subscription] = []
        self._handles_by_value: dict[str, Handle] = {}
        self._handles_by_owner: dict[str, Handle] = {}

    # ── Seeding (owned by external services in production) ───────────────────

    def add_principal(self, principal: Principal) -> Principal:
        with self._lock:
            self._principals[principal.id] = principal
        return principal

    def add_content(self, item: ContentItem) -> ContentItem:
        with self._lock:
            self._content[item.id] = item
        return item

    def add_subscription(self, subscription: Subscription) -> Subscription:
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    @property
    def handles(self) -> list[Handle]:
        with self._lock:
            return list(self._handles_by_value.values())

    # ── PrincipalRepository ──────────────────────────────────────────────────

    async def get_by_id(self, principal_id: str) -> Principal | None:
        return self._principals.get(principal_id)

    async def list_without_handle(self, limit: int = 100) -> list[Principal]:
        with self._lock:
            pending = [
                p for p in self._principals.values() if p.id not in self._handles_by_owner
            ]
        return pending[:limit]

    # ── ContentRepository ────────────────────────────────────────────────────

    async def find_content_by_id(
        self, content_id: str, kind: ContentKind | None = None
    ) -> ContentItem | None:
        item = self._content.get(content_id)
        if item is None or (kind is not None and item.kind != kind):
            return None
        return item

    # ── SubscriptionRepository ───────────────────────────────────────────────

    async def find_active_subscription(
        self, subscriber_id: str, creator_id: str
    ) -> Subscription | None:
        with self._lock:
            rows = list(self._subscriptions)
        for row in rows:
            if row.is_active and row.subscriber_id == subscriber_id and row.creator_id == creator_id:
                return row
        return None

    # ── HandleRepository ─────────────────────────────────────────────────────

    async def try_insert_handle(self, value: str, owner_id: str) -> InsertOutcome:
        key = value.lower()
        with self._lock:
            if owner_id in self._handles_by_owner:
                raise HandleAlreadyAssignedError(owner_id)
            if key in self._handles_by_value:
                return InsertOutcome.CONFLICT
            handle = Handle(value=value, owner_id=owner_id)
            self._handles_by_value[key] = handle
            self._handles_by_owner[owner_id] = handle
        return InsertOutcome.INSERTED

    async def find_handle_by_owner(self, owner_id: str) -> Handle | None:
        return self._handles_by_owner.get(owner_id)

    async def find_handle_by_value(self, value: str) -> Handle | None:
        return self._handles_by_value.get(value.lower())
