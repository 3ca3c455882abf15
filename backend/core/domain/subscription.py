"""Subscription domain entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import uuid4


class SubscriptionStatus(StrEnum):
    """Subscription lifecycle status."""

    ACTIVE = "active"
    CANCELED = "canceled"
    EXPIRED = "expired"
    PENDING = "pending"


@dataclass(frozen=True)
class Subscription:
    """Subscriber -> creator relation, owned by the billing service."""

    subscriber_id: str
    creator_id: str
    status: SubscriptionStatus = SubscriptionStatus.PENDING
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self):
        if isinstance(self.status, str) and not isinstance(self.status, SubscriptionStatus):
            object.__setattr__(self, "status", SubscriptionStatus(self.status))

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE

    def grants_access_to(self, subscriber_id: str | None, creator_id: str) -> bool:
        """Check if this row lets *subscriber_id* view *creator_id*'s premium content."""
        return (
            self.is_active
            and subscriber_id is not None
            and self.subscriber_id == subscriber_id
            and self.creator_id == creator_id
        )
