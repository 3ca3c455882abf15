"""
Subscription database model.
"""

from enum import Enum
from uuid import uuid4

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class SubscriptionStatus(str, Enum):
    """Subscription status enumeration."""

    ACTIVE = "active"
    CANCELED = "canceled"
    EXPIRED = "expired"
    PENDING = "pending"


class Subscription(Base, TimestampMixin):
    """Subscriber -> creator relation. Historical rows are kept."""

    __tablename__ = "subscriptions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    subscriber_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    creator_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=SubscriptionStatus.PENDING.value,
        nullable=False,
    )

    # Not unique: the billing service keeps canceled/expired rows around
    __table_args__ = (
        Index("ix_subscriptions_pair_status", "subscriber_id", "creator_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Subscription({self.subscriber_id}->{self.creator_id}, {self.status})>"
