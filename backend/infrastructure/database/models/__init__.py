"""
SQLAlchemy database models.
"""

from .base import Base, TimestampMixin
from .content import Content, ContentKind
from .subscription import Subscription, SubscriptionStatus
from .user import Handle, User, UserRole

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "UserRole",
    "Handle",
    "Content",
    "ContentKind",
    "Subscription",
    "SubscriptionStatus",
]
