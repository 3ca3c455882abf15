# Domain Entities
# Pure business objects with no external dependencies
from .content import ContentItem, ContentKind, PremiumGated
from .subscription import Subscription, SubscriptionStatus
from .user import Handle, Principal, UserRole

__all__ = [
    "Principal",
    "UserRole",
    "Handle",
    "ContentItem",
    "ContentKind",
    "PremiumGated",
    "Subscription",
    "SubscriptionStatus",
]
