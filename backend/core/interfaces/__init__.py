# Interfaces (Abstract Contracts)
# Adapters implement these interfaces
from .repositories import (
    ContentRepository,
    HandleRepository,
    InsertOutcome,
    PrincipalRepository,
    SubscriptionRepository,
)

__all__ = [
    "PrincipalRepository",
    "ContentRepository",
    "SubscriptionRepository",
    "HandleRepository",
    "InsertOutcome",
]
