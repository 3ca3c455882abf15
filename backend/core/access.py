"""
Premium content access decisions.

Rules are evaluated in priority order and the first match wins:

1. Missing content raises ContentNotFoundError.
2. Non-premium content is open to everyone.
3. Owners always see their own content.
4. Admins see everything.
5. An active subscription to the owner grants access.
6. Anything else is denied with the data needed to render an upsell.

The decider never touches storage; callers supply every fact it needs.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .domain.content import ContentKind, PremiumGated
from .domain.subscription import Subscription
from .domain.user import Principal
from .errors import ContentNotFoundError


class AccessReason(StrEnum):
    """Reason codes attached to every decision."""

    PUBLIC_CONTENT = "public_content"
    OWNER = "owner"
    ADMIN = "admin"
    ACTIVE_SUBSCRIPTION = "active_subscription"
    PREMIUM_ACCESS_REQUIRED = "premium_access_required"


_DENY_MESSAGES = {
    ContentKind.POST: "Premium content requires an active subscription",
    ContentKind.VR: "Premium VR content requires an active subscription",
}


@dataclass(frozen=True)
class Decision:
    """Outcome of an access check: allowed, or denied with a payload."""

    allowed: bool
    reason: AccessReason
    # Compared for equality but left out of the hash, which a dict cannot provide
    payload: dict[str, Any] = field(default_factory=dict, hash=False)
    message: str | None = None

    @classmethod
    def allow(cls, reason: AccessReason) -> "Decision":
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(
        cls,
        reason: AccessReason,
        payload: dict[str, Any],
        message: str | None = None,
    ) -> "Decision":
        return cls(allowed=False, reason=reason, payload=payload, message=message)


class AccessDecider:
    """Stateless decision over {owner_id, is_premium} shaped content."""

    def decide(
        self,
        principal: Principal,
        content: PremiumGated | None,
        active_subscription: Subscription | None = None,
    ) -> Decision:
        if content is None:
            raise ContentNotFoundError(None)

        if not content.is_premium:
            return Decision.allow(AccessReason.PUBLIC_CONTENT)

        if principal.id is not None and principal.id == content.owner_id:
            return Decision.allow(AccessReason.OWNER)

        if principal.is_admin:
            return Decision.allow(AccessReason.ADMIN)

        if active_subscription is not None and active_subscription.grants_access_to(
            principal.id, content.owner_id
        ):
            return Decision.allow(AccessReason.ACTIVE_SUBSCRIPTION)

        # One-off purchases are deliberately not a rule here; a purchase
        # check would slot in right after the subscription rule.
        kind = getattr(content, "kind", ContentKind.POST)
        return Decision.deny(
            AccessReason.PREMIUM_ACCESS_REQUIRED,
            {"content_id": content.id, "creator_id": content.owner_id},
            message=_DENY_MESSAGES.get(kind, _DENY_MESSAGES[ContentKind.POST]),
        )


access_decider = AccessDecider()
