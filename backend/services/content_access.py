"""
Content access service.

Gathers the facts an access decision needs (principal, content item,
active subscription) and hands them to the pure AccessDecider.
"""

import logging

from api.schemas.access import AccessCheckResult
from core.access import AccessDecider, access_decider
from core.domain.content import ContentKind
from core.domain.user import Principal
from core.errors import ContentNotFoundError, PrincipalNotFoundError
from core.interfaces.repositories import (
    ContentRepository,
    PrincipalRepository,
    SubscriptionRepository,
)

logger = logging.getLogger(__name__)


class ContentAccessService:
    """Answers "may this principal view this content item?"."""

    def __init__(
        self,
        principals: PrincipalRepository,
        content: ContentRepository,
        subscriptions: SubscriptionRepository,
        decider: AccessDecider = access_decider,
    ):
        self.principals = principals
        self.content = content
        self.subscriptions = subscriptions
        self.decider = decider

    async def _load_principal(self, principal_id: str | None) -> Principal:
        if principal_id is None:
            return Principal.anonymous()
        principal = await self.principals.get_by_id(principal_id)
        if principal is None:
            raise PrincipalNotFoundError(principal_id)
        return principal

    async def check_access(
        self,
        principal_id: str | None,
        content_id: str,
        kind: ContentKind | None = None,
    ) -> AccessCheckResult:
        """
        Decide whether *principal_id* may view *content_id*.

        ``principal_id=None`` checks access for an anonymous visitor.

        Raises:
            ContentNotFoundError: no content item with that id (and kind).
            PrincipalNotFoundError: the principal id is unknown.
        """
        item = await self.content.find_content_by_id(content_id, kind)
        if item is None:
            raise ContentNotFoundError(content_id)

        principal = await self._load_principal(principal_id)

        subscription = None
        if item.is_premium and not principal.is_anonymous and principal.id != item.owner_id:
            subscription = await self.subscriptions.find_active_subscription(
                principal.id, item.owner_id
            )

        decision = self.decider.decide(principal, item, subscription)

        if decision.allowed:
            logger.debug(
                "Access granted to %s for %s (%s)",
                principal.id, item.id, decision.reason.value,
            )
        else:
            logger.info(
                "Access denied to %s for premium content %s of creator %s",
                principal.id or "anonymous", item.id, item.owner_id,
                extra={
                    "principal_id": principal.id,
                    "content_id": item.id,
                    "reason": decision.reason.value,
                },
            )
        return AccessCheckResult.from_decision(decision)
