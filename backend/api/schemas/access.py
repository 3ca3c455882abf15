"""
Content access check response schemas.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.access import Decision


class AccessCheckResult(BaseModel):
    """Outcome of a premium content access check."""

    allowed: bool = Field(..., description="Whether the principal may view the content")
    reason_code: str = Field(
        ...,
        description=(
            "Rule that decided the check (public_content, owner, admin, "
            "active_subscription, premium_access_required)"
        ),
    )
    payload: dict[str, Any] | None = Field(
        None, description="Upsell data on denial: content_id and creator_id"
    )
    message: str | None = Field(None, description="User-facing denial message")

    @classmethod
    def from_decision(cls, decision: Decision) -> "AccessCheckResult":
        return cls(
            allowed=decision.allowed,
            reason_code=decision.reason.value,
            payload=dict(decision.payload) if not decision.allowed else None,
            message=decision.message,
        )
