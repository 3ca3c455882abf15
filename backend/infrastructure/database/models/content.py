"""
Content database model covering posts and VR content.
"""

from enum import Enum
from uuid import uuid4

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class ContentKind(str, Enum):
    """Content kind enumeration."""

    POST = "post"
    VR = "vr"


class Content(Base, TimestampMixin):
    """A piece of creator content; premium items are gated by access checks."""

    __tablename__ = "content_items"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    owner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    kind: Mapped[str] = mapped_column(
        String(20),
        default=ContentKind.POST.value,
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Content(id={self.id}, kind={self.kind}, premium={self.is_premium})>"
