"""
User and handle database models.
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.config.settings import HANDLE_VALUE_MAX_LENGTH

from .base import Base, TimestampMixin


class UserRole(str, Enum):
    """User roles enumeration."""

    USER = "user"
    CREATOR = "creator"
    ADMIN = "admin"


class User(Base, TimestampMixin):
    """User account model."""

    __tablename__ = "users"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Basic info
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    role: Mapped[str] = mapped_column(
        String(50),
        default=UserRole.USER.value,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role={self.role})>"


class Handle(Base):
    """Unique public handle, written once per user and never updated."""

    __tablename__ = "handles"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    value: Mapped[str] = mapped_column(String(HANDLE_VALUE_MAX_LENGTH), nullable=False)
    owner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Handle(value={self.value}, owner_id={self.owner_id})>"


# Case-insensitive uniqueness is what makes insert-if-absent atomic
Index("uq_handles_value_lower", func.lower(Handle.value), unique=True)
