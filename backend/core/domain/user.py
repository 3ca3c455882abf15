"""Principal and handle domain entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


class UserRole(StrEnum):
    """Roles a principal can hold."""

    USER = "user"
    CREATOR = "creator"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """The actor requesting access - immutable for the lifetime of a request."""

    id: str | None = None
    role: UserRole = UserRole.USER
    display_name: str = ""
    email: str = ""

    def __post_init__(self):
        if isinstance(self.role, str) and not isinstance(self.role, UserRole):
            object.__setattr__(self, "role", UserRole(self.role))

    @classmethod
    def anonymous(cls) -> "Principal":
        """Principal for unauthenticated requests."""
        return cls(id=None, role=UserRole.USER)

    @property
    def is_anonymous(self) -> bool:
        return self.id is None

    @property
    def is_admin(self) -> bool:
        """Check if principal has admin privileges."""
        return self.role == UserRole.ADMIN

    @property
    def handle_seed(self) -> str:
        """Seed used when a handle is derived for this principal."""
        if self.display_name:
            return self.display_name
        return self.email.split("@")[0]


@dataclass(frozen=True)
class Handle:
    """A unique, human-readable identifier assigned to a principal."""

    value: str
    owner_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def profile_url(self) -> str:
        return f"/profile/{self.value}"
