"""Content domain entities."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable


class ContentKind(StrEnum):
    """Kinds of content a creator can publish."""

    POST = "post"
    VR = "vr"


@runtime_checkable
class PremiumGated(Protocol):
    """Anything with an owner and a premium flag can be access-checked."""

    id: str
    owner_id: str
    is_premium: bool


@dataclass(frozen=True)
class ContentItem:
    """A content item owned exclusively by its creator."""

    id: str
    owner_id: str
    is_premium: bool = False
    kind: ContentKind = ContentKind.POST
    title: str = ""

    def __post_init__(self):
        if isinstance(self.kind, str) and not isinstance(self.kind, ContentKind):
            object.__setattr__(self, "kind", ContentKind(self.kind))
