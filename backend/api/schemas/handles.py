"""
Handle allocation response schemas.
"""

from pydantic import BaseModel, Field

from core.domain.user import Handle


class HandleAllocationResult(BaseModel):
    """Either an allocated handle or the reason allocation failed."""

    handle: str | None = Field(None, description="Allocated handle value")
    profile_url: str | None = Field(None, description="Public profile path for the handle")
    error: str | None = Field(None, description="Error code, e.g. allocation_exhausted")

    @property
    def ok(self) -> bool:
        return self.handle is not None

    @classmethod
    def success(cls, handle: Handle) -> "HandleAllocationResult":
        return cls(handle=handle.value, profile_url=handle.profile_url)

    @classmethod
    def failure(cls, error: str) -> "HandleAllocationResult":
        return cls(error=error)


class BackfillReport(BaseModel):
    """Summary of a handle backfill run."""

    assigned: int = Field(0, description="Principals that received a handle")
    exhausted: int = Field(0, description="Principals skipped because allocation was exhausted")
    handles: dict[str, str] = Field(
        default_factory=dict, description="Assigned handle per principal id"
    )
