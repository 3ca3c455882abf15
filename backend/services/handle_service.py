"""
Handle service.

Exposes handle allocation to callers:

- ``allocate_handle``: claim a fresh handle for an owner from any seed.
- ``assign_handle``: give a principal its handle, reusing one it already owns.
- ``backfill_handles``: assign handles to every principal still missing one.
"""

import logging

from api.schemas.handles import BackfillReport, HandleAllocationResult
from core.domain.user import Handle
from core.errors import (
    AllocationExhaustedError,
    HandleAlreadyAssignedError,
    PrincipalNotFoundError,
)
from core.handles import HandleAllocator
from core.interfaces.repositories import HandleRepository, PrincipalRepository
from infrastructure.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

ALLOCATION_EXHAUSTED = "allocation_exhausted"


class HandleService:
    """Service for allocating and assigning unique handles."""

    def __init__(
        self,
        handles: HandleRepository,
        principals: PrincipalRepository,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.handles = handles
        self.principals = principals
        self.allocator = HandleAllocator(
            handles,
            max_suffix_attempts=settings.handle_max_suffix_attempts,
            max_length=settings.handle_max_length,
            fallback_prefix=settings.handle_fallback_prefix,
            retry_backoff_ms=settings.handle_retry_backoff_ms,
        )

    async def allocate_handle(self, seed: str, owner_id: str) -> HandleAllocationResult:
        """Allocate a handle, reporting exhaustion as an error value."""
        try:
            handle = await self.allocator.allocate(seed, owner_id)
        except AllocationExhaustedError as e:
            logger.warning(
                "Could not allocate a handle for %s: %s", owner_id, e,
                extra={"principal_id": owner_id, "attempts": e.attempts},
            )
            return HandleAllocationResult.failure(ALLOCATION_EXHAUSTED)
        return HandleAllocationResult.success(handle)

    async def assign_handle(self, principal_id: str, seed: str | None = None) -> Handle:
        """
        Return the principal's handle, allocating one on first call.

        The seed defaults to the display name, then the e-mail local part.

        Raises:
            PrincipalNotFoundError: unknown principal.
            AllocationExhaustedError: no free handle within the bound.
        """
        principal = await self.principals.get_by_id(principal_id)
        if principal is None:
            raise PrincipalNotFoundError(principal_id)

        existing = await self.handles.find_handle_by_owner(principal_id)
        if existing is not None:
            return existing

        try:
            return await self.allocator.allocate(seed or principal.handle_seed, principal_id)
        except HandleAlreadyAssignedError:
            # A concurrent assign for the same principal won
            existing = await self.handles.find_handle_by_owner(principal_id)
            if existing is None:
                raise
            return existing

    async def backfill_handles(self, batch_size: int = 100) -> BackfillReport:
        """Assign handles to all principals without one.

        Principals whose allocation is exhausted are skipped and counted,
        the rest of the run continues.
        """
        report = BackfillReport()
        skipped: set[str] = set()

        while True:
            pending = await self.principals.list_without_handle(limit=batch_size + len(skipped))
            batch = [p for p in pending if p.id not in skipped]
            if not batch:
                break

            for principal in batch:
                try:
                    handle = await self.assign_handle(principal.id)
                except AllocationExhaustedError:
                    skipped.add(principal.id)
                    report.exhausted += 1
                    continue
                report.assigned += 1
                report.handles[principal.id] = handle.value
                logger.info(
                    "Assigned handle %s to principal %s", handle.value, principal.id,
                    extra={"principal_id": principal.id, "handle": handle.value},
                )

        logger.info(
            "Handle backfill finished: %d assigned, %d exhausted",
            report.assigned, report.exhausted,
        )
        return report
