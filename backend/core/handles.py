"""Handle normalization and collision-free allocation."""

import asyncio
import logging
import re
from collections.abc import Iterator

from .domain.user import Handle
from .errors import AllocationExhaustedError
from .interfaces.repositories import HandleRepository, InsertOutcome

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 20
DEFAULT_FALLBACK_PREFIX = "user"
DEFAULT_MAX_SUFFIX_ATTEMPTS = 1000

_DISALLOWED = re.compile(r"[^a-z0-9]")


def normalize_handle_seed(
    seed: str,
    max_length: int = DEFAULT_MAX_LENGTH,
    fallback_prefix: str = DEFAULT_FALLBACK_PREFIX,
) -> str:
    """Lowercase, keep only [a-z0-9], truncate; fall back when nothing is left."""
    base = _DISALLOWED.sub("", (seed or "").lower())[:max_length]
    return base or fallback_prefix


def candidate_handles(base: str, max_attempts: int) -> Iterator[str]:
    """Yield base, base1, base2, ... for at most *max_attempts* candidates."""
    if max_attempts < 1:
        return
    yield base
    for suffix in range(1, max_attempts):
        yield f"{base}{suffix}"


class HandleAllocator:
    """
    Claims the first free candidate for a seed.

    Every attempt is a single atomic insert-if-absent on the handle store.
    A conflict means another writer holds that value, so the allocator
    moves on to the next suffix. No in-process lock is involved; the
    store's uniqueness index decides who wins each candidate.
    """

    def __init__(
        self,
        repository: HandleRepository,
        max_suffix_attempts: int = DEFAULT_MAX_SUFFIX_ATTEMPTS,
        max_length: int = DEFAULT_MAX_LENGTH,
        fallback_prefix: str = DEFAULT_FALLBACK_PREFIX,
        retry_backoff_ms: int = 0,
    ):
        if max_suffix_attempts < 1:
            raise ValueError("max_suffix_attempts must be at least 1")
        self.repository = repository
        self.max_suffix_attempts = max_suffix_attempts
        self.max_length = max_length
        self.fallback_prefix = fallback_prefix
        self.retry_backoff_ms = retry_backoff_ms

    def normalize(self, seed: str) -> str:
        return normalize_handle_seed(seed, self.max_length, self.fallback_prefix)

    async def allocate(self, seed: str, owner_id: str) -> Handle:
        """
        Allocate a unique handle for *owner_id* derived from *seed*.

        Raises:
            AllocationExhaustedError: every candidate within the bound was taken.
            HandleAlreadyAssignedError: the owner already holds a handle.
        """
        base = self.normalize(seed)
        attempts = 0

        for candidate in candidate_handles(base, self.max_suffix_attempts):
            attempts += 1
            outcome = await self.repository.try_insert_handle(candidate, owner_id)
            if outcome == InsertOutcome.INSERTED:
                logger.info(
                    "Allocated handle %s for principal %s after %d attempt(s)",
                    candidate, owner_id, attempts,
                )
                return Handle(value=candidate, owner_id=owner_id)

            logger.debug("Handle candidate %s taken, trying next suffix", candidate)
            if self.retry_backoff_ms:
                await asyncio.sleep(self.retry_backoff_ms / 1000)

        logger.warning(
            "Handle allocation exhausted for base %s after %d attempts", base, attempts
        )
        raise AllocationExhaustedError(base, attempts)
