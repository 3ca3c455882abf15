"""Exceptions raised by the access and handle core.

Authorization denials are not errors; they are returned as
``core.access.Decision`` values.
"""


class AccessCoreError(Exception):
    """Base exception for content access and handle allocation errors."""

    pass


class NotFoundError(AccessCoreError):
    """Raised when a referenced entity does not exist."""

    entity = "entity"

    def __init__(self, entity_id: str | None):
        self.entity_id = entity_id
        super().__init__(f"{self.entity.capitalize()} not found: {entity_id}")


class ContentNotFoundError(NotFoundError):
    """Raised when the requested content item does not exist."""

    entity = "content"


class PrincipalNotFoundError(NotFoundError):
    """Raised when the requesting principal does not exist."""

    entity = "principal"


class AllocationExhaustedError(AccessCoreError):
    """Raised when no free handle was found within the attempt bound."""

    def __init__(self, base: str, attempts: int):
        self.base = base
        self.attempts = attempts
        super().__init__(
            f"No free handle for base '{base}' after {attempts} attempts"
        )


class HandleAlreadyAssignedError(AccessCoreError):
    """Raised when the owner already holds a handle."""

    def __init__(self, owner_id: str):
        self.owner_id = owner_id
        super().__init__(f"Principal {owner_id} already has a handle")


class RepositoryError(AccessCoreError):
    """Raised when the backing store fails unexpectedly."""

    pass
