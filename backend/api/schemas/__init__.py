"""
Response schemas returned to callers of the access and handle services.
"""

from .access import AccessCheckResult
from .handles import BackfillReport, HandleAllocationResult

__all__ = [
    "AccessCheckResult",
    "HandleAllocationResult",
    "BackfillReport",
]
