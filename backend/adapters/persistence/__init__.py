"""Persistence adapters that live entirely in process memory."""

from .memory import InMemoryStore

__all__ = ["InMemoryStore"]
