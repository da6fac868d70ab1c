"""Pending registration stores - Transient keyed storage."""

from .memory import InMemoryPendingRegistrationStore

__all__ = ["InMemoryPendingRegistrationStore"]
