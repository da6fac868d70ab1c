"""
In-memory pending registration store - Implements PendingRegistrationStore protocol.

Holds not-yet-confirmed registrations in process memory, keyed by
normalized email. Contents are lost on restart, in which case the
confirmation step reports the registration as not found.

FastAPI runs sync endpoints on a thread pool, so every operation is
guarded by a lock.
"""

import threading

from vestra.domain.entities import PendingRegistration


class InMemoryPendingRegistrationStore:
    """
    Implements PendingRegistrationStore protocol with a locked dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    One instance is created per application and injected; there is no
    module-level state.
    """

    def __init__(self) -> None:
        self._entries: dict[str, PendingRegistration] = {}
        self._lock = threading.Lock()

    def get(self, email: str) -> PendingRegistration | None:
        with self._lock:
            return self._entries.get(email)

    def put(self, pending: PendingRegistration) -> None:
        """Store or overwrite the pending registration for its email."""
        with self._lock:
            self._entries[pending.email] = pending

    def delete(self, email: str) -> None:
        """Remove the entry if present; deleting a missing key is a no-op."""
        with self._lock:
            self._entries.pop(email, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
