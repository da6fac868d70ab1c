"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols via structural
subtyping; none of them inherit from the protocols.
"""

from datetime import datetime
from typing import Protocol

from .entities import ConfirmationCode, PendingRegistration, Session, User


class UserRepository(Protocol):
    """Port interface for durable user accounts."""

    def find_by_email(self, email: str) -> User | None:
        """Return the user for a normalized email, soft-deleted ones included."""
        ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def create_from_pending(
        self, pending: PendingRegistration, consumed_code_id: int
    ) -> User | None:
        """
        Atomically create a user and consume its confirmation code.

        The insert is conditional on the unique email constraint and the
        code row is deleted in the same transaction.

        Args:
            pending: Pending registration to promote
            consumed_code_id: Confirmation code row to delete

        Returns:
            The created user, or None if a user with that email already
            exists (the code row is deleted either way)
        """
        ...


class ConfirmationCodeRepository(Protocol):
    """Port interface for issued confirmation codes."""

    def replace_for_email(self, email: str, code: str) -> ConfirmationCode:
        """Delete any prior codes for the email and insert a new one, atomically."""
        ...

    def find_latest(self, email: str, code: str) -> ConfirmationCode | None:
        """Most recently created row matching both email and exact code."""
        ...

    def delete(self, code_id: int) -> None: ...

    def delete_for_email(self, email: str) -> int:
        """Delete every code issued to the email. Returns rows deleted."""
        ...


class SessionRepository(Protocol):
    """Port interface for login sessions."""

    def create(self, user_id: int, token: str, expires_at: datetime) -> Session: ...

    def find_by_token(self, token: str) -> Session | None: ...

    def delete(self, session_id: int) -> None: ...


class PendingRegistrationStore(Protocol):
    """
    Port interface for not-yet-confirmed registrations.

    Keyed by normalized email. Implementations are transient; contents
    may be lost on restart.
    """

    def get(self, email: str) -> PendingRegistration | None: ...

    def put(self, pending: PendingRegistration) -> None: ...

    def delete(self, email: str) -> None: ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send_confirmation_code(self, email: str, code: str) -> bool:
        """
        Send confirmation code to email address.

        Args:
            email: Recipient email address
            code: 6-digit confirmation code

        Returns:
            True if the message was handed off, False on delivery failure
        """
        ...
