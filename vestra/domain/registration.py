"""
Registration domain service - Confirmation handshake implementation.

This module contains the core business logic for user registration:
issuing a time-boxed one-time code, holding the not-yet-committed account
in a pending store, and promoting it into a durable user on confirmation.

Registration Lifecycle (per normalized email)
=============================================

    unregistered -> code-issued (pending)
    code-issued  -> user-exists   (correct code within the window)
    code-issued  -> unregistered  (code expired, row deleted on access)
    code-issued  -> user-exists   (conflict detected, cleanup only)

A user row is authoritative: once it exists no code or pending record for
that email is acted upon. Uniqueness is enforced by the repository's
conditional insert; the existence checks here only short-circuit the
common case.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from .credentials import (
    MIN_PASSWORD_LENGTH,
    generate_confirmation_code,
    hash_password,
    is_valid_email,
    normalize_email,
    utc_now,
)
from .entities import PendingRegistration, User
from .exceptions import (
    ConfirmationCodeExpired,
    EmailAlreadyRegistered,
    EmailDeliveryFailed,
    InvalidConfirmationCode,
    PendingRegistrationNotFound,
    ValidationFailed,
)
from .ports import (
    ConfirmationCodeRepository,
    EmailSender,
    PendingRegistrationStore,
    UserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: input validation, email
    normalization, code issuance and delivery, password hashing,
    and promotion of pending registrations into users.
    """

    users: UserRepository
    codes: ConfirmationCodeRepository
    pending: PendingRegistrationStore
    email_sender: EmailSender
    code_ttl_seconds: int = 300
    bcrypt_cost: int = 12
    clock: Callable[[], datetime] = field(default=utc_now)

    def register(
        self,
        email: str | None,
        password: str | None,
        password_confirmation: str | None,
        name: str | None = None,
    ) -> str:
        """
        Begin registration by emailing a confirmation code.

        Args:
            email: User's email address (will be normalized)
            password: User's password (will be hashed)
            password_confirmation: Must equal password
            name: Optional display name

        Returns:
            Normalized email address

        Raises:
            ValidationFailed: Missing or malformed input
            EmailAlreadyRegistered: A user already exists for the email
            EmailDeliveryFailed: The code could not be sent
        """
        if not email or not password or not password_confirmation:
            raise ValidationFailed("registration_fields_required")
        if not is_valid_email(email.strip()):
            raise ValidationFailed("email_invalid")
        if password != password_confirmation:
            raise ValidationFailed("password_mismatch")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed("password_too_short")

        normalized_email = normalize_email(email)
        if self.users.find_by_email(normalized_email) is not None:
            raise EmailAlreadyRegistered(normalized_email)

        code = generate_confirmation_code()
        password_hash = hash_password(password, self.bcrypt_cost)

        # Code is persisted before delivery, pending data only after.
        self.codes.replace_for_email(normalized_email, code)

        try:
            sent = self.email_sender.send_confirmation_code(normalized_email, code)
        except Exception as e:
            self.codes.delete_for_email(normalized_email)
            logger.error(f"Confirmation email sender failed for {normalized_email}: {e}")
            raise EmailDeliveryFailed(normalized_email) from e

        if not sent:
            self.codes.delete_for_email(normalized_email)
            logger.warning("Confirmation email delivery failed for %s", normalized_email)
            raise EmailDeliveryFailed(normalized_email)

        self.pending.put(
            PendingRegistration(
                email=normalized_email,
                name=self._clean_name(name),
                password_hash=password_hash,
            )
        )
        logger.info("Confirmation code issued for %s", normalized_email)
        return normalized_email

    def confirm(self, email: str | None, confirmation_code: str | None) -> User:
        """
        Confirm a registration and create the user.

        Args:
            email: Email used at registration (will be normalized)
            confirmation_code: Code received by email

        Returns:
            The created user

        Raises:
            ValidationFailed: Missing email or code
            InvalidConfirmationCode: No matching code (also for unknown emails)
            ConfirmationCodeExpired: Code older than the confirmation window
            PendingRegistrationNotFound: Pending data lost or never stored
            EmailAlreadyRegistered: A user already exists for the email
        """
        if not email or not confirmation_code:
            raise ValidationFailed("confirmation_fields_required")

        normalized_email = normalize_email(email)

        stored = self.codes.find_latest(normalized_email, confirmation_code)
        if stored is None:
            raise InvalidConfirmationCode(normalized_email)

        if self.clock() - stored.created_at > timedelta(seconds=self.code_ttl_seconds):
            self.codes.delete(stored.id)
            logger.info("Expired confirmation code discarded for %s", normalized_email)
            raise ConfirmationCodeExpired(normalized_email)

        pending = self.pending.get(normalized_email)
        if pending is None:
            raise PendingRegistrationNotFound(normalized_email)

        if self.users.find_by_email(normalized_email) is not None:
            self._discard(normalized_email, stored.id)
            raise EmailAlreadyRegistered(normalized_email)

        user = self.users.create_from_pending(pending, stored.id)
        self.pending.delete(normalized_email)
        if user is None:
            logger.warning("Concurrent confirmation lost the race for %s", normalized_email)
            raise EmailAlreadyRegistered(normalized_email)

        logger.info("User %s created for %s", user.id, normalized_email)
        return user

    def _discard(self, email: str, code_id: int) -> None:
        self.codes.delete(code_id)
        self.pending.delete(email)

    @staticmethod
    def _clean_name(name: str | None) -> str | None:
        if name is None:
            return None
        return name.strip() or None
