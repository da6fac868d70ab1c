"""
Domain exceptions - Semantic error types for registration and login.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each exception carries a ``message_key`` that the API layer resolves
against its localized message catalog.
"""


class AuthError(Exception):
    """Base class for authentication domain errors."""

    message_key = "unexpected_error"


class ValidationFailed(AuthError):
    """Submitted input is missing or malformed."""

    def __init__(self, message_key: str) -> None:
        super().__init__(message_key)
        self.message_key = message_key


class EmailAlreadyRegistered(AuthError):
    """A user already exists for this email."""

    message_key = "email_already_registered"


class InvalidConfirmationCode(AuthError):
    """No issued code matches the submitted email and code."""

    message_key = "invalid_confirmation_code"


class ConfirmationCodeExpired(AuthError):
    """The matching code is older than the confirmation window."""

    message_key = "confirmation_code_expired"


class PendingRegistrationNotFound(AuthError):
    """No pending account data for this email (restart or never registered)."""

    message_key = "pending_registration_not_found"


class InvalidCredentials(AuthError):
    """Unknown email or wrong password. Deliberately indistinguishable."""

    message_key = "invalid_credentials"


class AccountDisabled(AuthError):
    """The account has been soft-deleted."""

    message_key = "account_disabled"


class InvalidSession(AuthError):
    """Session token unknown or expired."""

    message_key = "invalid_session"


class EmailDeliveryFailed(AuthError):
    """The confirmation email could not be sent."""

    message_key = "email_delivery_failed"


class StoreUnavailable(AuthError):
    """The durable store could not be reached."""

    message_key = "store_unavailable"
