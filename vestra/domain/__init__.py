"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration confirmation workflow and session
issuance. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .entities import ConfirmationCode, LoginResult, PendingRegistration, Session, User
from .exceptions import (
    AccountDisabled,
    AuthError,
    ConfirmationCodeExpired,
    EmailAlreadyRegistered,
    EmailDeliveryFailed,
    InvalidConfirmationCode,
    InvalidCredentials,
    InvalidSession,
    PendingRegistrationNotFound,
    StoreUnavailable,
    ValidationFailed,
)
from .ports import (
    ConfirmationCodeRepository,
    EmailSender,
    PendingRegistrationStore,
    SessionRepository,
    UserRepository,
)
from .registration import RegistrationService
from .sessions import SessionService

__all__ = [
    "AccountDisabled",
    "AuthError",
    "ConfirmationCode",
    "ConfirmationCodeExpired",
    "ConfirmationCodeRepository",
    "EmailAlreadyRegistered",
    "EmailDeliveryFailed",
    "EmailSender",
    "InvalidConfirmationCode",
    "InvalidCredentials",
    "InvalidSession",
    "LoginResult",
    "PendingRegistration",
    "PendingRegistrationNotFound",
    "PendingRegistrationStore",
    "RegistrationService",
    "Session",
    "SessionRepository",
    "SessionService",
    "StoreUnavailable",
    "User",
    "UserRepository",
    "ValidationFailed",
]
