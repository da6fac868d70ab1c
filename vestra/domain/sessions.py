"""
Session domain service - Login and bearer token resolution.

Credential failures are deliberately vague: an unknown email and a wrong
password raise the same error, and bcrypt runs in both cases so response
time does not reveal which one happened. Disabled accounts get their own
error because the caller has to act differently.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from .credentials import generate_session_token, normalize_email, utc_now, verify_password
from .entities import LoginResult, User
from .exceptions import AccountDisabled, InvalidCredentials, InvalidSession, ValidationFailed
from .ports import SessionRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass
class SessionService:
    """Issues and resolves opaque session tokens."""

    users: UserRepository
    sessions: SessionRepository
    session_ttl_days: int = 30
    bcrypt_cost: int = 12
    clock: Callable[[], datetime] = field(default=utc_now)

    def login(self, email: str | None, password: str | None) -> LoginResult:
        """
        Verify credentials and open a new session.

        Multiple concurrent sessions per user are allowed.

        Raises:
            ValidationFailed: Missing email or password
            InvalidCredentials: Unknown email or wrong password
            AccountDisabled: The account is soft-deleted
        """
        if not email or not password:
            raise ValidationFailed("login_fields_required")

        normalized_email = normalize_email(email)
        user = self.users.find_by_email(normalized_email)

        if user is None:
            verify_password(password, None, dummy_rounds=self.bcrypt_cost)
            raise InvalidCredentials()

        if user.is_disabled:
            logger.info("Login refused for disabled account %s", user.id)
            raise AccountDisabled()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        session = self.sessions.create(
            user_id=user.id,
            token=generate_session_token(),
            expires_at=self.clock() + timedelta(days=self.session_ttl_days),
        )
        logger.info("Session %s opened for user %s", session.id, user.id)
        return LoginResult(user=user, session=session)

    def authenticate(self, token: str | None) -> User:
        """
        Resolve a bearer token to its user.

        Expired sessions are deleted when they are presented.

        Raises:
            InvalidSession: Token unknown, expired, or its owner is gone
            AccountDisabled: The owner is soft-deleted
        """
        if not token:
            raise InvalidSession()

        session = self.sessions.find_by_token(token)
        if session is None:
            raise InvalidSession()

        if session.expires_at <= self.clock():
            self.sessions.delete(session.id)
            raise InvalidSession()

        user = self.users.find_by_id(session.user_id)
        if user is None:
            raise InvalidSession()
        if user.is_disabled:
            raise AccountDisabled()
        return user
