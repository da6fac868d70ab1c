"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from vestra.adapters.pending.memory import InMemoryPendingRegistrationStore
from vestra.adapters.repository.postgres import (
    PostgresConfirmationCodeRepository,
    PostgresSessionRepository,
    PostgresUserRepository,
)
from vestra.adapters.smtp.console import ConsoleEmailSender
from vestra.adapters.smtp.smtp import SmtpEmailSender
from vestra.api.messages import negotiate_locale
from vestra.config.settings import get_settings
from vestra.domain.ports import EmailSender
from vestra.domain.registration import RegistrationService
from vestra.domain.sessions import SessionService


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_pending_store(request: Request) -> InMemoryPendingRegistrationStore:
    """
    Get the pending registration store from app state.

    One store per application instance, created in the lifespan.
    """
    return request.app.state.pending_store


@lru_cache
def get_email_sender() -> EmailSender:
    """Build the configured email sender (cached, senders are stateless)."""
    settings = get_settings()
    if settings.email_backend == "smtp":
        return SmtpEmailSender(settings)
    return ConsoleEmailSender()


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repositories, pending store and email sender.
    """
    settings = get_settings()
    pool = get_pool(request)
    return RegistrationService(
        users=PostgresUserRepository(pool),
        codes=PostgresConfirmationCodeRepository(pool),
        pending=get_pending_store(request),
        email_sender=get_email_sender(),
        code_ttl_seconds=settings.code_ttl_seconds,
        bcrypt_cost=settings.bcrypt_cost,
    )


def get_session_service(request: Request) -> SessionService:
    """Create session service with injected repositories."""
    settings = get_settings()
    pool = get_pool(request)
    return SessionService(
        users=PostgresUserRepository(pool),
        sessions=PostgresSessionRepository(pool),
        session_ttl_days=settings.session_ttl_days,
        bcrypt_cost=settings.bcrypt_cost,
    )


def get_locale(request: Request) -> str:
    """Locale for user-facing messages, from the Accept-Language header."""
    return negotiate_locale(
        request.headers.get("accept-language"), get_settings().default_locale
    )


# Bearer scheme for OpenAPI documentation; missing headers are handled by the domain
http_bearer = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> str | None:
    """Extract the session token from an ``Authorization: Bearer`` header."""
    if credentials is None:
        return None
    return credentials.credentials.strip() or None
