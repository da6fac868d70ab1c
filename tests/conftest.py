"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory fakes of the repository and email ports (see tests/fakes.py)
- A controllable clock for expiry tests
- Domain services wired to the fakes (bcrypt cost 4 for speed)
"""

import pytest

from tests.fakes import (
    TEST_BCRYPT_COST,
    FakeClock,
    InMemoryConfirmationCodeRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
    RecordingEmailSender,
)
from vestra.adapters.pending.memory import InMemoryPendingRegistrationStore
from vestra.domain.registration import RegistrationService
from vestra.domain.sessions import SessionService


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def codes(clock: FakeClock) -> InMemoryConfirmationCodeRepository:
    return InMemoryConfirmationCodeRepository(clock)


@pytest.fixture
def users(codes: InMemoryConfirmationCodeRepository) -> InMemoryUserRepository:
    return InMemoryUserRepository(codes)


@pytest.fixture
def sessions() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def pending_store() -> InMemoryPendingRegistrationStore:
    return InMemoryPendingRegistrationStore()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def registration_service(
    users: InMemoryUserRepository,
    codes: InMemoryConfirmationCodeRepository,
    pending_store: InMemoryPendingRegistrationStore,
    email_sender: RecordingEmailSender,
    clock: FakeClock,
) -> RegistrationService:
    return RegistrationService(
        users=users,
        codes=codes,
        pending=pending_store,
        email_sender=email_sender,
        code_ttl_seconds=300,
        bcrypt_cost=TEST_BCRYPT_COST,
        clock=clock,
    )


@pytest.fixture
def session_service(
    users: InMemoryUserRepository,
    sessions: InMemorySessionRepository,
    clock: FakeClock,
) -> SessionService:
    return SessionService(
        users=users,
        sessions=sessions,
        session_ttl_days=30,
        bcrypt_cost=TEST_BCRYPT_COST,
        clock=clock,
    )
