"""Repository adapters - Database implementations."""

from .postgres import (
    PostgresConfirmationCodeRepository,
    PostgresSessionRepository,
    PostgresUserRepository,
    run_migrations,
)

__all__ = [
    "PostgresConfirmationCodeRepository",
    "PostgresSessionRepository",
    "PostgresUserRepository",
    "run_migrations",
]
