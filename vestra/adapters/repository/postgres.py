"""
PostgreSQL repository adapters - Implement the domain's persistence ports.

This module provides the PostgreSQL implementations of the user,
confirmation code and session repositories using psycopg3 with raw SQL.

Consistency Design:
-------------------
1. **Unique email constraint**: ``users.email`` is UNIQUE. User creation
   uses ``INSERT ... ON CONFLICT (email) DO NOTHING`` so two concurrent
   confirmations can never create two accounts; the loser gets no row back.

2. **Single-transaction promotion**: the user insert and the deletion of the
   consumed confirmation code commit together, so a crash cannot leave a
   user whose code is still confirmable.

3. **Single-transaction code replacement**: prior codes for an email are
   deleted and the new code inserted in one transaction.

Driver failures (connection refused, pool exhausted) surface to the domain
as StoreUnavailable so that no psycopg type leaks past this module.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool, PoolTimeout

from vestra.domain.entities import ConfirmationCode, PendingRegistration, Session, User
from vestra.domain.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, name, email, password_hash, deleted_at, created_at, updated_at"


@contextmanager
def _connection(pool: ConnectionPool) -> Iterator[psycopg.Connection]:
    """Borrow a pooled connection, translating availability errors."""
    try:
        with pool.connection() as conn:
            yield conn
    except (psycopg.OperationalError, PoolTimeout) as e:
        logger.error(f"Database unavailable: {e}")
        raise StoreUnavailable() from e


def _user_from_row(row: tuple) -> User:
    return User(
        id=row[0],
        name=row[1],
        email=row[2],
        password_hash=row[3],
        deleted_at=row[4],
        created_at=row[5],
        updated_at=row[6],
    )


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s"

        with _connection(self._pool) as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()
        return _user_from_row(row) if row is not None else None

    def find_by_id(self, user_id: int) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s"

        with _connection(self._pool) as conn, conn.cursor() as cursor:
            cursor.execute(sql, (user_id,))
            row = cursor.fetchone()
        return _user_from_row(row) if row is not None else None

    def create_from_pending(
        self, pending: PendingRegistration, consumed_code_id: int
    ) -> User | None:
        """
        Create the user and delete the consumed code in one transaction.

        The unique constraint on email is the source of truth: when a user
        already exists the insert returns no row and None is returned. The
        code row is deleted in both cases.

        Args:
            pending: Pending registration holding name, email and hash
            consumed_code_id: Confirmation code row to delete

        Returns:
            The created user, or None on email conflict
        """
        insert_sql = f"""
            INSERT INTO users (name, email, password_hash)
            VALUES (%s, %s, %s)
            ON CONFLICT (email) DO NOTHING
            RETURNING {_USER_COLUMNS}
        """
        delete_code_sql = "DELETE FROM confirmation_codes WHERE id = %s"

        with _connection(self._pool) as conn, conn.cursor() as cursor:
            cursor.execute(insert_sql, (pending.name, pending.email, pending.password_hash))
            row = cursor.fetchone()
            cursor.execute(delete_code_sql, (consumed_code_id,))
            conn.commit()
        return _user_from_row(row) if row is not None else None

    def soft_delete(self, email: str) -> bool:
        """
        Mark an account as disabled. Returns False if no active user matched.

        Used by the ``disable-user`` management command.
        """
        sql = """
            UPDATE users
            SET deleted_at = NOW(), updated_at = NOW()
            WHERE email = %s AND deleted_at IS NULL
        """

        with _connection(self._pool) as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            conn.commit()
            return cursor.rowcount == 1


class PostgresConfirmationCodeRepository:
    """
    Implements ConfirmationCodeRepository protocol via psycopg3.

    Historical rows may remain for an email; lookups take the newest.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def replace_for_email(self, email: str, code: str) -> ConfirmationCode:
        """
        Replace every code for the email with a fresh one.

        Args:
            email: Normalized email address
            code: 6-digit confirmation code

        Returns:
            The inserted code row
        """
        delete_sql = "DELETE FROM confirmation_codes WHERE email = %s"
        insert_sql = """
            INSERT INTO confirmation_codes (email, code)
            VALUES (%s, %s)
            RETURNING id, email, code, created_at
        """

        with _connection(self._pool) as conn, conn.cursor() as cursor:
            cursor.execute(delete_sql, (email,))
            cursor.execute(insert_sql, (email, code))
            row = cursor.fetchone()
            conn.commit()
        return ConfirmationCode(id=row[0], email=row[1], code=row[2], created_at=row[3])

    def find_latest(self, email: str, code: str) -> ConfirmationCode | None:
        sql = """
            SELECT id, email, code, created_at
            FROM confirmation_codes
            WHERE email = %s AND code = %s
            ORDER BY created_at DESC, id DESC
            LIMIT 1
        """

        with _connection(self._pool) as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email, code))
            row = cursor.fetchone()
        if row is None:
            return None
        return ConfirmationCode(id=row[0], email=row[1], code=row[2], created_at=row[3])

    def delete(self, code_id: int) -> None:
        with _connection(self._pool) as conn:
            conn.execute("DELETE FROM confirmation_codes WHERE id = %s", (code_id,))
            conn.commit()

    def delete_for_email(self, email: str) -> int:
        with _connection(self._pool) as conn, conn.cursor() as cursor:
            cursor.execute("DELETE FROM confirmation_codes WHERE email = %s", (email,))
            conn.commit()
            return cursor.rowcount


class PostgresSessionRepository:
    """Implements SessionRepository protocol via psycopg3."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def create(self, user_id: int, token: str, expires_at: datetime) -> Session:
        sql = """
            INSERT INTO sessions (user_id, token, expires_at)
            VALUES (%s, %s, %s)
            RETURNING id, user_id, token, expires_at, created_at
        """

        with _connection(self._pool) as conn, conn.cursor() as cursor:
            cursor.execute(sql, (user_id, token, expires_at))
            row = cursor.fetchone()
            conn.commit()
        return Session(
            id=row[0], user_id=row[1], token=row[2], expires_at=row[3], created_at=row[4]
        )

    def find_by_token(self, token: str) -> Session | None:
        sql = """
            SELECT id, user_id, token, expires_at, created_at
            FROM sessions
            WHERE token = %s
        """

        with _connection(self._pool) as conn, conn.cursor() as cursor:
            cursor.execute(sql, (token,))
            row = cursor.fetchone()
        if row is None:
            return None
        return Session(
            id=row[0], user_id=row[1], token=row[2], expires_at=row[3], created_at=row[4]
        )

    def delete(self, session_id: int) -> None:
        with _connection(self._pool) as conn:
            conn.execute("DELETE FROM sessions WHERE id = %s", (session_id,))
            conn.commit()


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: vestra/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
