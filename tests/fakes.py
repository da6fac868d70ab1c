"""
In-memory fakes for the domain's ports.

Used by unit and adversarial tests in place of PostgreSQL and SMTP.
"""

import itertools
import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import bcrypt

from vestra.domain.entities import ConfirmationCode, PendingRegistration, Session, User

TEST_BCRYPT_COST = 4


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class InMemoryConfirmationCodeRepository:
    """ConfirmationCodeRepository fake backed by a dict."""

    def __init__(self, clock: FakeClock) -> None:
        self._clock = clock
        self._rows: dict[int, ConfirmationCode] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def replace_for_email(self, email: str, code: str) -> ConfirmationCode:
        with self._lock:
            self._rows = {k: v for k, v in self._rows.items() if v.email != email}
            row = ConfirmationCode(
                id=next(self._ids), email=email, code=code, created_at=self._clock()
            )
            self._rows[row.id] = row
            return row

    def find_latest(self, email: str, code: str) -> ConfirmationCode | None:
        with self._lock:
            matches = [r for r in self._rows.values() if r.email == email and r.code == code]
        if not matches:
            return None
        return max(matches, key=lambda r: (r.created_at, r.id))

    def delete(self, code_id: int) -> None:
        with self._lock:
            self._rows.pop(code_id, None)

    def delete_for_email(self, email: str) -> int:
        with self._lock:
            doomed = [k for k, v in self._rows.items() if v.email == email]
            for key in doomed:
                del self._rows[key]
            return len(doomed)

    def insert(self, email: str, code: str, created_at: datetime) -> ConfirmationCode:
        """Add a historical row without removing earlier ones."""
        with self._lock:
            row = ConfirmationCode(id=next(self._ids), email=email, code=code, created_at=created_at)
            self._rows[row.id] = row
            return row

    def rows_for(self, email: str) -> list[ConfirmationCode]:
        with self._lock:
            return [r for r in self._rows.values() if r.email == email]


class InMemoryUserRepository:
    """
    UserRepository fake.

    create_from_pending holds a lock across check-and-insert, standing in
    for the database's unique email constraint.
    """

    def __init__(self, codes: InMemoryConfirmationCodeRepository) -> None:
        self._codes = codes
        self._users: dict[str, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.create_calls = 0

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            return self._users.get(email)

    def find_by_id(self, user_id: int) -> User | None:
        with self._lock:
            return next((u for u in self._users.values() if u.id == user_id), None)

    def create_from_pending(
        self, pending: PendingRegistration, consumed_code_id: int
    ) -> User | None:
        with self._lock:
            self.create_calls += 1
            user = None
            if pending.email not in self._users:
                user = User(
                    id=next(self._ids),
                    name=pending.name,
                    email=pending.email,
                    password_hash=pending.password_hash,
                )
                self._users[pending.email] = user
        self._codes.delete(consumed_code_id)
        return user

    def add(self, email: str, password: str = "password123", name: str | None = None) -> User:
        password_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt(TEST_BCRYPT_COST)).decode()
        with self._lock:
            user = User(id=next(self._ids), name=name, email=email, password_hash=password_hash)
            self._users[email] = user
            return user

    def disable(self, email: str, when: datetime) -> None:
        with self._lock:
            self._users[email] = replace(self._users[email], deleted_at=when)

    def count(self) -> int:
        with self._lock:
            return len(self._users)


class InMemorySessionRepository:
    """SessionRepository fake."""

    def __init__(self) -> None:
        self._rows: dict[int, Session] = {}
        self._ids = itertools.count(1)

    def create(self, user_id: int, token: str, expires_at: datetime) -> Session:
        session = Session(id=next(self._ids), user_id=user_id, token=token, expires_at=expires_at)
        self._rows[session.id] = session
        return session

    def find_by_token(self, token: str) -> Session | None:
        return next((s for s in self._rows.values() if s.token == token), None)

    def delete(self, session_id: int) -> None:
        self._rows.pop(session_id, None)

    def all(self) -> list[Session]:
        return list(self._rows.values())


class RecordingEmailSender:
    """EmailSender fake that remembers every code it was asked to send."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.succeed = True

    def send_confirmation_code(self, email: str, code: str) -> bool:
        self.sent.append((email, code))
        return self.succeed

    def last_code_for(self, email: str) -> str:
        return [code for to, code in self.sent if to == email][-1]
