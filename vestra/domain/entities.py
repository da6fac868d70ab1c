"""
Domain entities - Plain records exchanged between services and ports.

Entities are immutable dataclasses. Adapters build them from storage rows;
services never mutate them in place.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    """Durable account, created only by a successful confirmation."""

    id: int
    name: str | None
    email: str
    password_hash: str
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_disabled(self) -> bool:
        return self.deleted_at is not None

    def public_fields(self) -> dict[str, object]:
        """Fields safe to return to the caller (never the password hash)."""
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class ConfirmationCode:
    """Issued one-time code. The newest row per email wins on lookup."""

    id: int
    email: str
    code: str
    created_at: datetime


@dataclass(frozen=True)
class PendingRegistration:
    """Account data held in memory until the code is confirmed."""

    email: str
    name: str | None
    password_hash: str


@dataclass(frozen=True)
class Session:
    """Opaque bearer token issued at login."""

    id: int
    user_id: int
    token: str
    expires_at: datetime
    created_at: datetime | None = None


@dataclass(frozen=True)
class LoginResult:
    user: User
    session: Session
