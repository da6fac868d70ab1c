"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Request fields are optional at this layer: presence, email format and
password rules are checked by the domain so every caller gets the same
error messages.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from vestra.domain.entities import User


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: str | None = Field(default=None, max_length=200, description="Display name")
    email: str | None = None
    password: str | None = Field(default=None, description="User password (min 8 characters)")
    password_confirmation: str | None = None


class RegisterResponse(BaseModel):
    """Response model for an issued confirmation code."""

    message: str
    email: str
    expires_in_seconds: int


class ConfirmRequest(BaseModel):
    """Request model for registration confirmation."""

    email: str | None = None
    confirmation_code: str | None = Field(
        default=None, description="6-digit confirmation code received by email"
    )


class UserResponse(BaseModel):
    """Public user fields. Never includes the password hash."""

    id: int
    name: str | None
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.public_fields())


class ConfirmResponse(BaseModel):
    """Response model for a created account."""

    message: str
    user: UserResponse


class LoginRequest(BaseModel):
    """Request model for login."""

    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    """Response model for an opened session."""

    message: str
    user: UserResponse
    session_token: str
    expires_at: datetime


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
