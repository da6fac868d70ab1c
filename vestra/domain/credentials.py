"""
Credential primitives shared by registration and login.

Email normalization and validation, confirmation code and session token
generation, and bcrypt password hashing.
"""

import secrets
from datetime import datetime, timezone
from functools import lru_cache

import bcrypt
import email_validator
from email_validator import EmailNotValidError, validate_email

CONFIRMATION_CODE_LENGTH = 6
SESSION_TOKEN_BYTES = 32
MIN_PASSWORD_LENGTH = 8

# bcrypt only reads the first 72 bytes; longer input is truncated on both
# hash and check.
BCRYPT_MAX_PASSWORD_BYTES = 72

# Addresses on reserved names (.local, .test, .onion, ...) are well-formed
# and accepted.
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()

_DUMMY_PASSWORD = b"dummy_password_for_timing_safety"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    """Syntax-only check; no DNS lookups are made."""
    try:
        validate_email(email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def generate_confirmation_code() -> str:
    """
    Generate a cryptographically secure 6-digit confirmation code.

    Returns string to preserve leading zeros.
    """
    return "".join(secrets.choice("0123456789") for _ in range(CONFIRMATION_CODE_LENGTH))


def generate_session_token() -> str:
    """Random 64-character hex token, unrelated to any user data."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def _password_bytes(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode()


@lru_cache
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(_DUMMY_PASSWORD, bcrypt.gensalt(rounds=rounds))


def verify_password(password: str, password_hash: str | None, dummy_rounds: int = 12) -> bool:
    """
    Check a password against a bcrypt hash in constant time.

    A missing hash is checked against a dummy hash of cost ``dummy_rounds``
    and always fails. Pass the cost stored hashes use.
    """
    if password_hash is None:
        bcrypt.checkpw(_password_bytes(password), _dummy_hash(dummy_rounds))
        return False
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode())
