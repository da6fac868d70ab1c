"""
Soft-delete (disable) the user with the given email.

The account keeps its row; login answers "account disabled" from then on.
Usage: python scripts/disable_user.py <email>
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from psycopg_pool import ConnectionPool

from vestra.adapters.repository.postgres import PostgresUserRepository
from vestra.config.settings import get_settings
from vestra.domain.credentials import normalize_email


def main():
    email = normalize_email(sys.argv[1] if len(sys.argv) > 1 else "")
    if not email:
        print("Usage: python scripts/disable_user.py <email>")
        sys.exit(1)

    settings = get_settings()
    with ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=1) as pool:
        disabled = PostgresUserRepository(pool).soft_delete(email)

    if disabled:
        print(f"Disabled user: {email}")
    else:
        print(f"No active user found with email: {email}")


if __name__ == "__main__":
    main()
