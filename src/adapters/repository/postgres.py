"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
account lookup port using psycopg3 with raw SQL.

The repository is read-only: registration verification never writes
accounts. Uniqueness at creation time is guaranteed by the UNIQUE
constraints on accounts.username and accounts.email.
"""

import logging
from pathlib import Path

from psycopg_pool import ConnectionPool

from src.domain.models import AccountRecord

logger = logging.getLogger(__name__)


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

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

    def find_by_username(self, username: str) -> AccountRecord | None:
        """
        Exact-match lookup on accounts.username.

        Args:
            username: Username as supplied by the caller

        Returns:
            AccountRecord if an account holds the username, else None
        """
        sql = "SELECT username, email FROM accounts WHERE username = %s LIMIT 1"
        return self._fetch_one(sql, username)

    def find_by_email(self, email: str) -> AccountRecord | None:
        """
        Exact-match lookup on accounts.email.

        Args:
            email: Email as supplied by the caller

        Returns:
            AccountRecord if an account holds the email, else None
        """
        sql = "SELECT username, email FROM accounts WHERE email = %s LIMIT 1"
        return self._fetch_one(sql, email)

    def _fetch_one(self, sql: str, value: str) -> AccountRecord | None:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (value,))
            row = cursor.fetchone()

        if row is None:
            return None
        return AccountRecord(username=row[0], email=row[1])


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
