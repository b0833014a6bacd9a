"""
PostgreSQL repository adapter - Implements AttendeeRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

The attendees table carries a UNIQUE constraint on email. The service checks
for an existing attendee before creating one, but the two statements are not
a single transaction; when two registrations for the same email race, the
constraint makes the second INSERT fail and it is reported as an
AttendeeStoreError.
"""

import logging
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import AttendeeStoreError
from src.domain.ports import AttendeeRecord

logger = logging.getLogger(__name__)


class PostgresAttendeeRepository:
    """
    Implements AttendeeRepository protocol via psycopg3.

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

    def email_exists(self, email: str) -> bool:
        """
        Check whether an attendee with this exact email exists.

        Args:
            email: Normalized email address (lowercase, stripped)

        Returns:
            True if at least one attendee row matches
        """
        sql = "SELECT 1 FROM attendees WHERE email = %s LIMIT 1"

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                return cursor.fetchone() is not None
        except psycopg.Error as err:
            raise AttendeeStoreError("Failed to query attendees") from err

    def create(self, record: AttendeeRecord) -> None:
        """
        Insert a new attendee row.

        address and address_verified are stored as NULL when no address
        was supplied.

        Args:
            record: Attendee to persist

        Raises:
            AttendeeStoreError: On any database error, including a duplicate email
        """
        sql = """
            INSERT INTO attendees (first_name, last_name, email, address, address_verified, created_at)
            VALUES (%s, %s, %s, %s, %s, NOW())
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(
                    sql,
                    (
                        record.first_name,
                        record.last_name,
                        record.email,
                        record.address,
                        record.address_verified,
                    ),
                )
                conn.commit()
        except psycopg.Error as err:
            raise AttendeeStoreError(f"Failed to create attendee {record.email}") from err


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
