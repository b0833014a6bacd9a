"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Database connection pool (skips when PostgreSQL is unreachable)
- Attendee table cleanup between tests
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for database tests, migrating the schema once."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError:
        pytest.skip("PostgreSQL is not reachable at DATABASE_URL")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean attendees table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM attendees")
        conn.commit()
    yield
