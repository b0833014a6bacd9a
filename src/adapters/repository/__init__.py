"""Repository adapters - Database implementations."""

from .postgres import PostgresAttendeeRepository, run_migrations

__all__ = ["PostgresAttendeeRepository", "run_migrations"]
