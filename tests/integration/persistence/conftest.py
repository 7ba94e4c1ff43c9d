"""Fixtures for PostgreSQL integration tests."""

from tests.shared.fixtures.database import async_engine, db_session, postgres_container

__all__ = ["async_engine", "db_session", "postgres_container"]
