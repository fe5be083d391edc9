"""Database infrastructure for the meter readings service.

This module exposes concrete helpers to create and reuse the SQLAlchemy async
engine connected to the meter readings database. It belongs to the
infrastructure layer because it deals with external systems (PostgreSQL via
asyncpg in deployment, SQLite via aiosqlite locally).
"""

import os
from pathlib import Path
from typing import Optional

import dotenv
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from meter_readings.application.ports.database import DatabaseEnginePort


DATABASE_URL_ENV = "METER_READINGS_DB_URL"


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> AsyncEngine:
    """Create a configured SQLAlchemy async engine.

    For a file-backed SQLite database the parent directory is created.

    Args:
        db_url: Fully qualified database URL (including async driver).

    Returns:
        AsyncEngine: Engine with connection health checks enabled.
    """
    _ensure_sqlite_directory(db_url)
    return create_async_engine(
        db_url,
        pool_pre_ping=True,
        future=True,
    )


def _ensure_sqlite_directory(db_url: str) -> None:
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        return
    if not url.database or url.database == ":memory:":
        return
    Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)


_engine: Optional[AsyncEngine] = None


def get_engine() -> AsyncEngine:
    """Get a singleton async engine for the meter readings database.

    Returns:
        AsyncEngine: Lazily initialized engine.
    """
    global _engine
    if _engine is None:
        db_url = _get_env_var(DATABASE_URL_ENV)
        _engine = _create_engine(db_url)
    return _engine


async def dispose_engine() -> None:
    """Dispose the singleton engine, if it was created."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by the singleton engine.

    The adapter hides configuration details (environment variables, drivers)
    behind the port so use cases and repositories depend only on the protocol.
    """

    def get_engine(self) -> AsyncEngine:
        """Get the engine for the meter readings database.

        Returns:
            AsyncEngine: SQLAlchemy async engine.
        """
        return get_engine()


__all__ = [
    "DATABASE_URL_ENV",
    "get_engine",
    "dispose_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
