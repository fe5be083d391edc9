"""Database ports for the meter readings service.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations are expected to provide
concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncEngine


class DatabaseEnginePort(Protocol):
    """Port exposing the async engine backing accounts and readings."""

    def get_engine(self) -> AsyncEngine:
        """Get the engine for the meter readings database.

        Returns:
            AsyncEngine: SQLAlchemy async engine.
        """


__all__ = ["DatabaseEnginePort"]
