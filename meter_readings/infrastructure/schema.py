"""Table definitions for accounts and meter readings."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
)
from sqlalchemy.ext.asyncio import AsyncEngine


metadata = MetaData()

accounts_table = Table(
    "accounts",
    metadata,
    Column("account_id", Integer, primary_key=True, autoincrement=False),
    Column("first_name", String(100)),
    Column("last_name", String(100)),
)

meter_readings_table = Table(
    "meter_readings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "account_id",
        Integer,
        ForeignKey("accounts.account_id"),
        nullable=False,
        index=True,
    ),
    Column("meter_reading_date_time", DateTime, nullable=False),
    Column("meter_read_value", String(20)),
)


async def ensure_schema(engine: AsyncEngine) -> None:
    """Create the accounts and meter_readings tables if they do not exist.

    Args:
        engine: Async engine connected to the meter readings database.
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


__all__ = [
    "metadata",
    "accounts_table",
    "meter_readings_table",
    "ensure_schema",
]
