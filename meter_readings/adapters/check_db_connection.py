"""Simple CLI to validate the database connection.

This adapter is meant for local operations: it instantiates the concrete
database adapter from the infrastructure layer and runs a basic health
check against the meter readings database.
"""

import asyncio

from meter_readings.infrastructure.container import build_database_adapter
from meter_readings.infrastructure.db import dispose_engine
from meter_readings.infrastructure.logging.logger import get_app_logger


async def _check() -> None:
    adapter = build_database_adapter()
    logger = get_app_logger()

    engine = adapter.get_engine()
    logger.info(f"Meter readings DB: {engine.url}")

    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
    finally:
        await dispose_engine()

    logger.info("Connection is working.")


def main() -> None:
    """Run a basic connectivity check against the configured database."""
    asyncio.run(_check())


if __name__ == "__main__":  # pragma: no cover
    main()
