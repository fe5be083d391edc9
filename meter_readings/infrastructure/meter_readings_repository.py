"""SQLAlchemy-backed repository for persisted meter readings."""

from sqlalchemy import DateTime, Integer, String, bindparam, text

from meter_readings.application.ports.database import DatabaseEnginePort
from meter_readings.application.ports.meter_readings_repository import (
    MeterReadingsRepositoryPort,
)
from meter_readings.domain.models.readings import MeterReadingEntry


SELECT_READINGS_SQL = text(
    """
    SELECT account_id, meter_reading_date_time, meter_read_value
    FROM meter_readings
    WHERE account_id = :account_id
    ORDER BY meter_reading_date_time
    """
).columns(
    account_id=Integer,
    meter_reading_date_time=DateTime,
    meter_read_value=String,
)

INSERT_READING_SQL = text(
    """
    INSERT INTO meter_readings (
        account_id,
        meter_reading_date_time,
        meter_read_value
    )
    VALUES (
        :account_id,
        :meter_reading_date_time,
        :meter_read_value
    )
    """
).bindparams(bindparam("meter_reading_date_time", type_=DateTime))


class SqlAlchemyMeterReadingsRepository(MeterReadingsRepositoryPort):
    """Repository backed by SQLAlchemy for meter readings."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the async engine.
        """
        self._db_port = db_port

    async def fetch_readings_for_account(
        self,
        account_id: int,
    ) -> list[MeterReadingEntry]:
        """Return the stored readings of an account, oldest first."""
        engine = self._db_port.get_engine()
        async with engine.connect() as conn:
            result = await conn.execute(
                SELECT_READINGS_SQL,
                {"account_id": account_id},
            )
            rows = result.all()
        return [
            MeterReadingEntry(
                account_id=row.account_id,
                meter_reading_date_time=row.meter_reading_date_time,
                meter_read_value=row.meter_read_value,
            )
            for row in rows
        ]

    async def save_reading(self, entry: MeterReadingEntry) -> None:
        """Append one reading and commit it."""
        engine = self._db_port.get_engine()
        async with engine.begin() as conn:
            await conn.execute(
                INSERT_READING_SQL,
                {
                    "account_id": entry.account_id,
                    "meter_reading_date_time": entry.meter_reading_date_time,
                    "meter_read_value": entry.meter_read_value,
                },
            )


__all__ = [
    "SqlAlchemyMeterReadingsRepository",
    "SELECT_READINGS_SQL",
    "INSERT_READING_SQL",
]
