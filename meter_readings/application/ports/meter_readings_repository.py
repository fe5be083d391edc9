"""Port for reading and appending persisted meter readings."""

from typing import Protocol

from meter_readings.domain.models.readings import MeterReadingEntry


class MeterReadingsRepositoryPort(Protocol):
    """Port exposing the meter readings store."""

    async def fetch_readings_for_account(
        self,
        account_id: int,
    ) -> list[MeterReadingEntry]:
        """Return every stored reading for the account, possibly none."""

    async def save_reading(self, entry: MeterReadingEntry) -> None:
        """Append one validated reading."""


__all__ = ["MeterReadingsRepositoryPort"]
