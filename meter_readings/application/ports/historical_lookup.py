"""Port consulted by validation rules that depend on stored data."""

from typing import Protocol

from meter_readings.domain.models.readings import MeterReadingEntry


class HistoricalLookupPort(Protocol):
    """Read-only view over accounts and prior readings."""

    async def account_exists(self, account_id: int) -> bool:
        """Return whether the account exists."""

    async def fetch_readings_for_account(
        self,
        account_id: int,
    ) -> list[MeterReadingEntry]:
        """Return prior readings for the account; empty means no history."""


__all__ = ["HistoricalLookupPort"]
