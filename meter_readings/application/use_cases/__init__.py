"""Application use cases package."""

from .process_meter_readings import ProcessMeterReadingsUseCase
from .seed_accounts import SeedAccountsResult, SeedAccountsUseCase
from .validate_meter_reading import (
    MeterReadingEntryValidator,
    RepositoryHistoricalLookup,
)

__all__ = [
    "ProcessMeterReadingsUseCase",
    "SeedAccountsUseCase",
    "SeedAccountsResult",
    "MeterReadingEntryValidator",
    "RepositoryHistoricalLookup",
]
