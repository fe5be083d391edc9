"""Application ports package."""

from .accounts_repository import AccountsRepositoryPort
from .database import DatabaseEnginePort
from .historical_lookup import HistoricalLookupPort
from .meter_readings_repository import MeterReadingsRepositoryPort

__all__ = [
    "AccountsRepositoryPort",
    "DatabaseEnginePort",
    "HistoricalLookupPort",
    "MeterReadingsRepositoryPort",
]
