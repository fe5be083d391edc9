"""Domain models package."""

from .accounts import AccountRecord
from .readings import (
    EntryKey,
    MeterReadingEntry,
    MeterReadingError,
    MeterReadingResponse,
    ValidationFailure,
    ValidationOutcome,
)

__all__ = [
    "AccountRecord",
    "EntryKey",
    "MeterReadingEntry",
    "MeterReadingError",
    "MeterReadingResponse",
    "ValidationFailure",
    "ValidationOutcome",
]
