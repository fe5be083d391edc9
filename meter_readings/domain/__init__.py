"""Domain package for meter reading rules and core models."""

from .constants import DUPLICATE_ENTRY_MESSAGE
from .models import (
    AccountRecord,
    MeterReadingEntry,
    MeterReadingError,
    MeterReadingResponse,
    ValidationFailure,
    ValidationOutcome,
)
from .services import (
    check_account_id_positive,
    check_newer_than_history,
    check_read_value_format,
    check_read_value_present,
    find_duplicate_keys,
)

__all__ = [
    "AccountRecord",
    "MeterReadingEntry",
    "MeterReadingError",
    "MeterReadingResponse",
    "ValidationFailure",
    "ValidationOutcome",
    "DUPLICATE_ENTRY_MESSAGE",
    "check_account_id_positive",
    "check_newer_than_history",
    "check_read_value_format",
    "check_read_value_present",
    "find_duplicate_keys",
]
