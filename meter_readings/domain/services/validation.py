"""Field-level validation rules that need no external data.

Each rule returns the failure message, or ``None`` when the entry passes.
"""

from collections.abc import Iterable

from meter_readings.domain.constants import (
    ACCOUNT_ID_NOT_POSITIVE_MESSAGE,
    METER_READ_VALUE_PATTERN,
    READ_VALUE_EMPTY_MESSAGE,
    READ_VALUE_FORMAT_MESSAGE,
    READING_NOT_NEWER_MESSAGE,
)
from meter_readings.domain.models.readings import MeterReadingEntry


def check_account_id_positive(entry: MeterReadingEntry) -> str | None:
    """Fail when the account id is zero or negative."""
    if entry.account_id <= 0:
        return ACCOUNT_ID_NOT_POSITIVE_MESSAGE
    return None


def check_read_value_present(entry: MeterReadingEntry) -> str | None:
    """Fail when the read value is absent, empty or whitespace."""
    value = entry.meter_read_value
    if value is None or not value.strip():
        return READ_VALUE_EMPTY_MESSAGE
    return None


def check_read_value_format(entry: MeterReadingEntry) -> str | None:
    """Fail unless the read value is exactly five ASCII digits."""
    value = entry.meter_read_value or ""
    if METER_READ_VALUE_PATTERN.fullmatch(value) is None:
        return READ_VALUE_FORMAT_MESSAGE
    return None


def check_newer_than_history(
    entry: MeterReadingEntry,
    history: Iterable[MeterReadingEntry],
) -> str | None:
    """Fail when the entry is not strictly newer than every prior reading.

    Args:
        entry: Candidate reading.
        history: Readings already stored for the same account.

    Returns:
        str | None: Failure message, or None when history is empty or the
        entry is newer than the latest stored reading.
    """
    latest = max(
        (reading.meter_reading_date_time for reading in history),
        default=None,
    )
    if latest is None:
        return None
    if entry.meter_reading_date_time > latest:
        return None
    return READING_NOT_NEWER_MESSAGE


__all__ = [
    "check_account_id_positive",
    "check_read_value_present",
    "check_read_value_format",
    "check_newer_than_history",
]
