"""Domain services package."""

from .duplicates import find_duplicate_keys, group_entries_by_key
from .validation import (
    check_account_id_positive,
    check_newer_than_history,
    check_read_value_format,
    check_read_value_present,
)

__all__ = [
    "find_duplicate_keys",
    "group_entries_by_key",
    "check_account_id_positive",
    "check_newer_than_history",
    "check_read_value_format",
    "check_read_value_present",
]
