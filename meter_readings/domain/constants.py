"""Domain constants for meter reading validation."""

import re

ACCOUNT_ID_FIELD = "AccountId"
METER_READING_DATE_TIME_FIELD = "MeterReadingDateTime"
METER_READ_VALUE_FIELD = "MeterReadValue"

ACCOUNT_ID_NOT_POSITIVE_MESSAGE = "AccountId must be greater than 0"
ACCOUNT_ID_NOT_FOUND_MESSAGE = "AccountId does not exist"
READING_NOT_NEWER_MESSAGE = (
    "Meter Reading DateTime must be newer than the latest meter reading"
)
READ_VALUE_EMPTY_MESSAGE = "MeterReadValue cannot be empty"
READ_VALUE_FORMAT_MESSAGE = "MeterReadValue must be in the format NNNNN"
DUPLICATE_ENTRY_MESSAGE = "Duplicate Entries are not allowed."

# Exactly five ASCII digits; matched with fullmatch.
METER_READ_VALUE_PATTERN = re.compile(r"[0-9]{5}")


__all__ = [
    "ACCOUNT_ID_FIELD",
    "METER_READING_DATE_TIME_FIELD",
    "METER_READ_VALUE_FIELD",
    "ACCOUNT_ID_NOT_POSITIVE_MESSAGE",
    "ACCOUNT_ID_NOT_FOUND_MESSAGE",
    "READING_NOT_NEWER_MESSAGE",
    "READ_VALUE_EMPTY_MESSAGE",
    "READ_VALUE_FORMAT_MESSAGE",
    "DUPLICATE_ENTRY_MESSAGE",
    "METER_READ_VALUE_PATTERN",
]
