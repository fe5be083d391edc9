"""CSV readers turning uploads into domain records.

Meter readings uploads carry the headers ``AccountId``,
``MeterReadingDateTime`` and ``MeterReadValue``; extra columns are ignored.
Read values are passed through untouched so the validation rules decide on
them. A row whose account id or timestamp cannot be converted fails the
whole upload, as does a file that is not UTF-8 or not valid CSV.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
import csv
from datetime import datetime
from pathlib import Path
import re
from typing import TextIO

from meter_readings.domain.constants import (
    ACCOUNT_ID_FIELD,
    METER_READ_VALUE_FIELD,
    METER_READING_DATE_TIME_FIELD,
)
from meter_readings.domain.models.accounts import AccountRecord
from meter_readings.domain.models.readings import (
    MeterReadingEntry,
    to_naive_utc,
)
from meter_readings.infrastructure.settings import DEFAULT_DATETIME_FORMATS


READINGS_HEADERS = (
    ACCOUNT_ID_FIELD,
    METER_READING_DATE_TIME_FIELD,
    METER_READ_VALUE_FIELD,
)
ACCOUNTS_HEADERS = ("AccountId", "FirstName", "LastName")
INTEGER_PATTERN = re.compile(r"-?[0-9]+")


class MeterReadingsCsvError(ValueError):
    """Raised when an upload cannot be converted into records."""

    def __init__(self, message: str, row_number: int | None = None) -> None:
        if row_number is not None:
            message = f"Row {row_number}: {message}"
        super().__init__(message)
        self.row_number = row_number


def parse_meter_readings_csv(
    stream: TextIO,
    datetime_formats: Iterable[str] = DEFAULT_DATETIME_FORMATS,
) -> list[MeterReadingEntry]:
    """Parse a meter readings CSV into entries, in file order.

    Args:
        stream: Text stream positioned at the header row.
        datetime_formats: strptime formats tried before ISO-8601.

    Returns:
        list[MeterReadingEntry]: One entry per data row.

    Raises:
        MeterReadingsCsvError: On undecodable or malformed content, missing
            headers or unconvertible rows.
    """
    formats = tuple(datetime_formats)
    entries = []
    with _unreadable_content_as_csv_error():
        reader = csv.DictReader(stream)
        _require_headers(reader.fieldnames, READINGS_HEADERS)
        for row_number, row in enumerate(reader, start=1):
            if _is_blank_row(row):
                continue
            entries.append(
                MeterReadingEntry(
                    account_id=_parse_int(
                        row.get(ACCOUNT_ID_FIELD),
                        ACCOUNT_ID_FIELD,
                        row_number,
                    ),
                    meter_reading_date_time=_parse_datetime(
                        row.get(METER_READING_DATE_TIME_FIELD),
                        formats,
                        row_number,
                    ),
                    meter_read_value=row.get(METER_READ_VALUE_FIELD) or "",
                )
            )
    return entries


def read_meter_readings_file(
    path: Path | str,
    datetime_formats: Iterable[str] = DEFAULT_DATETIME_FORMATS,
) -> list[MeterReadingEntry]:
    """Open a meter readings CSV file and parse it."""
    with open(path, encoding="utf-8-sig", newline="") as stream:
        return parse_meter_readings_csv(stream, datetime_formats)


def parse_accounts_csv(stream: TextIO) -> list[AccountRecord]:
    """Parse an accounts export (AccountId, FirstName, LastName)."""
    records = []
    with _unreadable_content_as_csv_error():
        reader = csv.DictReader(stream)
        _require_headers(reader.fieldnames, ACCOUNTS_HEADERS)
        for row_number, row in enumerate(reader, start=1):
            if _is_blank_row(row):
                continue
            records.append(
                AccountRecord(
                    account_id=_parse_int(
                        row.get("AccountId"),
                        "AccountId",
                        row_number,
                    ),
                    first_name=(row.get("FirstName") or "").strip(),
                    last_name=(row.get("LastName") or "").strip(),
                )
            )
    return records


def read_accounts_file(path: Path | str) -> list[AccountRecord]:
    """Open an accounts CSV file and parse it."""
    with open(path, encoding="utf-8-sig", newline="") as stream:
        return parse_accounts_csv(stream)


def decode_upload(content: bytes) -> str:
    """Decode uploaded bytes as UTF-8, dropping a leading BOM.

    Raises:
        MeterReadingsCsvError: When the bytes are not valid UTF-8.
    """
    with _unreadable_content_as_csv_error():
        return content.decode("utf-8-sig")


@contextmanager
def _unreadable_content_as_csv_error() -> Iterator[None]:
    try:
        yield
    except UnicodeDecodeError as exc:
        raise MeterReadingsCsvError(
            f"File is not valid UTF-8 (byte {exc.start})"
        ) from exc
    except csv.Error as exc:
        raise MeterReadingsCsvError(f"Malformed CSV: {exc}") from exc


def _require_headers(
    fieldnames: Iterable[str] | None,
    required: Iterable[str],
) -> None:
    present = set(fieldnames or [])
    missing = [name for name in required if name not in present]
    if missing:
        raise MeterReadingsCsvError(
            f"Missing required columns: {', '.join(missing)}"
        )


def _is_blank_row(row: dict[str, str | None]) -> bool:
    return all(
        value is None or not str(value).strip()
        for value in row.values()
    )


def _parse_int(value: str | None, column: str, row_number: int) -> int:
    raw = (value or "").strip()
    if INTEGER_PATTERN.fullmatch(raw) is None:
        raise MeterReadingsCsvError(
            f"{column} '{value}' is not an integer",
            row_number=row_number,
        )
    return int(raw)


def _parse_datetime(
    value: str | None,
    formats: tuple[str, ...],
    row_number: int,
) -> datetime:
    raw = (value or "").strip()
    for fmt in formats:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    normalized = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        raise MeterReadingsCsvError(
            f"{METER_READING_DATE_TIME_FIELD} '{value}' is not a valid "
            "date-time",
            row_number=row_number,
        ) from None
    return to_naive_utc(parsed)


__all__ = [
    "MeterReadingsCsvError",
    "READINGS_HEADERS",
    "ACCOUNTS_HEADERS",
    "parse_meter_readings_csv",
    "read_meter_readings_file",
    "parse_accounts_csv",
    "read_accounts_file",
    "decode_upload",
]
