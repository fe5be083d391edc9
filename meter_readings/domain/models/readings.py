"""Domain models for meter reading batches."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


EntryKey = tuple[int, datetime, str | None]


def to_naive_utc(value: datetime) -> datetime:
    """Return ``value`` as a naive UTC date-time; naive values are kept."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class MeterReadingEntry:
    """One candidate meter reading submitted for processing.

    Equality is structural over all three fields.
    Timezone-aware date-times are stored as naive UTC.
    """

    account_id: int
    meter_reading_date_time: datetime
    meter_read_value: str | None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "meter_reading_date_time",
            to_naive_utc(self.meter_reading_date_time),
        )

    @property
    def key(self) -> EntryKey:
        """Return the composite key used for duplicate grouping."""
        return (
            self.account_id,
            self.meter_reading_date_time,
            self.meter_read_value,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation of the entry."""
        return {
            "accountId": self.account_id,
            "meterReadingDateTime": self.meter_reading_date_time.isoformat(),
            "meterReadValue": self.meter_read_value,
        }


@dataclass(frozen=True)
class ValidationFailure:
    """A single failed rule attributed to a reported field."""

    field: str
    message: str

    def format(self) -> str:
        """Return the message prefixed with its field name."""
        return f"Property: {self.field}, Message: {self.message}"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one entry.

    Attributes:
        failures: Failed rules in evaluation order; empty when valid.
    """

    failures: tuple[ValidationFailure, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.failures

    @property
    def messages(self) -> list[str]:
        """Return the raw failure messages in rule order."""
        return [failure.message for failure in self.failures]

    def formatted_messages(self) -> list[str]:
        """Return one field-prefixed string per failed rule."""
        return [failure.format() for failure in self.failures]


@dataclass(frozen=True)
class MeterReadingError:
    """Pairs a rejected entry with the reasons it was rejected."""

    entry: MeterReadingEntry
    validation_errors: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry": self.entry.to_dict(),
            "validationErrors": list(self.validation_errors),
        }


@dataclass(frozen=True)
class MeterReadingResponse:
    """Outcome report for a processed batch.

    Attributes:
        success_count: Number of entries minus the number of errors.
        errors: Rejected entries in input order.
    """

    success_count: int
    errors: tuple[MeterReadingError, ...] = field(default_factory=tuple)

    @property
    def failure_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation of the report."""
        return {
            "successCount": self.success_count,
            "errors": [error.to_dict() for error in self.errors],
        }


__all__ = [
    "EntryKey",
    "to_naive_utc",
    "MeterReadingEntry",
    "ValidationFailure",
    "ValidationOutcome",
    "MeterReadingError",
    "MeterReadingResponse",
]
