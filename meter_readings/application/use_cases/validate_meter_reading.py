"""Rule validator for a single meter reading entry.

Rules run in a fixed order and every failing rule contributes one message.
A rule that only makes sense once an earlier rule for the same field has
passed carries an explicit guard and passes silently otherwise:

* account existence is only looked up for a positive account id;
* the NNNNN format is only checked for a non-blank read value.

The recency rule consults the stored readings of the account once per entry.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from meter_readings.application.ports.accounts_repository import (
    AccountsRepositoryPort,
)
from meter_readings.application.ports.historical_lookup import (
    HistoricalLookupPort,
)
from meter_readings.application.ports.meter_readings_repository import (
    MeterReadingsRepositoryPort,
)
from meter_readings.domain.constants import (
    ACCOUNT_ID_FIELD,
    ACCOUNT_ID_NOT_FOUND_MESSAGE,
    METER_READ_VALUE_FIELD,
    METER_READING_DATE_TIME_FIELD,
)
from meter_readings.domain.models.readings import (
    MeterReadingEntry,
    ValidationFailure,
    ValidationOutcome,
)
from meter_readings.domain.services.validation import (
    check_account_id_positive,
    check_newer_than_history,
    check_read_value_format,
    check_read_value_present,
)


Rule = Callable[
    [MeterReadingEntry, HistoricalLookupPort],
    Awaitable[str | None],
]


@dataclass(frozen=True)
class RepositoryHistoricalLookup(HistoricalLookupPort):
    """HistoricalLookupPort backed by the account and reading repositories."""

    accounts_repository: AccountsRepositoryPort
    meter_readings_repository: MeterReadingsRepositoryPort

    async def account_exists(self, account_id: int) -> bool:
        return await self.accounts_repository.account_exists(account_id)

    async def fetch_readings_for_account(
        self,
        account_id: int,
    ) -> list[MeterReadingEntry]:
        return await self.meter_readings_repository.fetch_readings_for_account(
            account_id
        )


async def account_id_positive_rule(
    entry: MeterReadingEntry,
    lookup: HistoricalLookupPort,
) -> str | None:
    return check_account_id_positive(entry)


async def account_exists_rule(
    entry: MeterReadingEntry,
    lookup: HistoricalLookupPort,
) -> str | None:
    if check_account_id_positive(entry) is not None:
        return None
    if await lookup.account_exists(entry.account_id):
        return None
    return ACCOUNT_ID_NOT_FOUND_MESSAGE


async def newer_than_history_rule(
    entry: MeterReadingEntry,
    lookup: HistoricalLookupPort,
) -> str | None:
    history = await lookup.fetch_readings_for_account(entry.account_id)
    return check_newer_than_history(entry, history)


async def read_value_present_rule(
    entry: MeterReadingEntry,
    lookup: HistoricalLookupPort,
) -> str | None:
    return check_read_value_present(entry)


async def read_value_format_rule(
    entry: MeterReadingEntry,
    lookup: HistoricalLookupPort,
) -> str | None:
    if check_read_value_present(entry) is not None:
        return None
    return check_read_value_format(entry)


DEFAULT_RULES: tuple[tuple[str, Rule], ...] = (
    (ACCOUNT_ID_FIELD, account_id_positive_rule),
    (ACCOUNT_ID_FIELD, account_exists_rule),
    (METER_READING_DATE_TIME_FIELD, newer_than_history_rule),
    (METER_READ_VALUE_FIELD, read_value_present_rule),
    (METER_READ_VALUE_FIELD, read_value_format_rule),
)


class MeterReadingEntryValidator:
    """Validate meter reading entries against business and history rules.

    The validator holds no state between calls: validating the same entry
    against unchanged storage always yields the same outcome.
    """

    def __init__(
        self,
        lookup: HistoricalLookupPort,
        rules: tuple[tuple[str, Rule], ...] = DEFAULT_RULES,
    ) -> None:
        """Initialize the validator.

        Args:
            lookup: Port used by rules that need stored accounts or readings.
            rules: Ordered (field, rule) pairs to evaluate.
        """
        self._lookup = lookup
        self._rules = rules

    @classmethod
    def from_repositories(
        cls,
        accounts_repository: AccountsRepositoryPort,
        meter_readings_repository: MeterReadingsRepositoryPort,
    ) -> "MeterReadingEntryValidator":
        """Build a validator reading from the two repositories."""
        return cls(
            RepositoryHistoricalLookup(
                accounts_repository=accounts_repository,
                meter_readings_repository=meter_readings_repository,
            )
        )

    async def validate(self, entry: MeterReadingEntry) -> ValidationOutcome:
        """Evaluate every rule against the entry.

        Args:
            entry: Candidate reading.

        Returns:
            ValidationOutcome: All failures across all fields, in rule order.
        """
        failures: list[ValidationFailure] = []
        for field, rule in self._rules:
            message = await rule(entry, self._lookup)
            if message is not None:
                failures.append(ValidationFailure(field=field, message=message))
        return ValidationOutcome(failures=tuple(failures))


__all__ = [
    "Rule",
    "DEFAULT_RULES",
    "RepositoryHistoricalLookup",
    "MeterReadingEntryValidator",
    "account_id_positive_rule",
    "account_exists_rule",
    "newer_than_history_rule",
    "read_value_present_rule",
    "read_value_format_rule",
]
