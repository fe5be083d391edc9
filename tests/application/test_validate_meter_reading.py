"""Tests for the MeterReadingEntryValidator."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from meter_readings.application.ports.historical_lookup import (
    HistoricalLookupPort,
)
from meter_readings.application.use_cases.validate_meter_reading import (
    MeterReadingEntryValidator,
    RepositoryHistoricalLookup,
)
from meter_readings.domain.models.readings import MeterReadingEntry


pytestmark = pytest.mark.anyio

NOW = datetime(2024, 5, 17, 9, 24)
ACCOUNT_ID = 1239


class FakeHistoricalLookup(HistoricalLookupPort):
    """In-memory lookup recording the calls made by the rules."""

    def __init__(
        self,
        existing_accounts: set[int] | None = None,
        readings: list[MeterReadingEntry] | None = None,
    ) -> None:
        self._existing_accounts = (
            {ACCOUNT_ID} if existing_accounts is None else existing_accounts
        )
        self._readings = readings or []
        self.exists_calls: list[int] = []
        self.readings_calls: list[int] = []

    async def account_exists(self, account_id: int) -> bool:
        self.exists_calls.append(account_id)
        return account_id in self._existing_accounts

    async def fetch_readings_for_account(
        self,
        account_id: int,
    ) -> list[MeterReadingEntry]:
        self.readings_calls.append(account_id)
        return [r for r in self._readings if r.account_id == account_id]


def _months_ago(months: int) -> datetime:
    return NOW - timedelta(days=30 * months)


@pytest.mark.parametrize("account_id", [0, -1, -99999])
async def test_fails_when_account_id_is_not_positive(account_id: int) -> None:
    """Only the positivity message is reported; existence is not looked up."""
    lookup = FakeHistoricalLookup()
    validator = MeterReadingEntryValidator(lookup)

    outcome = await validator.validate(
        MeterReadingEntry(account_id, NOW, "99999")
    )

    assert outcome.is_valid is False
    assert outcome.messages == ["AccountId must be greater than 0"]
    assert lookup.exists_calls == []


async def test_fails_when_account_does_not_exist() -> None:
    lookup = FakeHistoricalLookup(existing_accounts=set())
    validator = MeterReadingEntryValidator(lookup)

    outcome = await validator.validate(
        MeterReadingEntry(ACCOUNT_ID, NOW, "99999")
    )

    assert outcome.messages == ["AccountId does not exist"]
    assert lookup.exists_calls == [ACCOUNT_ID]


async def test_fails_when_newer_reading_exists() -> None:
    lookup = FakeHistoricalLookup(
        readings=[
            MeterReadingEntry(ACCOUNT_ID, _months_ago(1), "12347"),
            MeterReadingEntry(ACCOUNT_ID, _months_ago(2), "12346"),
        ]
    )
    validator = MeterReadingEntryValidator(lookup)

    outcome = await validator.validate(
        MeterReadingEntry(ACCOUNT_ID, _months_ago(3), "12345")
    )

    assert outcome.messages == [
        "Meter Reading DateTime must be newer than the latest meter reading"
    ]
    assert lookup.readings_calls == [ACCOUNT_ID]


async def test_succeeds_when_reading_is_newer() -> None:
    lookup = FakeHistoricalLookup(
        readings=[
            MeterReadingEntry(ACCOUNT_ID, _months_ago(3), "12347"),
            MeterReadingEntry(ACCOUNT_ID, _months_ago(2), "12346"),
        ]
    )
    validator = MeterReadingEntryValidator(lookup)

    outcome = await validator.validate(
        MeterReadingEntry(ACCOUNT_ID, _months_ago(1), "12345")
    )

    assert outcome.is_valid is True
    assert outcome.failures == ()


async def test_history_of_other_accounts_is_ignored() -> None:
    lookup = FakeHistoricalLookup(
        readings=[MeterReadingEntry(9999, NOW, "12347")]
    )
    validator = MeterReadingEntryValidator(lookup)

    outcome = await validator.validate(
        MeterReadingEntry(ACCOUNT_ID, _months_ago(1), "12345")
    )

    assert outcome.is_valid is True


@pytest.mark.parametrize("value", ["", " ", None])
async def test_fails_when_read_value_is_empty(value: str | None) -> None:
    validator = MeterReadingEntryValidator(FakeHistoricalLookup())

    outcome = await validator.validate(MeterReadingEntry(ACCOUNT_ID, NOW, value))

    assert outcome.messages == ["MeterReadValue cannot be empty"]


@pytest.mark.parametrize(
    "value",
    ["VOID", "0X765", "999999", "0", "1234", "-12345", "123456"],
)
async def test_fails_when_read_value_is_not_nnnnn(value: str) -> None:
    validator = MeterReadingEntryValidator(FakeHistoricalLookup())

    outcome = await validator.validate(MeterReadingEntry(ACCOUNT_ID, NOW, value))

    assert outcome.messages == ["MeterReadValue must be in the format NNNNN"]


@pytest.mark.parametrize(
    "value",
    ["12345", "01234", "00234", "00034", "00004", "00000", "99999"],
)
async def test_succeeds_when_read_value_is_nnnnn(value: str) -> None:
    validator = MeterReadingEntryValidator(FakeHistoricalLookup())

    outcome = await validator.validate(MeterReadingEntry(ACCOUNT_ID, NOW, value))

    assert outcome.is_valid is True


async def test_reports_failures_of_every_field_in_rule_order() -> None:
    lookup = FakeHistoricalLookup(
        existing_accounts=set(),
        readings=[MeterReadingEntry(ACCOUNT_ID, NOW, "12347")],
    )
    validator = MeterReadingEntryValidator(lookup)

    outcome = await validator.validate(
        MeterReadingEntry(ACCOUNT_ID, _months_ago(1), "VOID")
    )

    assert outcome.formatted_messages() == [
        "Property: AccountId, Message: AccountId does not exist",
        "Property: MeterReadingDateTime, Message: Meter Reading DateTime "
        "must be newer than the latest meter reading",
        "Property: MeterReadValue, Message: MeterReadValue must be in the "
        "format NNNNN",
    ]


async def test_validation_is_repeatable() -> None:
    lookup = FakeHistoricalLookup(
        readings=[MeterReadingEntry(ACCOUNT_ID, NOW, "12347")]
    )
    validator = MeterReadingEntryValidator(lookup)
    entry = MeterReadingEntry(ACCOUNT_ID, _months_ago(1), "1234")

    first = await validator.validate(entry)
    second = await validator.validate(entry)

    assert first == second
    assert len(first.failures) == 2


async def test_repository_lookup_delegates_to_both_repositories() -> None:
    """from_repositories should read accounts and readings separately."""
    history = [MeterReadingEntry(ACCOUNT_ID, NOW, "12347")]

    class _Accounts:
        async def account_exists(self, account_id: int) -> bool:
            return account_id == ACCOUNT_ID

    class _Readings:
        async def fetch_readings_for_account(self, account_id: int):
            return list(history)

        async def save_reading(self, entry) -> None:
            raise AssertionError("validation must not write")

    lookup = RepositoryHistoricalLookup(_Accounts(), _Readings())
    validator = MeterReadingEntryValidator.from_repositories(
        _Accounts(),
        _Readings(),
    )

    assert await lookup.account_exists(ACCOUNT_ID) is True
    assert await lookup.account_exists(1) is False
    assert await lookup.fetch_readings_for_account(ACCOUNT_ID) == history
    outcome = await validator.validate(
        MeterReadingEntry(ACCOUNT_ID, NOW + timedelta(days=1), "12348")
    )
    assert outcome.is_valid is True
