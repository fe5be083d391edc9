"""Tests for the SeedAccountsUseCase."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from meter_readings.application.use_cases.seed_accounts import (
    SeedAccountsUseCase,
)
from meter_readings.domain.models.accounts import AccountRecord


pytestmark = pytest.mark.anyio


class FakeAccountsRepository:
    """Accounts repository recording calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.saved: list[AccountRecord] = []

    async def account_exists(self, account_id: int) -> bool:
        return any(a.account_id == account_id for a in self.saved)

    async def prepare_storage(self) -> None:
        self.calls.append("prepare_storage")

    async def save_accounts(self, accounts: list[AccountRecord]) -> int:
        self.calls.append("save_accounts")
        self.saved.extend(accounts)
        return len(accounts)


async def test_run_prepares_storage_then_saves_sorted_accounts() -> None:
    repository = FakeAccountsRepository()
    use_case = SeedAccountsUseCase(repository, logger=MagicMock())

    result = await use_case.run(
        [
            AccountRecord(2344, "Tommy", "Test"),
            AccountRecord(1234, "Freya", "Test"),
        ]
    )

    assert repository.calls == ["prepare_storage", "save_accounts"]
    assert [a.account_id for a in repository.saved] == [1234, 2344]
    assert result.source_count == 2
    assert result.saved_count == 2


async def test_run_filters_non_positive_ids_with_warning() -> None:
    repository = FakeAccountsRepository()
    logger = MagicMock()
    use_case = SeedAccountsUseCase(repository, logger=logger)

    result = await use_case.run(
        [
            AccountRecord(0, "Zero", "Id"),
            AccountRecord(-4, "Negative", "Id"),
            AccountRecord(2233, "Barry", "Test"),
        ]
    )

    assert result.source_count == 3
    assert result.saved_count == 1
    logger.warning.assert_called_once_with(
        "Filtered out 2 accounts with invalid ids"
    )


async def test_run_with_no_records_still_prepares_storage() -> None:
    repository = FakeAccountsRepository()
    use_case = SeedAccountsUseCase(repository, logger=MagicMock())

    result = await use_case.run([])

    assert repository.calls == ["prepare_storage", "save_accounts"]
    assert result.saved_count == 0
