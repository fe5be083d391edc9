"""Use case for loading customer accounts into the readings database.

Readings can only be accepted for accounts that exist, so a deployment is
seeded from an accounts export before the first upload. The use case:

* drops records whose account id is not positive;
* ensures the storage tables exist;
* inserts the remaining records, updating names of known accounts.
"""

from dataclasses import dataclass

from meter_readings.application.ports.accounts_repository import (
    AccountsRepositoryPort,
)
from meter_readings.domain.models.accounts import AccountRecord
from meter_readings.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SeedAccountsResult:
    """Result of a seed_accounts run.

    Attributes:
        source_count: Number of account records read from the source.
        saved_count: Number of accounts inserted or updated.
    """

    source_count: int
    saved_count: int


class SeedAccountsUseCase:
    """Upsert the records of an accounts export into storage."""

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts_repository: Repository receiving the accounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = accounts_repository
        self._logger = logger or get_app_logger()

    async def run(self, records: list[AccountRecord]) -> SeedAccountsResult:
        """Execute the seeding job.

        Args:
            records: Account records from the source export.

        Returns:
            SeedAccountsResult: Summary of how many rows were processed.
        """
        accounts = self._filter_accounts(records)
        await self._repository.prepare_storage()
        saved_count = await self._repository.save_accounts(accounts)
        self._logger.info(f"Seeded {saved_count} accounts")
        return SeedAccountsResult(
            source_count=len(records),
            saved_count=saved_count,
        )

    def _filter_accounts(
        self,
        records: list[AccountRecord],
    ) -> list[AccountRecord]:
        """Filter out records with a non-positive id, sorted by id."""
        filtered = sorted(
            (record for record in records if record.account_id > 0),
            key=lambda record: record.account_id,
        )
        filtered_count = len(records) - len(filtered)
        if filtered_count:
            self._logger.warning(
                f"Filtered out {filtered_count} accounts with invalid ids"
            )
        return filtered


__all__ = ["SeedAccountsUseCase", "SeedAccountsResult"]
