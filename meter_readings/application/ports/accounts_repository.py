"""Port for account lookups and account seeding."""

from typing import Protocol

from meter_readings.domain.models.accounts import AccountRecord


class AccountsRepositoryPort(Protocol):
    """Port exposing access to customer accounts."""

    async def account_exists(self, account_id: int) -> bool:
        """Return whether an account with this id is stored."""

    async def prepare_storage(self) -> None:
        """Ensure the account and reading tables exist."""

    async def save_accounts(self, accounts: list[AccountRecord]) -> int:
        """Insert missing accounts and update existing ones."""


__all__ = ["AccountsRepositoryPort"]
