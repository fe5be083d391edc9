"""SQLAlchemy-backed repository for customer accounts."""

from sqlalchemy import text

from meter_readings.application.ports.accounts_repository import (
    AccountsRepositoryPort,
)
from meter_readings.application.ports.database import DatabaseEnginePort
from meter_readings.domain.models.accounts import AccountRecord
from meter_readings.infrastructure.schema import ensure_schema


SELECT_ACCOUNT_SQL = text(
    """
    SELECT 1
    FROM accounts
    WHERE account_id = :account_id
    """
)

UPDATE_ACCOUNT_SQL = text(
    """
    UPDATE accounts
    SET first_name = :first_name, last_name = :last_name
    WHERE account_id = :account_id
    """
)

INSERT_ACCOUNT_SQL = text(
    """
    INSERT INTO accounts (account_id, first_name, last_name)
    VALUES (:account_id, :first_name, :last_name)
    """
)


class SqlAlchemyAccountsRepository(AccountsRepositoryPort):
    """Repository backed by SQLAlchemy for customer accounts."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the async engine.
        """
        self._db_port = db_port

    async def account_exists(self, account_id: int) -> bool:
        """Return whether the account is stored."""
        engine = self._db_port.get_engine()
        async with engine.connect() as conn:
            result = await conn.execute(
                SELECT_ACCOUNT_SQL,
                {"account_id": account_id},
            )
            row = result.first()
        return row is not None

    async def prepare_storage(self) -> None:
        """Ensure the accounts and meter_readings tables exist."""
        await ensure_schema(self._db_port.get_engine())

    async def save_accounts(self, accounts: list[AccountRecord]) -> int:
        """Insert missing accounts and update names of existing ones.

        Args:
            accounts: Account records to write.

        Returns:
            int: Number of account records written.
        """
        engine = self._db_port.get_engine()
        async with engine.begin() as conn:
            for account in accounts:
                params = {
                    "account_id": account.account_id,
                    "first_name": account.first_name,
                    "last_name": account.last_name,
                }
                result = await conn.execute(UPDATE_ACCOUNT_SQL, params)
                if result.rowcount == 0:
                    await conn.execute(INSERT_ACCOUNT_SQL, params)
        return len(accounts)


__all__ = [
    "SqlAlchemyAccountsRepository",
    "SELECT_ACCOUNT_SQL",
    "UPDATE_ACCOUNT_SQL",
    "INSERT_ACCOUNT_SQL",
]
