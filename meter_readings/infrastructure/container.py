"""Composition root for wiring infrastructure adapters."""

from meter_readings.application.ports.accounts_repository import (
    AccountsRepositoryPort,
)
from meter_readings.application.ports.database import DatabaseEnginePort
from meter_readings.application.ports.meter_readings_repository import (
    MeterReadingsRepositoryPort,
)
from meter_readings.application.use_cases.process_meter_readings import (
    ProcessMeterReadingsUseCase,
)
from meter_readings.application.use_cases.seed_accounts import (
    SeedAccountsUseCase,
)
from meter_readings.application.use_cases.validate_meter_reading import (
    MeterReadingEntryValidator,
)
from meter_readings.infrastructure.accounts_repository import (
    SqlAlchemyAccountsRepository,
)
from meter_readings.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from meter_readings.infrastructure.logging.logger import get_app_logger
from meter_readings.infrastructure.meter_readings_repository import (
    SqlAlchemyMeterReadingsRepository,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_accounts_repository(
    db_port: DatabaseEnginePort | None = None,
) -> AccountsRepositoryPort:
    """Return the accounts repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAccountsRepository(resolved_db)


def build_meter_readings_repository(
    db_port: DatabaseEnginePort | None = None,
) -> MeterReadingsRepositoryPort:
    """Return the meter readings repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyMeterReadingsRepository(resolved_db)


def build_process_meter_readings_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> ProcessMeterReadingsUseCase:
    """Return the batch processor wired to the SQL repositories."""
    resolved_db = db_port or build_database_adapter()
    readings_repository = build_meter_readings_repository(resolved_db)
    validator = MeterReadingEntryValidator.from_repositories(
        accounts_repository=build_accounts_repository(resolved_db),
        meter_readings_repository=readings_repository,
    )
    return ProcessMeterReadingsUseCase(
        validator=validator,
        meter_readings_repository=readings_repository,
        logger=get_app_logger(),
    )


def build_seed_accounts_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> SeedAccountsUseCase:
    """Return the account seeding use case."""
    return SeedAccountsUseCase(
        accounts_repository=build_accounts_repository(db_port),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_accounts_repository",
    "build_meter_readings_repository",
    "build_process_meter_readings_use_case",
    "build_seed_accounts_use_case",
]
