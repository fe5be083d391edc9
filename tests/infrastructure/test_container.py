"""Tests for the composition root."""

from meter_readings.application.use_cases.process_meter_readings import (
    ProcessMeterReadingsUseCase,
)
from meter_readings.application.use_cases.seed_accounts import (
    SeedAccountsUseCase,
)
from meter_readings.application.use_cases.validate_meter_reading import (
    RepositoryHistoricalLookup,
)
from meter_readings.infrastructure import container
from meter_readings.infrastructure.accounts_repository import (
    SqlAlchemyAccountsRepository,
)
from meter_readings.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from meter_readings.infrastructure.meter_readings_repository import (
    SqlAlchemyMeterReadingsRepository,
)


class _FakeDbPort:
    def get_engine(self):
        return "engine"


def test_build_database_adapter():
    assert isinstance(
        container.build_database_adapter(),
        SqlAlchemyDatabaseEngineAdapter,
    )


def test_build_repositories_use_given_port():
    db_port = _FakeDbPort()

    accounts = container.build_accounts_repository(db_port)
    readings = container.build_meter_readings_repository(db_port)

    assert isinstance(accounts, SqlAlchemyAccountsRepository)
    assert isinstance(readings, SqlAlchemyMeterReadingsRepository)
    assert accounts._db_port is db_port
    assert readings._db_port is db_port


def test_build_process_use_case_shares_readings_repository(monkeypatch):
    sentinel_logger = object()
    monkeypatch.setattr(container, "get_app_logger", lambda: sentinel_logger)

    use_case = container.build_process_meter_readings_use_case(_FakeDbPort())

    assert isinstance(use_case, ProcessMeterReadingsUseCase)
    assert use_case._logger is sentinel_logger
    lookup = use_case._validator._lookup
    assert isinstance(lookup, RepositoryHistoricalLookup)
    assert lookup.meter_readings_repository is use_case._repository


def test_build_seed_accounts_use_case(monkeypatch):
    sentinel_logger = object()
    monkeypatch.setattr(container, "get_app_logger", lambda: sentinel_logger)

    use_case = container.build_seed_accounts_use_case(_FakeDbPort())

    assert isinstance(use_case, SeedAccountsUseCase)
    assert use_case._logger is sentinel_logger
