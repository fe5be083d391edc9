"""CLI adapter to load customer accounts into the readings database."""

import asyncio
from pathlib import Path
import sys

from meter_readings.application.use_cases.seed_accounts import (
    SeedAccountsResult,
)
from meter_readings.domain.models.accounts import AccountRecord
from meter_readings.infrastructure.container import (
    build_seed_accounts_use_case,
)
from meter_readings.infrastructure.csv_files import (
    MeterReadingsCsvError,
    read_accounts_file,
)
from meter_readings.infrastructure.db import dispose_engine
from meter_readings.infrastructure.logging.logger import get_app_logger
from meter_readings.infrastructure.settings import MeterReadingsSettings


async def _seed(records: list[AccountRecord]) -> SeedAccountsResult:
    try:
        return await build_seed_accounts_use_case().run(records)
    finally:
        await dispose_engine()


def main(argv: list[str] | None = None) -> int:
    """Run the account seeding use case.

    Args:
        argv: Command line arguments; the first one is the accounts CSV.

    Returns:
        int: 0 on success, 1 when no readable accounts file is available.
    """
    args = sys.argv[1:] if argv is None else argv
    logger = get_app_logger()
    path = (
        Path(args[0]) if args else MeterReadingsSettings.from_env().accounts_file
    )
    if path is None:
        logger.warning("No accounts file given. Pass a path or set ACCOUNTS_FILE.")
        return 1
    try:
        records = read_accounts_file(path)
    except (MeterReadingsCsvError, OSError) as exc:
        logger.error(f"Cannot read accounts from {path}: {exc}")
        return 1

    result = asyncio.run(_seed(records))

    print(
        f"Seeded {result.saved_count} of {result.source_count} accounts "
        f"into the meter readings database."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
