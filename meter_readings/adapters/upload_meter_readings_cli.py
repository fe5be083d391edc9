"""CLI adapter to upload a meter readings CSV into the database.

This module wires the ProcessMeterReadingsUseCase to the concrete database
adapter, reads the CSV given as argument (or configured through
METER_READINGS_FILE) and prints one line per rejected reading followed by a
summary.
"""

import asyncio
from pathlib import Path
import sys

from meter_readings.domain.models.readings import (
    MeterReadingEntry,
    MeterReadingResponse,
)
from meter_readings.infrastructure.container import (
    build_accounts_repository,
    build_database_adapter,
    build_process_meter_readings_use_case,
)
from meter_readings.infrastructure.csv_files import (
    MeterReadingsCsvError,
    read_meter_readings_file,
)
from meter_readings.infrastructure.db import dispose_engine
from meter_readings.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from meter_readings.infrastructure.settings import MeterReadingsSettings


async def _process(entries: list[MeterReadingEntry]) -> MeterReadingResponse:
    """Ensure storage exists and run the batch against the database."""
    db_adapter = build_database_adapter()
    try:
        await build_accounts_repository(db_adapter).prepare_storage()
        use_case = build_process_meter_readings_use_case(db_adapter)
        return await use_case.execute(entries)
    finally:
        await dispose_engine()


def _print_response(response: MeterReadingResponse) -> None:
    for error in response.errors:
        print(
            f"FAILURE: {error.entry}. "
            f"ERRORS: {'|'.join(error.validation_errors)}"
        )
    print(
        "\nFinished processing meter readings. "
        f"SuccessCount: {response.success_count}, "
        f"FailureCount: {response.failure_count}."
    )


def main(argv: list[str] | None = None) -> int:
    """Upload a meter readings CSV and print the outcome.

    Args:
        argv: Command line arguments; the first one is the CSV path.

    Returns:
        int: 0 when the batch was processed, 1 otherwise.
    """
    args = sys.argv[1:] if argv is None else argv
    logger = get_app_logger()
    settings = MeterReadingsSettings.from_env()
    path = Path(args[0]) if args else settings.readings_file
    if path is None:
        logger.warning(
            "No meter readings file given. Pass a path or set "
            "METER_READINGS_FILE."
        )
        return 1

    print(f"Processing csv file '{path}'")
    try:
        entries = read_meter_readings_file(path, settings.datetime_formats)
    except (MeterReadingsCsvError, OSError) as exc:
        logger.error(f"Cannot read meter readings from {path}: {exc}")
        return 1

    response = asyncio.run(_process(entries))
    _print_response(response)
    get_usage_logger().info(
        f"upload file={path.name} rows={len(entries)} "
        f"success={response.success_count} "
        f"failures={response.failure_count}"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
