"""Use case processing a batch of meter reading entries.

Entries are handled one at a time, in input order:

* an entry failing validation is reported with its field-prefixed messages;
* a valid entry that is structurally identical to another entry of the same
  batch is reported as a duplicate (every member of the group, none saved);
* any other entry is saved through the meter readings repository.

An unexpected fault while handling one entry is logged and the batch moves
on. Such an entry is neither saved nor reported, and because the success
count is derived as ``len(entries) - len(errors)`` it is counted as a success.
"""

from collections.abc import Iterable

from meter_readings.application.ports.meter_readings_repository import (
    MeterReadingsRepositoryPort,
)
from meter_readings.application.use_cases.validate_meter_reading import (
    MeterReadingEntryValidator,
)
from meter_readings.domain.constants import DUPLICATE_ENTRY_MESSAGE
from meter_readings.domain.models.readings import (
    MeterReadingEntry,
    MeterReadingError,
    MeterReadingResponse,
)
from meter_readings.domain.services.duplicates import find_duplicate_keys
from meter_readings.infrastructure.logging.logger import get_app_logger


class ProcessMeterReadingsUseCase:
    """Validate, deduplicate and persist a batch of meter readings."""

    def __init__(
        self,
        validator: MeterReadingEntryValidator,
        meter_readings_repository: MeterReadingsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            validator: Rule validator applied to each entry.
            meter_readings_repository: Store receiving accepted entries.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._validator = validator
        self._repository = meter_readings_repository
        self._logger = logger or get_app_logger()

    async def execute(
        self,
        entries: Iterable[MeterReadingEntry],
    ) -> MeterReadingResponse:
        """Process every entry of the batch.

        Args:
            entries: Candidate readings in upload order.

        Returns:
            MeterReadingResponse: Success count and rejected entries.
        """
        batch = list(entries)
        duplicate_keys = find_duplicate_keys(batch)
        errors: list[MeterReadingError] = []
        fault_count = 0

        for entry in batch:
            try:
                error = await self._process_entry(entry, duplicate_keys)
            except Exception:
                fault_count += 1
                self._logger.error(
                    "Unexpected error occurred processing meter reading: "
                    f"{entry}",
                    exc_info=True,
                )
                continue
            if error is not None:
                errors.append(error)

        response = MeterReadingResponse(
            success_count=len(batch) - len(errors),
            errors=tuple(errors),
        )
        self._logger.info(
            f"Processed {len(batch)} meter readings: "
            f"{response.success_count} succeeded, "
            f"{response.failure_count} rejected"
        )
        if fault_count:
            self._logger.warning(
                f"{fault_count} meter readings failed unexpectedly and are "
                "missing from the response"
            )
        return response

    async def _process_entry(
        self,
        entry: MeterReadingEntry,
        duplicate_keys: frozenset,
    ) -> MeterReadingError | None:
        """Validate and save one entry.

        Args:
            entry: Entry to handle.
            duplicate_keys: Keys shared by several entries of the batch.

        Returns:
            MeterReadingError | None: The rejection, or None once saved.
        """
        outcome = await self._validator.validate(entry)
        if not outcome.is_valid:
            return MeterReadingError(
                entry=entry,
                validation_errors=tuple(outcome.formatted_messages()),
            )
        if entry.key in duplicate_keys:
            return MeterReadingError(
                entry=entry,
                validation_errors=(DUPLICATE_ENTRY_MESSAGE,),
            )
        await self._repository.save_reading(entry)
        return None


__all__ = ["ProcessMeterReadingsUseCase"]
