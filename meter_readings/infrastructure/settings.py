"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import dotenv

from meter_readings.infrastructure.logging.logger import get_app_logger
from meter_readings.utils.utils import get_project_root


DEFAULT_DATETIME_FORMATS: tuple[str, ...] = ("%d/%m/%Y %H:%M",)


@dataclass(frozen=True)
class MeterReadingsSettings:
    """Settings for locating upload files and parsing them.

    Attributes:
        readings_file: Optional path to the meter readings CSV to upload.
        accounts_file: Optional path to the accounts CSV used for seeding.
        datetime_formats: strptime formats tried for MeterReadingDateTime.
    """

    readings_file: Optional[Path] = None
    accounts_file: Optional[Path] = None
    datetime_formats: tuple[str, ...] = DEFAULT_DATETIME_FORMATS

    @classmethod
    def from_env(cls) -> "MeterReadingsSettings":
        """Build settings from environment variables.

        Returns:
            MeterReadingsSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        raw_readings = os.getenv("METER_READINGS_FILE")
        if raw_readings:
            readings_file = cls._normalize_path(raw_readings, logger=logger)
        else:
            readings_file = cls._default_readings_file(logger=logger)
        raw_accounts = os.getenv("ACCOUNTS_FILE")
        accounts_file = (
            cls._normalize_path(raw_accounts, logger=logger)
            if raw_accounts
            else None
        )
        raw_formats = os.getenv("METER_READINGS_DATETIME_FORMATS", "")
        formats = tuple(
            fmt.strip() for fmt in raw_formats.split(",") if fmt.strip()
        )
        return cls(
            readings_file=readings_file,
            accounts_file=accounts_file,
            datetime_formats=formats or DEFAULT_DATETIME_FORMATS,
        )

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize a file path or file:// URI.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Absolute filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"File does not exist at {path}")
        return path

    @staticmethod
    def _default_readings_file(logger) -> Path | None:
        """Return a default readings CSV when one is available.

        Args:
            logger: Logger used for warnings.

        Returns:
            Path | None: Default path if a single CSV is found in data/.
        """
        data_dir = get_project_root() / "data"
        if not data_dir.exists():
            return None
        matches = sorted(data_dir.glob("*.csv"))
        if len(matches) == 1:
            return matches[0].resolve()
        if len(matches) > 1:
            logger.warning(
                "Multiple .csv files found in data/. "
                "Set METER_READINGS_FILE to choose one."
            )
        return None


__all__ = ["MeterReadingsSettings", "DEFAULT_DATETIME_FORMATS"]
