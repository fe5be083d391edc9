"""Logging helpers for the meter readings application.

Loggers write to ``<project root>/logs/<subdir>/<YYYYMMDD>_<prefix>.log`` and
optionally to the console. Two singletons are exposed:

* the application logger, used by use cases and adapters;
* the usage logger, recording one line per processed upload.
"""

from datetime import date
import logging
from pathlib import Path
from typing import Callable

from meter_readings.utils.utils import get_project_root


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggerBuilder:
    """Fluent builder for configured ``logging.Logger`` instances."""

    def __init__(self) -> None:
        self._name = "app"
        self._subdir = "app"
        self._prefix = "app_logs"
        self._console = True
        self._level = logging.INFO
        self._formatter_factory: Callable[[], logging.Formatter] = (
            LoggerBuilder._default_formatter
        )
        self._file_handler_factory: Callable[
            [Path, logging.Formatter], logging.Handler
        ] = LoggerBuilder._default_file_handler
        self._console_handler_factory: Callable[
            [logging.Formatter], logging.Handler
        ] = LoggerBuilder._default_console_handler
        self._logger: logging.Logger | None = None

    def name(self, name: str) -> "LoggerBuilder":
        """Set the logger name."""
        self._name = name
        return self

    def subdir(self, subdir: str) -> "LoggerBuilder":
        """Set the sub-directory of ``logs/`` receiving the log file."""
        self._subdir = subdir
        return self

    def prefix(self, prefix: str) -> "LoggerBuilder":
        """Set the log file name prefix."""
        self._prefix = prefix
        return self

    def console(self, enabled: bool) -> "LoggerBuilder":
        """Enable or disable the console handler."""
        self._console = enabled
        return self

    def level(self, level: int) -> "LoggerBuilder":
        """Set the logger level."""
        self._level = level
        return self

    def formatter(
        self,
        factory: Callable[[], logging.Formatter],
    ) -> "LoggerBuilder":
        """Set the formatter factory."""
        self._formatter_factory = factory
        return self

    def file_handler(
        self,
        factory: Callable[[Path, logging.Formatter], logging.Handler],
    ) -> "LoggerBuilder":
        """Set the file handler factory."""
        self._file_handler_factory = factory
        return self

    def console_handler(
        self,
        factory: Callable[[logging.Formatter], logging.Handler],
    ) -> "LoggerBuilder":
        """Set the console handler factory."""
        self._console_handler_factory = factory
        return self

    def build(self) -> logging.Logger:
        """Build the logger, or return the one already built.

        Returns:
            logging.Logger: Logger with file and optional console handlers.
        """
        if self._logger is not None:
            return self._logger

        logger = logging.getLogger(self._name)
        logger.setLevel(self._level)
        logger.propagate = False
        if not logger.handlers:
            fmt = self._formatter_factory()
            log_dir = get_project_root() / "logs" / self._subdir
            log_dir.mkdir(parents=True, exist_ok=True)
            log_path = log_dir / f"{self._today_stamp()}_{self._prefix}.log"
            logger.addHandler(self._file_handler_factory(log_path, fmt))
            if self._console:
                logger.addHandler(self._console_handler_factory(fmt))
        self._logger = logger
        return logger

    @staticmethod
    def _today_stamp() -> str:
        return date.today().strftime("%Y%m%d")

    @staticmethod
    def _default_formatter() -> logging.Formatter:
        return logging.Formatter(DEFAULT_FORMAT)

    @staticmethod
    def _default_file_handler(
        path: Path,
        fmt: logging.Formatter,
    ) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler

    @staticmethod
    def _default_console_handler(fmt: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler


class Logger:
    """Singleton wrapper delegating to a built ``logging.Logger``."""

    _instance: "Logger | None" = None
    _subdir = "app"
    _prefix = "app_logs"

    def __new__(cls, name: str = "app") -> "Logger":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.logger = (
                LoggerBuilder()
                .name(name)
                .subdir(cls._subdir)
                .prefix(cls._prefix)
                .build()
            )
            cls._instance = instance
        return cls._instance

    def debug(self, msg: str, *args, **kwargs) -> None:
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self.logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self.logger.critical(msg, *args, **kwargs)


class AppLogger(Logger):
    """Application-wide logger."""

    _instance: "AppLogger | None" = None


class UsageLogger(Logger):
    """Logger recording processed uploads."""

    _instance: "UsageLogger | None" = None
    _subdir = "usage"
    _prefix = "usage_logs"


def get_app_logger() -> AppLogger:
    """Return the application logger singleton."""
    return AppLogger("meter_readings")


def get_usage_logger() -> UsageLogger:
    """Return the usage logger singleton."""
    return UsageLogger("meter_readings.usage")


__all__ = [
    "LoggerBuilder",
    "Logger",
    "AppLogger",
    "UsageLogger",
    "get_app_logger",
    "get_usage_logger",
]
