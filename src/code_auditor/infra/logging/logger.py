from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from .handlers import build_console_handler, build_scan_log_handler


class ScanLogger(Resource):
    """Structured logger for the scan pipeline.

    Provides convenience methods for logging scan events with keyword
    payloads. Writes JSON lines to ``<logs_dir>/scans.jsonl`` and
    optionally human-readable lines to the console.
    """

    def init(
        self,
        *,
        logs_dir: Path | None = None,
        logger_name: str = "code_auditor",
        console_output: bool = False,
        json_file: bool = True,
        level: str = "INFO",
    ) -> "ScanLogger":
        """Initialize handlers.

        Args:
            logs_dir: Directory for the JSONL log (required when json_file is True)
            logger_name: Logger name
            console_output: Whether to enable console output
            json_file: Whether to append JSON lines to the scan log
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = logging._nameToLevel.get(level.upper(), logging.INFO)
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers: list[logging.Handler] = []

        if json_file and logs_dir is not None:
            file_handler = build_scan_log_handler(logs_dir, level=numeric_level)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_console_handler(level=numeric_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        if not self._handlers:
            self._logger.addHandler(logging.NullHandler())

        return self

    def shutdown(self, resource: "ScanLogger") -> None:
        """Flush and close all handlers so the log file is released."""
        for handler in self._handlers:
            handler.flush()
            handler.close()
        self._logger.handlers.clear()

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message with optional extra fields."""
        if kwargs:
            self._logger.debug(message, extra=kwargs)
        else:
            self._logger.debug(message)

    def info(self, message: str, **kwargs) -> None:
        """Log info message with optional extra fields."""
        if kwargs:
            self._logger.info(message, extra=kwargs)
        else:
            self._logger.info(message)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message with optional extra fields."""
        if kwargs:
            self._logger.warning(message, extra=kwargs)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        """Log error message with optional extra fields and exception info."""
        if kwargs:
            self._logger.error(message, extra=kwargs, exc_info=exc_info)
        else:
            self._logger.error(message, exc_info=exc_info)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback and optional extra fields."""
        if kwargs:
            self._logger.exception(message, extra=kwargs)
        else:
            self._logger.exception(message)
