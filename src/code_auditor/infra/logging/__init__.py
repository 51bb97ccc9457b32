from __future__ import annotations

from .logger import ScanLogger
from .handlers import SCAN_LOG_FILENAME, build_scan_log_handler, build_console_handler
from .formatters import JSONFormatter, HumanReadableFormatter, event_fields

__all__ = [
    "ScanLogger",
    "SCAN_LOG_FILENAME",
    "build_scan_log_handler",
    "build_console_handler",
    "JSONFormatter",
    "HumanReadableFormatter",
    "event_fields",
]
