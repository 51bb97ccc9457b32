from __future__ import annotations

import logging
import sys
from logging import Handler
from pathlib import Path
from typing import TextIO

from .formatters import JSONFormatter, HumanReadableFormatter


SCAN_LOG_FILENAME = "scans.jsonl"


def build_scan_log_handler(logs_dir: Path, level: int = logging.INFO) -> Handler:
    """Append scan events to ``<logs_dir>/scans.jsonl``.

    All scans share one file; each event carries its ``scan_id``.
    """
    logs_dir.mkdir(parents=True, exist_ok=True)
    h = logging.FileHandler(logs_dir / SCAN_LOG_FILENAME, encoding="utf-8", mode="a")
    h.setLevel(level)
    h.setFormatter(JSONFormatter())
    return h


def build_console_handler(level: int = logging.INFO, stream: TextIO | None = None) -> Handler:
    """Scan events on stderr, so stdout stays clean for ``--json`` output."""
    h = logging.StreamHandler(stream or sys.stderr)
    h.setLevel(level)
    h.setFormatter(HumanReadableFormatter())
    return h
