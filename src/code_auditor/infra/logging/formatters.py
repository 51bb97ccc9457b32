from __future__ import annotations

import logging
from datetime import datetime, timezone

from pythonjsonlogger.json import JsonFormatter


# attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

# payload keys too large for a console line
_CONSOLE_SKIP = frozenset({"prompt", "raw_text"})


def event_fields(record: logging.LogRecord) -> dict[str, object]:
    """Return the keyword payload a ScanLogger call attached to ``record``."""
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}


class JSONFormatter(JsonFormatter):
    """One scan event per line.

    The event name is the log message; keyword payloads passed through
    ``extra`` become top-level fields next to ``ts`` and ``level``.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['ts'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds")
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['message'] = record.getMessage()


class HumanReadableFormatter(logging.Formatter):
    """Console formatter: ``time level event key=value ...``.

    Prompt and raw oracle text are left out; they stay in the JSONL log.
    """

    def __init__(self) -> None:
        super().__init__(fmt='%(asctime)s %(levelname)-7s %(message)s', datefmt='%H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = " ".join(
            f"{key}={value}"
            for key, value in event_fields(record).items()
            if key not in _CONSOLE_SKIP and key != "type" and value is not None
        )
        return f"{line} {pairs}" if pairs else line
