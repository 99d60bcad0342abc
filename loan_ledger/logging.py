"""Logging setup for loan-ledger.

Records logged by the store carry the affected record's id and, for status
changes, the old and new status as ``extra`` attributes. The JSON formatter
lifts those attributes into the emitted object so status transitions can be
filtered without parsing the message.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

FORMAT_TYPES = ("standard", "json")

# Attributes the store attaches through ``extra=``
RECORD_FIELDS = ("loan_id", "investor_id", "old_status", "new_status")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Route log output to stdout.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        "standard" for a single human-readable line, "json" for one JSON
        object per record.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("loan_ledger").setLevel(log_level)
    # Faker logs locale loading at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including ledger record context."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in RECORD_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
