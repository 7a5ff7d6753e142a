"""Structured JSON logging configuration.

Every record is emitted as one JSON object on stdout. Context passed through
``extra={...}`` (tenant_id, item_id, request_id and so on) lands as top-level
keys next to the fixed fields below.
"""

import logging
import sys
from typing import Any, TextIO

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "vocab-keep"

# Third-party loggers and the level they are held at
QUIET_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "alembic": logging.INFO,
}


class JsonLogFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with a stable set of top-level fields."""

    def add_fields(self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["service"] = SERVICE_NAME
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["function"] = record.funcName
        log_record["event"] = record.getMessage()

        # "event" replaces the message; asctime duplicates timestamp
        for key in ("message", "asctime"):
            log_record.pop(key, None)


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install the JSON handler on the root logger, replacing existing handlers."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        JsonLogFormatter("%(timestamp)s %(level)s %(logger)s", datefmt="%Y-%m-%dT%H:%M:%S%z")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
