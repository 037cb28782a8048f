"""
Logging setup for the field force API

Records are emitted as JSON through python-json-logger by default so they can
be shipped to a log collector as-is; ``LOG_FORMAT=text`` switches to plain
lines for local development.
"""
import logging
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from fieldforce.config import settings

ROOT_LOGGER = "fieldforce"
TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class FieldForceJsonFormatter(JsonFormatter):
    """Adds level, logger and module to every record."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["module"] = record.module


def setup_logger(level: Optional[str] = None, format_type: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel((level or settings.log_level).upper())
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if (format_type or settings.log_format) == "json":
        handler.setFormatter(FieldForceJsonFormatter("%(message)s"))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
