from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any, TextIO

from bioimage_metadata.settings import Settings, settings

PACKAGE_LOGGER = "bioimage_metadata"

# Author records carry personal addresses.
DEFAULT_REDACT_FIELDS = frozenset({"email"})
REDACTED = "[REDACTED]"

_RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def parse_redact_fields(raw: str | None) -> set[str]:
    fields = {field.strip().lower() for field in (raw or "").split(",") if field.strip()}
    return set(DEFAULT_REDACT_FIELDS) | fields


def configure_logging(
    *,
    level: str,
    log_format: str,
    redact_fields: set[str],
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a single handler to the package logger.

    Only the package logger is touched; the host application's root logger
    keeps its own configuration.
    """
    formatter_class = JsonLogFormatter if log_format.strip().lower() == "json" else ConsoleLogFormatter
    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(formatter_class(redact_fields=redact_fields))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(level.strip().upper())
    package_logger.propagate = False
    package_logger.addHandler(handler)
    return package_logger


def configure_from_settings(current: Settings = settings, *, stream: TextIO | None = None) -> logging.Logger:
    return configure_logging(
        level=current.log_level,
        log_format=current.log_format,
        redact_fields=parse_redact_fields(current.log_redact_fields),
        stream=stream,
    )


class _RedactingFormatter(logging.Formatter):
    """Base for formatters that render ``structured_log`` extras."""

    converter = time.gmtime
    timestamp_format = "%Y-%m-%d %H:%M:%SZ"

    def __init__(self, *, redact_fields: set[str]) -> None:
        super().__init__()
        self._redact_fields = frozenset(field.lower() for field in redact_fields)

    def event_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: self._redact(key, value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
        }

    def timestamp(self, record: logging.LogRecord) -> str:
        return self.formatTime(record, self.timestamp_format)

    def _redact(self, key: str, value: Any) -> Any:
        if key.lower() in self._redact_fields:
            return REDACTED
        if isinstance(value, dict):
            return {nested_key: self._redact(nested_key, item) for nested_key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._redact(key, item) for item in value]
        return value


class JsonLogFormatter(_RedactingFormatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.timestamp(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
            **self.event_fields(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class ConsoleLogFormatter(_RedactingFormatter):
    """One line per event: ``timestamp LEVEL logger event key=value ...``."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [self.timestamp(record), record.levelname, record.name, record.getMessage()]
        fields = self.event_fields(record)
        parts.extend(f"{key}={fields[key]}" for key in sorted(fields))
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
