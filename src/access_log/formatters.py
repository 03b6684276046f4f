"""Formatters for the file and console sinks."""

from __future__ import annotations

import datetime
import json
import logging
import re
from typing import Any, Dict, Iterator, Tuple

# tracing-style names so the file output matches what the SIEM parsers expect
_LEVEL_NAMES = {logging.WARNING: "WARN"}

_NEEDS_QUOTES = re.compile(r'[\s"=]')


def _timestamp(record: logging.LogRecord) -> str:
    return (
        datetime.datetime.fromtimestamp(record.created, datetime.timezone.utc)
        .isoformat()
        .replace("+00:00", "Z")
    )


def _level_name(record: logging.LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelno, record.levelname)


def _present_fields(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    """Yield the event fields that carry a value; empty ones are dropped."""
    for key, value in getattr(record, "fields", {}).items():
        if value is None or value == "":
            continue
        yield key, value


class FlatJsonFormatter(logging.Formatter):
    """One flat JSON object per event, fields merged into the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _timestamp(record),
            "level": _level_name(record),
            "target": getattr(record, "target", record.name),
        }
        message = record.getMessage()
        if message:
            payload["message"] = message
        for key, value in _present_fields(record):
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Single-line ``key=value`` rendering for humans watching stdout."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            _timestamp(record),
            f"{_level_name(record):>5}",
            f"{getattr(record, 'target', record.name)}:",
        ]
        message = record.getMessage()
        if message:
            parts.append(_render(message))
        parts.extend(f"{key}={_render(value)}" for key, value in _present_fields(record))
        return " ".join(parts)


def _render(value: Any) -> str:
    if not isinstance(value, str):
        return str(value)
    if _NEEDS_QUOTES.search(value) or not value.isprintable():
        return json.dumps(value, ensure_ascii=False)
    return value
