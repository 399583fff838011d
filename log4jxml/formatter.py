"""Output formatters — text, JSON (NDJSON), colorized (ANSI)."""

import json
from typing import Callable

from log4jxml.models import LogRecord

# ANSI color codes
COLORS = {
    "DEBUG": "\033[36m",   # cyan
    "INFO": "\033[32m",    # green
    "WARN": "\033[33m",    # yellow
    "ERROR": "\033[31m",   # red
    "FATAL": "\033[35m",   # magenta
}
RESET = "\033[0m"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def _timestamp(record: LogRecord) -> str:
    return record.timestamp.strftime(TIMESTAMP_FORMAT)[:-3]


def format_text(record: LogRecord) -> str:
    """One line per record; the throwable, if any, follows on its own lines."""
    line = f"{_timestamp(record)} [{record.thread}] {record.level} {record.logger} - {record.message}"
    if record.throwable:
        line += "\n" + record.throwable
    return line


def format_json(record: LogRecord) -> str:
    """Return NDJSON — one JSON object per line, compatible with jq."""
    return json.dumps({
        "sequence": record.sequence,
        "source_path": record.source_path,
        "timestamp": record.timestamp.isoformat(),
        "delta_seconds": record.delta_seconds,
        "level": record.level,
        "thread": record.thread,
        "logger": record.logger,
        "message": record.message,
        "throwable": record.throwable,
        "class": record.class_name,
        "method": record.method,
        "file": record.file,
        "line": record.line,
        "user_name": record.user_name,
        "application": record.application,
        "machine_name": record.machine_name,
        "host_name": record.host_name,
        "custom_fields": record.custom_fields,
    })


def format_color(record: LogRecord) -> str:
    """Return the text line with an ANSI-colored level."""
    color = COLORS.get(record.level.upper(), "")
    line = (
        f"{_timestamp(record)} [{record.thread}] {color}{record.level}{RESET} "
        f"{record.logger} - {record.message}"
    )
    if record.throwable:
        line += "\n" + record.throwable
    return line


def get_formatter(output_format: str = "text", color: bool = False) -> Callable[[LogRecord], str]:
    """Factory that returns the right formatter based on args."""
    if output_format == "json":
        return format_json
    if color:
        return format_color
    return format_text
