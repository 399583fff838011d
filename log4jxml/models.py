"""Decoded log record and filter parameter dataclasses."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class LevelFilter(Enum):
    """Severity selector. Values match the legacy integer level codes."""

    ANY = 0
    ERROR = 1
    INFO = 2
    DEBUG = 3
    WARN = 4
    FATAL = 5

    @classmethod
    def parse(cls, value: "str | int | LevelFilter | None") -> "LevelFilter":
        """Accept a name ("error"), a legacy code (1) or None for ANY."""
        if value is None or value == "":
            return cls.ANY
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown level: {value!r}") from None


@dataclass(frozen=True)
class FilterParams:
    level: LevelFilter = LevelFilter.ANY
    date: datetime | None = None
    thread: str = ""
    message: str = ""
    logger: str = ""


@dataclass(frozen=True)
class LogRecord:
    sequence: int
    source_path: str
    level: str
    thread: str
    logger: str
    timestamp: datetime
    message: str = ""
    delta_seconds: float | None = None
    throwable: str | None = None
    class_name: str | None = None
    method: str | None = None
    file: str | None = None
    line: str | None = None
    user_name: str | None = None
    application: str | None = None
    machine_name: str | None = None
    host_name: str | None = None
    custom_fields: dict[str, str] = field(default_factory=dict)
