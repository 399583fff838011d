"""Filter predicates for log records — level, date floor, thread, message, logger."""

from datetime import datetime

from log4jxml.models import FilterParams, LevelFilter, LogRecord


def filter_by_level(record: LogRecord, level: LevelFilter) -> bool:
    """True if the record's level equals the selected severity (case-insensitive).

    LevelFilter.ANY accepts every level.
    """
    if level is LevelFilter.ANY:
        return True
    return record.level.upper() == level.name


def filter_by_date(record: LogRecord, floor: datetime) -> bool:
    """True unless the record is strictly earlier than *floor*.

    A naive *floor* is taken as local time.
    """
    if floor.tzinfo is None:
        floor = floor.astimezone()
    return record.timestamp >= floor


def filter_by_thread(record: LogRecord, thread: str) -> bool:
    """True if the thread name matches exactly, ignoring case."""
    return record.thread.casefold() == thread.casefold()


def filter_by_message(record: LogRecord, keyword: str) -> bool:
    """True if keyword appears in the message (case-insensitive)."""
    return keyword.upper() in record.message.upper()


def filter_by_logger(record: LogRecord, keyword: str) -> bool:
    """True if keyword appears in the logger name (case-insensitive)."""
    return keyword.upper() in record.logger.upper()


def accept(record: LogRecord, params: FilterParams) -> bool:
    """AND of every constraint set in *params*; unset constraints pass.

    Raises ValueError if either argument is None.
    """
    if record is None:
        raise ValueError("record must not be None")
    if params is None:
        raise ValueError("params must not be None")

    if not filter_by_level(record, params.level):
        return False
    if params.date is not None and not filter_by_date(record, params.date):
        return False
    if params.thread and not filter_by_thread(record, params.thread):
        return False
    if params.message and not filter_by_message(record, params.message):
        return False
    if params.logger and not filter_by_logger(record, params.logger):
        return False
    return True
