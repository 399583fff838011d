"""Scan pipeline: framer -> decoder -> filter, one lazy record stream per file."""

import logging
from contextlib import closing
from typing import Iterable, Iterator

from log4jxml.config import Config
from log4jxml.decoder import DecodeContext, decode_events
from log4jxml.framer import frame_events, read_fragments
from log4jxml.models import FilterParams, LogRecord
from log4jxml.reader import tail_lines

logger = logging.getLogger(__name__)


def scan(
    path: str,
    params: FilterParams | None = None,
    config: Config | None = None,
) -> Iterator[LogRecord]:
    """Yield accepted records of the log file at *path*, in file order.

    Sequence numbers and deltas run across the whole file. Nothing is read
    ahead of the consumer, and closing the generator releases the file.
    """
    params = params or FilterParams()
    logger.debug("Scanning %s", path)
    fragments = read_fragments(path, config)
    with closing(fragments):
        yield from decode_events(fragments, path, params, DecodeContext())


def scan_many(
    paths: Iterable[str],
    params: FilterParams | None = None,
    config: Config | None = None,
) -> Iterator[LogRecord]:
    """Scan several files sequentially, each with a fresh decoding context."""
    for path in paths:
        yield from scan(path, params, config)


def follow(
    path: str,
    params: FilterParams | None = None,
    config: Config | None = None,
) -> Iterator[LogRecord]:
    """Yield records for events appended to *path* after the call, forever."""
    params = params or FilterParams()
    config = config or Config()
    lines = tail_lines(path, config.poll_interval, config.encoding, config.encoding_errors)
    with closing(lines):
        yield from decode_events(frame_events(lines), path, params, DecodeContext())
