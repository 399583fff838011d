"""Reassemble log4j event elements from a line stream into XML fragments."""

import logging
from contextlib import closing
from typing import Iterable, Iterator

from log4jxml.config import Config
from log4jxml.reader import read_lines

logger = logging.getLogger(__name__)

EVENT_START = "<log4j:event"
EVENT_END = "</log4j:event>"


def frame_events(lines: Iterable[str]) -> Iterator[str]:
    """Yield the text of each complete ``log4j:event`` element.

    Lines are joined without separators. Content outside an event is dropped,
    and an event that is never closed produces nothing.
    """
    buffer = None
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.startswith(EVENT_START):
            if buffer is not None:
                logger.debug("Discarding unterminated event (%d chars)", len(buffer))
            buffer = line
            # log4net writes the whole event on a single line
            if line.endswith(EVENT_END):
                yield buffer
                buffer = None
        elif line.startswith(EVENT_END):
            if buffer is not None:
                yield buffer + line
            buffer = None
        elif buffer is not None:
            buffer += line

    if buffer is not None:
        logger.debug("Input ended inside an event (%d chars), dropped", len(buffer))


def read_fragments(path: str, config: Config | None = None) -> Iterator[str]:
    """Frame the events of the log file at *path*."""
    config = config or Config()
    lines = read_lines(path, config.encoding, config.encoding_errors)
    with closing(lines):
        yield from frame_events(lines)
