"""Generator-based file reading, glob expansion, and tail."""

import glob
import logging
import os
import time
from typing import Generator, TextIO

logger = logging.getLogger(__name__)


def open_shared(path: str, encoding: str = "utf-8-sig", errors: str = "replace") -> TextIO:
    """Open *path* for reading without taking any lock; create it empty if missing.

    A writer may keep appending to the file while it is being read.
    """
    if not os.path.exists(path):
        logger.info("Log file %s does not exist, creating it empty", path)
        with open(path, "a", encoding="utf-8"):
            pass
    return open(path, "r", encoding=encoding, errors=errors)


def read_lines(path: str, encoding: str = "utf-8-sig", errors: str = "replace") -> Generator[str, None, None]:
    """Yield each line of *path*, newline included.

    The handle is closed when the generator is exhausted, closed early, or
    interrupted by an error.
    """
    with open_shared(path, encoding, errors) as f:
        for line in f:
            yield line


def expand_paths(raw_paths: list[str]) -> list[str]:
    """Expand globs, deduplicate, and validate that files exist.

    Raises FileNotFoundError if a non-glob path doesn't exist.
    Raises FileNotFoundError if expansion produces zero files.
    """
    expanded = []
    seen = set()

    for raw in raw_paths:
        if any(c in raw for c in ("*", "?", "[")):
            matches = sorted(glob.glob(raw))
            for m in matches:
                if m not in seen:
                    seen.add(m)
                    expanded.append(m)
        else:
            if not os.path.isfile(raw):
                raise FileNotFoundError(f"File not found: {raw}")
            if raw not in seen:
                seen.add(raw)
                expanded.append(raw)

    if not expanded:
        raise FileNotFoundError("No log files found matching the given paths")

    return expanded


def tail_lines(
    path: str,
    poll_interval: float = 0.5,
    encoding: str = "utf-8-sig",
    errors: str = "replace",
) -> Generator[str, None, None]:
    """Seek to end of file and yield complete new lines as they appear.

    Polls with time.sleep(poll_interval). Runs until the consumer stops.
    """
    with open_shared(path, encoding, errors) as f:
        f.seek(0, os.SEEK_END)
        buffer = ""
        while True:
            chunk = f.read()
            if chunk:
                buffer += chunk
                while "\n" in buffer:
                    line, buffer = buffer.split("\n", 1)
                    yield line + "\n"
            else:
                time.sleep(poll_interval)
