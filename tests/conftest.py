"""Shared pytest fixtures for the log4j-xml-reader test suite."""

from __future__ import annotations

import pytest

# 2023-11-14T22:13:20Z
BASE_MILLIS = 1_700_000_000_000


def build_event(
    level: str = "INFO",
    thread: str = "main",
    logger: str = "com.acme.Service",
    timestamp: int | str = BASE_MILLIS,
    message: str | None = "hello",
    extra: str = "",
) -> str:
    """Return one event the way log4j's XMLLayout writes it, one element per line."""
    lines = [
        f'<log4j:event logger="{logger}" timestamp="{timestamp}" level="{level}" thread="{thread}">',
    ]
    if message is not None:
        lines.append(f"<log4j:message><![CDATA[{message}]]></log4j:message>")
    if extra:
        lines.append(extra)
    lines.append("</log4j:event>")
    return "\n".join(lines) + "\n\n"


@pytest.fixture()
def make_event():
    """Return the event text builder."""
    return build_event


@pytest.fixture()
def write_log(tmp_path):
    """Return a function that writes events to a log file and returns its path."""

    def _write(*events: str, name: str = "app.xml", prolog: str = "") -> str:
        path = tmp_path / name
        path.write_text(prolog + "".join(events), encoding="utf-8")
        return str(path)

    return _write
