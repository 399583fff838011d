"""Decode log4j ``event`` fragments into LogRecord values.

Each fragment is parsed on its own with lxml, wrapped in a synthetic root
element that binds the ``log4j`` prefix, so the file as a whole never has to
be well-formed. Child elements are dispatched by kind:

  message       -> message text
  data          -> well-known field or custom field
  properties    -> nested data entries (log4j 1.2 XMLLayout)
  throwable     -> stack trace text
  locationInfo  -> class / method / file / line
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Iterator

from lxml import etree

from log4jxml.errors import FragmentDecodeError
from log4jxml.filters import accept
from log4jxml.models import FilterParams, LogRecord

logger = logging.getLogger(__name__)

LOG4J_NAMESPACE = "http://jakarta.apache.org/log4j/"
RESERVED_PREFIX = "log4net:"

# data entry name -> LogRecord field
WELL_KNOWN_DATA = {
    "log4net:UserName": "user_name",
    "log4japp": "application",
    "log4jmachinename": "machine_name",
    "log4net:HostName": "host_name",
}

_NS = {"log4j": LOG4J_NAMESPACE}
_WRAPPER_OPEN = f'<fragment xmlns:log4j="{LOG4J_NAMESPACE}">'
_WRAPPER_CLOSE = "</fragment>"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)


@dataclass
class DecodeContext:
    """Running state for one scan: last decoded timestamp and next sequence."""

    previous_timestamp: datetime | None = None
    next_sequence: int = 1


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_event(fragment: str) -> etree._Element:
    try:
        root = etree.fromstring(_WRAPPER_OPEN + fragment + _WRAPPER_CLOSE, _PARSER)
    except etree.XMLSyntaxError as exc:
        raise FragmentDecodeError(f"malformed event XML: {exc}", fragment) from exc

    event = root.find("log4j:event", _NS)
    if event is None:
        raise FragmentDecodeError("no log4j:event element in fragment", fragment)
    return event


def _parse_timestamp(value: str | None, fragment: str) -> datetime:
    """Epoch milliseconds -> aware datetime in the local time zone."""
    try:
        millis = float(value)
        return (_EPOCH + timedelta(milliseconds=millis)).astimezone()
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise FragmentDecodeError(f"invalid timestamp {value!r}: {exc}", fragment) from exc


def _read_text(element: etree._Element) -> str:
    """Text content of an element that may only hold text, CDATA and comments."""
    parts = [element.text or ""]
    for child in element:
        if isinstance(child.tag, str):
            raise ValueError(f"unexpected element <{etree.QName(child).localname}>")
        parts.append(child.tail or "")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Per-kind child decoders, each returning a partial field update
# ---------------------------------------------------------------------------


def _decode_message(child: etree._Element) -> dict:
    try:
        return {"message": _read_text(child)}
    except Exception as exc:
        return {"message": f"error reading message: {exc}"}


def _decode_throwable(child: etree._Element) -> dict:
    try:
        return {"throwable": _read_text(child)}
    except Exception as exc:
        return {"throwable": f"error reading throwable: {exc}"}


def _decode_data(child: etree._Element) -> dict:
    name = child.get("name")
    if name is None:
        logger.debug("Ignoring data entry without a name")
        return {}
    value = child.get("value")

    if name in WELL_KNOWN_DATA:
        return {WELL_KNOWN_DATA[name]: value}
    if name.startswith(RESERVED_PREFIX):
        return {}
    return {"custom_fields": {name: value or ""}}


def _decode_properties(child: etree._Element) -> dict:
    update: dict = {}
    for data in child.iterfind("log4j:data", _NS):
        _merge(update, _decode_data(data))
    return update


def _decode_location(child: etree._Element) -> dict:
    return {
        "class_name": child.get("class"),
        "method": child.get("method"),
        "file": child.get("file"),
        "line": child.get("line"),
    }


_CHILD_DECODERS: dict[str, Callable[[etree._Element], dict]] = {
    "message": _decode_message,
    "data": _decode_data,
    "properties": _decode_properties,
    "throwable": _decode_throwable,
    "locationInfo": _decode_location,
}


def _merge(fields: dict, update: dict) -> None:
    for key, value in update.items():
        if key == "custom_fields":
            fields.setdefault("custom_fields", {}).update(value)
        else:
            fields[key] = value


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def decode_fragment(fragment: str, source_path: str, context: DecodeContext) -> LogRecord:
    """Decode one event fragment.

    Updates ``context.previous_timestamp``. The record carries
    ``context.next_sequence``; the caller advances the counter once the
    record is accepted.

    Raises FragmentDecodeError for malformed XML or a bad timestamp.
    """
    event = _parse_event(fragment)
    timestamp = _parse_timestamp(event.get("timestamp"), fragment)

    delta = None
    if context.previous_timestamp is not None:
        delta = (timestamp - context.previous_timestamp).total_seconds()
    context.previous_timestamp = timestamp

    fields: dict = {
        "sequence": context.next_sequence,
        "source_path": source_path,
        "level": event.get("level", ""),
        "thread": event.get("thread", ""),
        "logger": event.get("logger", ""),
        "timestamp": timestamp,
        "delta_seconds": delta,
    }

    for child in event:
        if not isinstance(child.tag, str):
            continue
        qname = etree.QName(child)
        decoder = _CHILD_DECODERS.get(qname.localname)
        if qname.namespace != LOG4J_NAMESPACE or decoder is None:
            logger.debug("Ignoring unknown child element %s", child.tag)
            continue
        _merge(fields, decoder(child))

    return LogRecord(**fields)


def decode_event(
    fragment: str,
    source_path: str,
    params: FilterParams,
    context: DecodeContext,
) -> LogRecord | None:
    """Decode one fragment and apply the filter. Returns None if rejected."""
    record = decode_fragment(fragment, source_path, context)
    if not accept(record, params):
        return None
    context.next_sequence += 1
    return record


def decode_events(
    fragments: Iterable[str],
    source_path: str,
    params: FilterParams,
    context: DecodeContext | None = None,
) -> Iterator[LogRecord]:
    """Decode and filter a fragment stream, skipping fragments that fail."""
    if context is None:
        context = DecodeContext()

    for fragment in fragments:
        try:
            record = decode_event(fragment, source_path, params, context)
        except FragmentDecodeError as exc:
            logger.warning("Skipping event in %s: %s", source_path, exc)
            continue
        if record is not None:
            yield record
