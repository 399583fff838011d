"""Configuration loading from env vars and an optional YAML file."""

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime

import yaml

from log4jxml.models import FilterParams, LevelFilter

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    encoding: str = "utf-8-sig"
    encoding_errors: str = "replace"
    poll_interval: float = 0.5
    log_level: str = "WARNING"


def load_yaml_config(path: str | None) -> dict:
    """Load reader settings and default filters from a YAML file.

    Returns empty dict if no path is given or the file does not exist.
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
        return data
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from env vars, falling back to the YAML ``reader`` section."""
    section = (yaml_data or {}).get("reader") or {}

    log_level = str(
        os.environ.get("LOG4J_LOG_LEVEL", section.get("log_level", Config.log_level))
    ).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {log_level}")

    return Config(
        encoding=os.environ.get("LOG4J_ENCODING", section.get("encoding", Config.encoding)),
        encoding_errors=os.environ.get(
            "LOG4J_ENCODING_ERRORS", section.get("encoding_errors", Config.encoding_errors)
        ),
        poll_interval=float(
            os.environ.get("LOG4J_POLL_INTERVAL", section.get("poll_interval", Config.poll_interval))
        ),
        log_level=log_level,
    )


def _parse_date(value) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    return datetime.fromisoformat(str(value))


def load_filter_params(yaml_data: dict | None = None) -> FilterParams:
    """Build default FilterParams from the YAML ``filter`` section."""
    section = (yaml_data or {}).get("filter") or {}
    return FilterParams(
        level=LevelFilter.parse(section.get("level")),
        date=_parse_date(section.get("date")),
        thread=section.get("thread") or "",
        message=section.get("message") or "",
        logger=section.get("logger") or "",
    )
