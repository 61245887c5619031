from __future__ import annotations

import re
from datetime import date
from datetime import datetime
from typing import Any

# since and until must be ISO 8601 dates
REPORTS_DATE_FORMAT = "%Y-%m-%d"
TRACK_DATETIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)
# strptime accepts at most microseconds
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def format_date(value: date) -> str:
    return value.strftime(REPORTS_DATE_FORMAT)


def parse_datetime(value: str | None) -> datetime | None:
    """Parses an RFC 3339 timestamp as returned by the Track API."""
    if value is None:
        return None
    value = _FRACTION_RE.sub(r"\1", value, count=1)
    for fmt in TRACK_DATETIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid timestamp: '{value}'")


def format_datetime(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def drop_unset(data: dict[str, Any]) -> dict[str, Any]:
    """
    Returns a copy of ``data`` without the keys whose value is None.
    datetimes are converted to RFC 3339 strings.
    """
    out: dict[str, Any] = {}
    for key, val in data.items():
        if val is None:
            continue
        if isinstance(val, datetime):
            val = format_datetime(val)
        out[key] = val
    return out


def add_flag(params: dict[str, str], name: str, enabled: bool, value: str) -> None:
    if enabled:
        params[name] = value


def add_value(params: dict[str, str], name: str, value: str | int | None) -> None:
    if value:
        params[name] = str(value)
