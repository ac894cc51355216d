"""Timezone utilities for US/Eastern market time."""

import re
from datetime import datetime, time
from typing import Optional

import pytz
from dateutil import parser as date_parser

from brokerage.core.exceptions import InvalidDateRangeError

EASTERN_TZ = pytz.timezone("US/Eastern")

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def to_storage(dt: datetime) -> datetime:
    """
    Convert to naive UTC for DateTime columns.

    Eastern wall time repeats an hour when DST ends; UTC does not.
    """
    return to_eastern(dt).astimezone(pytz.utc).replace(tzinfo=None)


def from_storage(dt: datetime) -> datetime:
    """Convert a naive UTC column value back to US/Eastern."""
    return pytz.utc.localize(dt).astimezone(EASTERN_TZ)


def parse_datetime_eastern(value: str, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it in US/Eastern timezone.

    If no timezone is provided in the string, assumes US/Eastern.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None:
        tz = default_tz or EASTERN_TZ
        dt = tz.localize(dt)
    return to_eastern(dt)


def parse_date_bound(value: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    """
    Parse a history query bound.

    A bare date (YYYY-MM-DD) used as an upper bound covers the whole day.
    """
    if value is None or not value.strip():
        return None
    value = value.strip()
    try:
        dt = parse_datetime_eastern(value)
    except (ValueError, OverflowError) as exc:
        raise InvalidDateRangeError(f"Invalid date: {value!r}") from exc

    if end_of_day and _DATE_ONLY.match(value):
        dt = EASTERN_TZ.localize(datetime.combine(dt.date(), time.max))
    return dt
