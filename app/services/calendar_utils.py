"""
Calendar utilities shared by the scheduling and analytics services.

Every helper works on calendar days (`datetime.date`). A `datetime` passed in
is reduced to its own date fields; nothing is shifted to UTC first, so a
23:30 local timestamp never slides into the next day.
"""
from __future__ import annotations

import calendar as _cal
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from app.core.errors import DataError, InvalidDateRange, InvalidInput

WEEKDAY_TOKENS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

DateLike = Union[date, datetime, str]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _day(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidInput(f"Expected a date, got {type(value).__name__}.", value=value)


# ---------------------------------------------------------------------------
# Comparison / classification
# ---------------------------------------------------------------------------

def is_same_day(d1: Union[date, datetime], d2: Union[date, datetime]) -> bool:
    return _day(d1) == _day(d2)


def day_of_week(day: Union[date, datetime]) -> str:
    """Map a date to its weekday token (mon for Monday through sun for Sunday)."""
    return WEEKDAY_TOKENS[_day(day).weekday()]


def weekday_label(day: Union[date, datetime]) -> str:
    return _WEEKDAY_LABELS[_day(day).weekday()]


def is_last_day_of_month(day: Union[date, datetime]) -> bool:
    d = _day(day)
    return d.day == _cal.monthrange(d.year, d.month)[1]


# ---------------------------------------------------------------------------
# Ranges
# ---------------------------------------------------------------------------

def enumerate_days(start: date, end: date) -> list[date]:
    """Inclusive, ascending; empty when start > end."""
    start, end = _day(start), _day(end)
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def day_count(start: date, end: date) -> int:
    return max(0, (_day(end) - _day(start)).days + 1)


def ensure_range(start: date, end: date) -> None:
    if _day(start) > _day(end):
        raise InvalidDateRange(start, end)


def current_date(tz: Optional[tzinfo] = None) -> date:
    return datetime.now(tz=tz or timezone.utc).date()


# ---------------------------------------------------------------------------
# ISO conversion
# ---------------------------------------------------------------------------

def format_iso_date(value: Union[date, datetime]) -> str:
    return _day(value).isoformat()


def parse_iso_date(text: str, field: str = "date") -> date:
    """Parse a strict YYYY-MM-DD string."""
    if not isinstance(text, str) or not _ISO_DATE.match(text):
        raise DataError(f"Invalid {field}: expected YYYY-MM-DD.", field=field, value=text)
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise DataError(f"Invalid {field}: not a calendar date.", field=field, value=text)


def as_date(value: DateLike, field: str = "date") -> date:
    if isinstance(value, str):
        return parse_iso_date(value, field=field)
    if isinstance(value, (date, datetime)):
        return _day(value)
    raise DataError(f"Invalid {field}: expected a date.", field=field, value=value)


def parse_timestamp(value: Union[datetime, str], field: str = "timestamp") -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    raise DataError(f"Invalid {field}: expected an ISO-8601 timestamp.", field=field, value=value)
