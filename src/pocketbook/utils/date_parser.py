"""Date parsing utilities.

Dates typed by a user may be relative ("today", "last month"); dates stored
in state documents are strict ISO 8601.
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
PERIODS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")

_DAY_OFFSETS = {"today": 0, "yesterday": -1, "tomorrow": 1}
_UNIT_STEPS = {
    "week": relativedelta(weeks=1),
    "month": relativedelta(months=1),
    "year": relativedelta(years=1),
}


def _unit_start(unit: str, today: date) -> date:
    """Return the first day of the week (Monday), month or year containing ``today``."""
    if unit == "week":
        return today - timedelta(days=today.weekday())
    if unit == "month":
        return today.replace(day=1)
    return today.replace(month=1, day=1)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a user-supplied date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones: "today", "yesterday", "tomorrow", "this/last/next week|month|year"
    (the first day of that period) and "last <weekday>".

    Args:
        date_str: Date string
        today: Reference date for relative expressions (defaults to today)

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    if text in _DAY_OFFSETS:
        return today + timedelta(days=_DAY_OFFSETS[text])

    direction, _, unit = text.partition(" ")
    if direction in ("this", "last", "next") and unit in _UNIT_STEPS:
        start = _unit_start(unit, today)
        if direction == "last":
            return start - _UNIT_STEPS[unit]
        if direction == "next":
            return start + _UNIT_STEPS[unit]
        return start
    if direction == "last" and unit in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
        return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    "this-*" periods run from the start of the current week, month or year up
    to today; "last-*" periods cover the whole previous one.

    Raises:
        ValueError: If period string is not recognized
    """
    key = period.strip().lower()
    if key not in PERIODS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")

    today = today or date.today()
    direction, _, unit = key.partition("-")
    start = _unit_start(unit, today)
    if direction == "this":
        return start, today
    return start - _UNIT_STEPS[unit], start - timedelta(days=1)


def parse_iso_date(value: Any) -> date:
    """Parse an ISO 8601 calendar date as stored in state documents.

    Accepts a date, a datetime, or a string such as "2024-01-15" or
    "2024-01-15T10:30:00.000Z" (the time part is dropped).

    Raises:
        ValueError: If the value is not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO date string, got {type(value).__name__}")
    try:
        return date_parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse ISO date '{value}': {e}")


def parse_iso_datetime(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp as stored in state documents.

    Raises:
        ValueError: If the value is not an ISO timestamp
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO timestamp string, got {type(value).__name__}")
    try:
        return date_parser.isoparse(value.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse ISO timestamp '{value}': {e}")


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last calendar day of the month containing ``day``."""
    first = day.replace(day=1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, last
