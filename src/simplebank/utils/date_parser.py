"""Date parsing utilities for transaction history filters."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("today", "this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def _start_of(unit: str, day: date) -> date:
    if unit == "week":
        return day - timedelta(days=day.weekday())
    if unit == "month":
        return day.replace(day=1)
    if unit == "year":
        return day.replace(month=1, day=1)
    raise ValueError(f"Unknown unit: '{unit}'")


def _step(unit: str) -> relativedelta:
    return relativedelta(**{f"{unit}s": 1})


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones: "today", "yesterday", and "this"/"last" followed by "week",
    "month" or "year", which resolve to the first day of that period.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    words = text.split()
    if len(words) == 2 and words[0] in ("this", "last") and words[1] in ("week", "month", "year"):
        start = _start_of(words[1], today)
        return start - _step(words[1]) if words[0] == "last" else start

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get inclusive start and end dates for a named period.

    Args:
        period: One of PERIODS

    Returns:
        Tuple of (start_date, end_date). Periods starting with "this" end
        today; periods starting with "last" cover the whole previous period.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "today":
        return today, today

    prefix, _, unit = period.partition("-")
    if period not in PERIODS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")

    start = _start_of(unit, today)
    if prefix == "this":
        return start, today
    previous = start - _step(unit)
    return previous, start - timedelta(days=1)
