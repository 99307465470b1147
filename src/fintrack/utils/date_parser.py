"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from fintrack.domain.periods import month_range

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ("this-month", "last-month", "this-year", "last-year", "this-week", "last-week")


def _start_of(unit: str, today: date) -> Optional[date]:
    if unit == "month":
        return today.replace(day=1)
    if unit == "year":
        return today.replace(month=1, day=1)
    if unit == "week":
        return today - timedelta(days=today.weekday())
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    dates: "today", "yesterday", "tomorrow", "this month", "last year",
    "next week", "last friday". Month, year and week expressions resolve to
    the first day of that period.

    Args:
        date_str: Date string
        today: Reference date for relative dates, defaults to date.today()

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if today is None:
        today = date.today()

    simple = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in simple:
        return simple[text]

    word, _, unit = text.partition(" ")
    if word in ("last", "this", "next") and unit:
        if word == "last" and unit in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
            return today - timedelta(days=days_ago)

        start = _start_of(unit, today)
        if start is not None:
            step = {
                "month": relativedelta(months=1),
                "year": relativedelta(years=1),
                "week": timedelta(days=7),
            }[unit]
            if word == "last":
                return start - step
            if word == "next":
                return start + step
            return start

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get the calendar start and end dates of a named period.

    Args:
        period: One of this-month, last-month, this-year, last-year,
            this-week, last-week
        today: Reference date, defaults to date.today()

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if today is None:
        today = date.today()

    if period == "this-month":
        return month_range(today.year, today.month)
    if period == "last-month":
        previous = today - relativedelta(months=1)
        return month_range(previous.year, previous.month)
    if period == "this-year":
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if period == "last-year":
        return date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)
    if period in ("this-week", "last-week"):
        monday = _start_of("week", today)
        if period == "last-week":
            monday -= timedelta(days=7)
        return monday, monday + timedelta(days=6)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
