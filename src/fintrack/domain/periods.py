"""Budget period date ranges."""

import calendar
from datetime import date
from typing import Iterator

from dateutil.relativedelta import relativedelta

from fintrack.domain.entities import BudgetPeriod
from fintrack.domain.errors import ValidationError


def parse_period(period: BudgetPeriod | str) -> BudgetPeriod:
    """Coerce a period name into a BudgetPeriod.

    Raises:
        ValidationError: If the period is not monthly or yearly
    """
    if isinstance(period, BudgetPeriod):
        return period
    try:
        return BudgetPeriod(str(period).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown budget period: '{period}'. Supported periods: monthly, yearly")


def month_range(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def month_ranges(year: int) -> Iterator[tuple[date, date]]:
    """Yield the twelve (start, end) month ranges of a year, January first."""
    for month in range(1, 13):
        yield month_range(year, month)


def compute_period_range(period: BudgetPeriod | str, reference_date: date) -> tuple[date, date]:
    """Get the canonical date range of the period containing reference_date.

    Args:
        period: Monthly or yearly
        reference_date: Any day inside the wanted period

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValidationError: If period is not recognized
    """
    period = parse_period(period)
    if period == BudgetPeriod.MONTHLY:
        return month_range(reference_date.year, reference_date.month)
    return date(reference_date.year, 1, 1), date(reference_date.year, 12, 31)


def period_end(period: BudgetPeriod | str, start_date: date) -> date:
    """Get the last day of a period that begins on start_date.

    A monthly period starting 2024-03-15 ends 2024-04-14. Steps past a short
    month clamp: 2024-01-31 ends 2024-02-28.
    """
    period = parse_period(period)
    if period == BudgetPeriod.MONTHLY:
        return start_date + relativedelta(months=1) - relativedelta(days=1)
    return start_date + relativedelta(years=1) - relativedelta(days=1)
