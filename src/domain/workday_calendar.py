"""
Workday Calendar Module

Enumerates weekdays in a date range, independent of any attendance data.
"""

from datetime import date, datetime, timedelta
from typing import Dict, Iterator

from .entities import Workday

DATE_KEY_FORMAT = "%Y-%m-%d"


def date_key(day: date) -> str:
    """Format a date as its canonical YYYY-MM-DD key."""
    return day.strftime(DATE_KEY_FORMAT)


def parse_date_key(value: str) -> date:
    """
    Parse a YYYY-MM-DD key into a date.

    Raises:
        ValueError: If the value is not a valid date key
    """
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def is_weekday(day: date) -> bool:
    """Saturday and Sunday are non-workdays; all other days are workdays."""
    return day.weekday() < 5


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date in [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def count_calendar_days(start: date, end: date) -> int:
    """Inclusive calendar day count, 0 when start > end."""
    return max(0, (end - start).days + 1)


def build_workday_skeleton(start: date, end: date) -> Dict[str, Workday]:
    """
    Build one unflagged Workday record per weekday in [start, end].

    Args:
        start: First date (inclusive)
        end: Last date (inclusive)

    Returns:
        Dict of YYYY-MM-DD -> Workday, in date order. Empty when start > end.
    """
    return {
        date_key(d): Workday(date=d)
        for d in iter_dates(start, end)
        if is_weekday(d)
    }
