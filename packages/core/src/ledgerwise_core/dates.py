"""Calendar helpers shared by the recurring, budget, goal and calendar code."""

from calendar import monthrange
from datetime import date
from typing import Optional


def add_months(start_date: date, months: int, anchor_day: Optional[int] = None) -> date:
    """Move ``start_date`` by whole calendar months.

    The day of month is ``anchor_day`` (default: the start date's day),
    clamped to the last valid day of the target month, so Jan 31 + 1 month
    is Feb 28 or Feb 29.
    """
    day = anchor_day if anchor_day is not None else start_date.day
    total_month = start_date.month - 1 + months
    year = start_date.year + total_month // 12
    month = total_month % 12 + 1
    last_day = monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last date of the month containing ``day``."""
    last_day = monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def months_between(start: date, end: date) -> int:
    """Calendar-month difference ignoring the day of month (may be negative)."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def previous_month(day: date) -> tuple[int, int]:
    """Return (year, month) of the month before ``day``."""
    if day.month == 1:
        return day.year - 1, 12
    return day.year, day.month - 1
