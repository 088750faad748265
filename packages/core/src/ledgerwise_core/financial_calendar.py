"""Expand records into dated events for one calendar month.

Recurring payments contribute every due date in the month reachable from
their next due date. Income sources contribute paydays derived from their
start date and cadence, and goals contribute their target date.
"""

from datetime import date, timedelta
from typing import Iterable

import structlog

from .dates import add_months, month_bounds, months_between
from .models import (
    CalendarEvent,
    CalendarEventType,
    Frequency,
    Goal,
    IncomeSource,
    RecurringPayment,
)
from .recurring import advance

logger = structlog.get_logger()

DAYS_PER_STEP = {Frequency.WEEKLY: 7, Frequency.BI_WEEKLY: 14}
MONTHS_PER_STEP = {Frequency.MONTHLY: 1, Frequency.QUARTERLY: 3, Frequency.ANNUALLY: 12}


def _payment_dates(payment: RecurringPayment, first: date, last: date) -> list[date]:
    dates = []
    due = payment.next_due_date
    while due <= last:
        if due >= first:
            dates.append(due)
        due = advance(due, payment.frequency)
    return dates


def _income_dates(source: IncomeSource, first: date, last: date) -> list[date]:
    start = source.start_date or first
    freq = source.frequency

    if freq == Frequency.ONE_TIME:
        return [start] if first <= start <= last else []

    if freq in DAYS_PER_STEP:
        step = DAYS_PER_STEP[freq]
        if start > last:
            return []
        if start >= first:
            current = start
        else:
            # first payday on or after the start of the month
            gap = (first - start).days
            current = start + timedelta(days=-(-gap // step) * step)
        dates = []
        while current <= last:
            dates.append(current)
            current += timedelta(days=step)
        return dates

    step = MONTHS_PER_STEP[freq]
    offset = months_between(start, first)
    if offset < 0 or offset % step:
        return []
    payday = add_months(start, offset)
    return [payday] if first <= payday <= last else []


def calendar_events(
    year: int,
    month: int,
    income_sources: Iterable[IncomeSource] = (),
    recurring_payments: Iterable[RecurringPayment] = (),
    goals: Iterable[Goal] = (),
) -> list[CalendarEvent]:
    """List the money events falling in ``year``/``month``.

    Only active income sources and recurring payments are included.

    Returns:
        Events sorted by date, then name
    """
    first, last = month_bounds(date(year, month, 1))
    events: list[CalendarEvent] = []

    for payment in recurring_payments:
        if not payment.is_active:
            continue
        for due in _payment_dates(payment, first, last):
            events.append(
                CalendarEvent(
                    date=due,
                    event_type=CalendarEventType.PAYMENT,
                    name=payment.name or payment.category or payment.id,
                    amount=payment.amount,
                    source_id=payment.id,
                )
            )

    for source in income_sources:
        if not source.is_active:
            continue
        for payday in _income_dates(source, first, last):
            events.append(
                CalendarEvent(
                    date=payday,
                    event_type=CalendarEventType.INCOME,
                    name=source.name or source.id,
                    amount=source.amount,
                    source_id=source.id,
                )
            )

    for goal in goals:
        if goal.target_date is not None and first <= goal.target_date <= last:
            events.append(
                CalendarEvent(
                    date=goal.target_date,
                    event_type=CalendarEventType.GOAL,
                    name=goal.label,
                    amount=goal.target_amount,
                    source_id=goal.id,
                )
            )

    events.sort(key=lambda e: (e.date, e.name))
    logger.debug("calendar_expanded", year=year, month=month, events=len(events))
    return events


def upcoming_events(events: Iterable[CalendarEvent], today: date) -> list[CalendarEvent]:
    """Events on or after today."""
    return [e for e in events if e.date >= today]
