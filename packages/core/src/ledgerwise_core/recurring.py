"""Recurring obligation state machine.

A recurring payment is perpetually scheduled. Marking it paid emits a new
expense fact and moves ``next_due_date`` forward one cadence step; skipping
moves the date without emitting anything. Both return new values, the input
payment is never modified, and persisting the result is the caller's job.

Due urgency is derived from the number of days between today and the next
due date:

    < 0   overdue
    0     due today
    1-3   due soon
    4-7   upcoming
    > 7   scheduled
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Collection, Iterable, Optional, Union

import structlog

from .dates import add_months
from .exceptions import (
    InvalidPaymentStateError,
    LedgerwiseValidationError,
    UnsupportedFrequencyError,
)
from .frequency import monthly_equivalent, parse_frequency
from .models import (
    DEFAULT_EXPENSE_CATEGORY,
    DueStatus,
    Expense,
    Frequency,
    PaymentTransition,
    RecurringPayment,
)

logger = structlog.get_logger()

DAY_STEPS = {
    Frequency.WEEKLY: 7,
    Frequency.BI_WEEKLY: 14,
}

MONTH_STEPS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.ANNUALLY: 12,
}

DUE_SOON_DAYS = 3
UPCOMING_DAYS = 7


# =============================================================================
# DATE ADVANCING
# =============================================================================


def advance(current: date, frequency: Union[Frequency, str]) -> date:
    """Return the due date one cadence step after ``current``.

    Weekly and bi-weekly add 7 and 14 days. Monthly, quarterly and annually
    add 1, 3 and 12 calendar months, keeping the day of month where the
    target month has it and clamping to its last day otherwise.

    Raises:
        UnsupportedFrequencyError: For one-time or unknown cadences
    """
    return advance_by(current, frequency, 1)


def advance_by(start: date, frequency: Union[Frequency, str], steps: int) -> date:
    """Return the date ``steps`` cadence steps after ``start``.

    Month-based cadences are computed from ``start`` in one jump, so the
    original day of month is kept even when an intermediate month was
    shorter (Jan 31 + 2 months is Mar 31, not Mar 28).
    """
    freq = parse_frequency(frequency)
    if steps < 0:
        raise LedgerwiseValidationError(
            "Step count must not be negative",
            field="steps",
            value=steps,
            constraint="steps >= 0",
        )

    if freq in DAY_STEPS:
        return start + timedelta(days=DAY_STEPS[freq] * steps)
    if freq in MONTH_STEPS:
        return add_months(start, MONTH_STEPS[freq] * steps)

    raise UnsupportedFrequencyError(
        "One-time payments have no next due date",
        frequency=freq,
    )


# =============================================================================
# TRANSITIONS
# =============================================================================


def _check_transition(
    payment: RecurringPayment,
    action: str,
    known_ids: Optional[Collection[str]],
) -> None:
    if known_ids is not None and payment.id not in known_ids:
        logger.warning("payment_transition_rejected", payment_id=payment.id, action=action, reason="unknown")
        raise InvalidPaymentStateError(
            f"Cannot {action} unknown payment {payment.id!r}",
            payment_id=payment.id,
            reason="unknown",
        )
    if not payment.is_active:
        logger.warning("payment_transition_rejected", payment_id=payment.id, action=action, reason="inactive")
        raise InvalidPaymentStateError(
            f"Cannot {action} inactive payment {payment.id!r}",
            payment_id=payment.id,
            reason="inactive",
        )


def _advanced(payment: RecurringPayment) -> RecurringPayment:
    return payment.model_copy(
        update={"next_due_date": advance(payment.next_due_date, payment.frequency)}
    )


def mark_paid(
    payment: RecurringPayment,
    known_ids: Optional[Collection[str]] = None,
) -> PaymentTransition:
    """Record the current occurrence as paid.

    Args:
        payment: The active payment being paid
        known_ids: Optional ids of payments that exist in the store; when
            given, a payment outside this set counts as unknown

    Returns:
        PaymentTransition with the emitted expense fact (dated on the due
        date being paid) and the payment advanced one step

    Raises:
        InvalidPaymentStateError: If the payment is inactive or unknown
    """
    _check_transition(payment, "mark paid", known_ids)

    expense = Expense(
        amount=payment.amount,
        category=payment.category or DEFAULT_EXPENSE_CATEGORY,
        date=payment.next_due_date,
        is_recurring=True,
        description=payment.name,
    )
    updated = _advanced(payment)

    logger.info(
        "payment_marked_paid",
        payment_id=payment.id,
        paid_due_date=payment.next_due_date.isoformat(),
        next_due_date=updated.next_due_date.isoformat(),
        amount=str(payment.amount),
    )
    return PaymentTransition(payment=updated, expense=expense)


def skip(
    payment: RecurringPayment,
    known_ids: Optional[Collection[str]] = None,
) -> PaymentTransition:
    """Skip the current occurrence without recording an expense.

    Raises:
        InvalidPaymentStateError: If the payment is inactive or unknown
    """
    _check_transition(payment, "skip", known_ids)
    updated = _advanced(payment)

    logger.info(
        "payment_skipped",
        payment_id=payment.id,
        skipped_due_date=payment.next_due_date.isoformat(),
        next_due_date=updated.next_due_date.isoformat(),
    )
    return PaymentTransition(payment=updated, expense=None)


# =============================================================================
# DUE URGENCY
# =============================================================================


def days_until_due(next_due_date: date, today: date) -> int:
    """Whole days from today to the due date (negative when overdue)."""
    return (next_due_date - today).days


def classify_due(next_due_date: date, today: date) -> DueStatus:
    """Classify how urgent a due date is relative to today."""
    days = days_until_due(next_due_date, today)
    if days < 0:
        return DueStatus.OVERDUE
    if days == 0:
        return DueStatus.DUE_TODAY
    if days <= DUE_SOON_DAYS:
        return DueStatus.DUE_SOON
    if days <= UPCOMING_DAYS:
        return DueStatus.UPCOMING
    return DueStatus.SCHEDULED


def overdue_payments(
    payments: Iterable[RecurringPayment],
    today: date,
) -> list[RecurringPayment]:
    """Active payments whose next due date has already passed."""
    return [
        p
        for p in payments
        if p.is_active and classify_due(p.next_due_date, today) == DueStatus.OVERDUE
    ]


def monthly_recurring_total(payments: Iterable[RecurringPayment]) -> Decimal:
    """Monthly equivalent of all active recurring payments."""
    return sum(
        (monthly_equivalent(p.amount, p.frequency) for p in payments if p.is_active),
        Decimal("0"),
    )
