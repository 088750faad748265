"""Frequency normalization.

Converts an amount paid on any cadence into its monthly equivalent. Every
component that monthlyizes income or recurring amounts goes through
``monthly_equivalent`` so two call sites can never disagree on a user's
monthly figures.

Multipliers:
- weekly: x4.33 (52 / 12 weeks per month)
- bi-weekly: x2.17 (26 / 12 periods per month)
- monthly: x1
- quarterly: /3
- annually: /12
- one-time: not convertible
"""

from decimal import Decimal
from typing import Iterable, Union

import structlog

from .exceptions import UnsupportedFrequencyError
from .models import RECURRING_FREQUENCIES, Frequency, IncomeSource
from .numeric import to_decimal

logger = structlog.get_logger()


# =============================================================================
# MONTHLY CONVERSION
# =============================================================================

WEEKLY_MULTIPLIER = Decimal("4.33")
BI_WEEKLY_MULTIPLIER = Decimal("2.17")

MONTHS_PER_PERIOD = {
    Frequency.QUARTERLY: Decimal("3"),
    Frequency.ANNUALLY: Decimal("12"),
}

MULTIPLIERS = {
    Frequency.WEEKLY: WEEKLY_MULTIPLIER,
    Frequency.BI_WEEKLY: BI_WEEKLY_MULTIPLIER,
    Frequency.MONTHLY: Decimal("1"),
}


def parse_frequency(value: Union[Frequency, str]) -> Frequency:
    """Resolve a frequency enum member or spelling variant.

    Args:
        value: A Frequency or a string such as ``"bi_weekly"``

    Returns:
        The matching Frequency

    Raises:
        UnsupportedFrequencyError: If the value is not a known cadence
    """
    if isinstance(value, Frequency):
        return value
    try:
        return Frequency(value)
    except ValueError:
        raise UnsupportedFrequencyError(
            f"Unknown frequency: {value!r}",
            frequency=value,
        ) from None


def is_recurring_frequency(frequency: Union[Frequency, str]) -> bool:
    """Return True if the cadence repeats (anything but one-time)."""
    return parse_frequency(frequency) in RECURRING_FREQUENCIES


def monthly_equivalent(amount: Decimal, frequency: Union[Frequency, str]) -> Decimal:
    """Convert an amount on the given cadence to its monthly equivalent.

    Args:
        amount: Amount per occurrence
        frequency: Cadence of the amount

    Returns:
        Monthly equivalent amount

    Raises:
        UnsupportedFrequencyError: For one-time amounts, which the caller must
            exclude from monthly aggregation
    """
    freq = parse_frequency(frequency)
    amount = to_decimal(amount)

    if freq in MULTIPLIERS:
        return amount * MULTIPLIERS[freq]
    if freq in MONTHS_PER_PERIOD:
        return amount / MONTHS_PER_PERIOD[freq]

    logger.warning("unsupported_frequency", frequency=freq.value, amount=str(amount))
    raise UnsupportedFrequencyError(
        "One-time amounts have no monthly equivalent; exclude them from monthly totals",
        frequency=freq,
    )


def total_monthly_income(sources: Iterable[IncomeSource]) -> Decimal:
    """Sum the monthly equivalent of all active, repeating income sources.

    Inactive and one-time sources are skipped.
    """
    total = Decimal("0")
    counted = 0
    for source in sources:
        if not source.is_active or source.frequency == Frequency.ONE_TIME:
            continue
        total += monthly_equivalent(source.amount, source.frequency)
        counted += 1

    logger.debug("monthly_income_normalized", sources=counted, total=str(total))
    return total
