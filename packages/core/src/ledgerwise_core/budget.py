"""Budget consumption aggregation.

Groups expenses by category within an inclusive period and compares each
budget against what was spent. Two representations of consumption are kept
side by side: ``percentage`` is rounded and capped at 100 for progress bars,
while ``remaining`` is left unclamped so overspending shows as a negative
amount. ``raw_percentage`` is exposed so callers can apply their own
thresholds.

The aggregator has no selection state. Filtering by category is a plain
argument; the click-to-toggle behaviour lives in the caller, with
``toggle_category_filter`` as a helper for computing the next filter.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from .exceptions import InvalidBudgetAmountError, LedgerwiseValidationError
from .models import Budget, BudgetConsumption, BudgetStatus, Expense
from .numeric import HUNDRED, ZERO, percentage_of, round_half_up

logger = structlog.get_logger()

DEFAULT_NEAR_LIMIT_PERCENT = Decimal("80")
MAX_DISPLAY_PERCENT = 100


def budget_status(
    percentage: int,
    near_limit_percent: Decimal = DEFAULT_NEAR_LIMIT_PERCENT,
) -> BudgetStatus:
    """Map a (clamped) consumption percentage to a status."""
    if percentage >= HUNDRED:
        return BudgetStatus.OVER_BUDGET
    if percentage >= near_limit_percent:
        return BudgetStatus.NEAR_LIMIT
    return BudgetStatus.ON_TRACK


def spent_by_category(
    expenses: Iterable[Expense],
    period_start: date,
    period_end: date,
    category: Optional[str] = None,
) -> dict[str, Decimal]:
    """Sum expense amounts per category within the inclusive period."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        if not period_start <= expense.date <= period_end:
            continue
        if category is not None and expense.category != category:
            continue
        totals[expense.category] += expense.amount
    return dict(totals)


def aggregate(
    expenses: Iterable[Expense],
    budgets: Iterable[Budget],
    period_start: date,
    period_end: date,
    category: Optional[str] = None,
    near_limit_percent: Decimal = DEFAULT_NEAR_LIMIT_PERCENT,
) -> list[BudgetConsumption]:
    """Compare budgets with spending in ``[period_start, period_end]``.

    Args:
        expenses: Expense snapshot
        budgets: Budgets to evaluate; duplicates per category are each
            evaluated on their own
        period_start: First day of the period (inclusive)
        period_end: Last day of the period (inclusive)
        category: Optional category filter, applied to both expenses and budgets
        near_limit_percent: Percentage at which a budget is near its limit

    Returns:
        One BudgetConsumption per budget, in input order

    Raises:
        InvalidBudgetAmountError: If a budget amount is zero or negative
        LedgerwiseValidationError: If the period is inverted
    """
    if period_start > period_end:
        raise LedgerwiseValidationError(
            "Period start must not be after period end",
            field="period_start",
            value=period_start,
            constraint="period_start <= period_end",
        )

    spent = spent_by_category(expenses, period_start, period_end, category)
    results: list[BudgetConsumption] = []

    for budget in budgets:
        if category is not None and budget.category != category:
            continue
        if budget.amount <= 0:
            logger.warning(
                "invalid_budget_amount",
                budget_id=budget.id,
                category=budget.category,
                amount=str(budget.amount),
            )
            raise InvalidBudgetAmountError(
                f"Budget for {budget.category!r} must have a positive amount",
                budget_id=budget.id,
                category=budget.category,
                amount=budget.amount,
            )

        category_spent = spent.get(budget.category, ZERO)
        raw = percentage_of(category_spent, budget.amount)
        percentage = min(MAX_DISPLAY_PERCENT, int(round_half_up(raw)))

        results.append(
            BudgetConsumption(
                budget_id=budget.id,
                category=budget.category,
                budget_amount=budget.amount,
                spent=category_spent,
                percentage=percentage,
                raw_percentage=raw,
                remaining=budget.amount - category_spent,
                status=budget_status(percentage, near_limit_percent),
            )
        )

    logger.info(
        "budget_aggregated",
        budgets=len(results),
        period_start=period_start.isoformat(),
        period_end=period_end.isoformat(),
        category=category,
    )
    return results


def toggle_category_filter(current: Optional[str], clicked: str) -> Optional[str]:
    """Next category filter after a click: clicking the active one clears it."""
    return None if current == clicked else clicked
