"""Financial summary: derive monthly facts and dashboard aggregates from records.

``build_facts`` produces the FinancialFacts consumed by the projection and
recommendation engines:

- monthly income: active income sources through the frequency normalizer;
- monthly expenses: the previous calendar month's recorded spending, or the
  monthly recurring total when nothing was recorded last month;
- investments: market value and unrealized gain of the portfolio.

The remaining helpers back the dashboard views (category breakdown,
month-over-month change, income versus expenses history, cumulative daily
spending). All take the current date as an argument.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from .dates import add_months, previous_month
from .exceptions import LedgerwiseValidationError
from .frequency import total_monthly_income
from .investments import portfolio_performance
from .models import (
    CategoryTotal,
    DailySpending,
    Expense,
    FinancialFacts,
    IncomeSource,
    Investment,
    MonthlyCashFlow,
    RecurringPayment,
)
from .numeric import ZERO, percentage_of
from .recurring import monthly_recurring_total

logger = structlog.get_logger()

DEFAULT_HISTORY_MONTHS = 6


def expenses_in_month(expenses: Iterable[Expense], year: int, month: int) -> list[Expense]:
    """Expenses dated within the given calendar month."""
    return [e for e in expenses if e.date.year == year and e.date.month == month]


def total_spent(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), ZERO)


def build_facts(
    income_sources: Iterable[IncomeSource],
    expenses: Iterable[Expense],
    recurring_payments: Iterable[RecurringPayment],
    investments: Iterable[Investment],
    today: date,
) -> FinancialFacts:
    """Normalize a record snapshot into monthly facts.

    Args:
        income_sources: All income sources; inactive ones are ignored
        expenses: Expense history
        recurring_payments: Recurring payments; inactive ones are ignored
        investments: Current positions
        today: The caller's current date

    Returns:
        FinancialFacts for the projection and recommendation engines
    """
    monthly_income = total_monthly_income(income_sources)
    monthly_recurring = monthly_recurring_total(recurring_payments)

    year, month = previous_month(today)
    last_month_total = total_spent(expenses_in_month(expenses, year, month))
    monthly_expenses = last_month_total if last_month_total > 0 else monthly_recurring

    portfolio = portfolio_performance(investments)

    facts = FinancialFacts(
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        monthly_recurring=monthly_recurring,
        total_investments=portfolio.total_value,
        investment_gains=portfolio.total_gain,
    )
    logger.info(
        "financial_facts_built",
        monthly_income=str(monthly_income),
        monthly_expenses=str(monthly_expenses),
        expenses_source="last_month" if last_month_total > 0 else "recurring",
        total_investments=str(portfolio.total_value),
    )
    return facts


def category_breakdown(
    expenses: Iterable[Expense],
    limit: Optional[int] = None,
) -> list[CategoryTotal]:
    """Totals per category, largest first (ties ordered by category name)."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        totals[expense.category] += expense.amount

    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    if limit is not None:
        ordered = ordered[:limit]
    return [CategoryTotal(category=c, total=t) for c, t in ordered]


def month_over_month_change(current_total: Decimal, previous_total: Decimal) -> Decimal:
    """Percentage change in spending versus last month, 0 without a baseline."""
    return percentage_of(current_total - previous_total, previous_total)


def cash_flow_history(
    income_sources: Iterable[IncomeSource],
    expenses: Iterable[Expense],
    today: date,
    months: int = DEFAULT_HISTORY_MONTHS,
) -> list[MonthlyCashFlow]:
    """Income versus expenses for the last ``months`` months including this one.

    Income is the normalized monthly income, applied to every month.
    """
    if months < 1:
        raise LedgerwiseValidationError(
            "History must cover at least one month",
            field="months",
            value=months,
            constraint="months >= 1",
        )

    monthly_income = total_monthly_income(income_sources)
    expense_list = list(expenses)
    history = []
    for offset in range(months - 1, -1, -1):
        start = add_months(today.replace(day=1), -offset)
        spent = total_spent(expenses_in_month(expense_list, start.year, start.month))
        history.append(
            MonthlyCashFlow(
                year=start.year,
                month=start.month,
                income=monthly_income,
                expenses=spent,
            )
        )
    return history


def cumulative_spending(expenses: Iterable[Expense], today: date) -> list[DailySpending]:
    """Daily and running spending totals for day 1 through today of this month."""
    daily: dict[int, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses_in_month(expenses, today.year, today.month):
        daily[expense.date.day] += expense.amount

    running = ZERO
    result = []
    for day in range(1, today.day + 1):
        running += daily.get(day, ZERO)
        result.append(DailySpending(day=day, daily=daily.get(day, ZERO), cumulative=running))
    return result
