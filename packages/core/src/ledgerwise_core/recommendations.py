"""Threshold-based financial health recommendations.

Rules (default thresholds, configurable through ThresholdConfig):

- Savings rate, monthly net / monthly income x 100 (0 without income):
  below 10 is danger, below 20 is warning, otherwise success.
- Emergency fund, total investments / monthly expenses in months (0 without
  expenses, reported as insufficient data): below 3 is danger, below 6 is
  warning, otherwise success.
- Each goal with a deadline whose required monthly contribution exceeds half
  of the monthly net gets a warning.
- Any overdue recurring payment produces one danger entry.

Boundaries are inclusive on the upper side: exactly 20% is success.
The full list is recomputed on every call.
"""

from decimal import Decimal
from typing import Iterable, Optional

import structlog

from .config import ThresholdConfig
from .models import (
    FinancialFacts,
    GoalProgress,
    Recommendation,
    RecommendationCategory,
    RecurringPayment,
    Severity,
)
from .numeric import ZERO, percentage_of

logger = structlog.get_logger()

# Documented defaults, built without reading the environment or a .env file
DEFAULT_THRESHOLDS = ThresholdConfig.model_construct()


def savings_rate(facts: FinancialFacts) -> Decimal:
    """Share of monthly income left after expenses, in percent."""
    return percentage_of(facts.monthly_net, facts.monthly_income)


def emergency_fund_months(facts: FinancialFacts) -> Decimal:
    """Months of expenses covered by the investment portfolio.

    Uses total investment value as the emergency fund; 0 when there are no
    monthly expenses.
    """
    if facts.monthly_expenses == 0:
        return ZERO
    return facts.total_investments / facts.monthly_expenses


def _savings_rate_recommendation(rate: Decimal, thresholds: ThresholdConfig) -> Recommendation:
    if rate < thresholds.savings_rate_warning:
        severity = Severity.DANGER
        message = (
            f"Your savings rate is below {thresholds.savings_rate_warning:f}%. "
            f"Aim for at least {thresholds.savings_rate_success:f}% to build wealth."
        )
    elif rate < thresholds.savings_rate_success:
        severity = Severity.WARNING
        message = (
            f"Good start! Try to increase your savings rate to "
            f"{thresholds.savings_rate_success:f}% or more."
        )
    else:
        severity = Severity.SUCCESS
        message = f"Excellent! You're saving {rate:.1f}% of your income."
    return Recommendation(
        severity=severity,
        category=RecommendationCategory.SAVINGS_RATE,
        message=message,
    )


def _emergency_fund_recommendation(
    facts: FinancialFacts,
    months: Decimal,
    thresholds: ThresholdConfig,
) -> Recommendation:
    warn = thresholds.emergency_fund_warning_months
    ok = thresholds.emergency_fund_success_months

    if facts.monthly_expenses == 0:
        severity = Severity.DANGER
        message = (
            "Not enough expense data to size your emergency fund. "
            f"Record your expenses and build up to {warn:f}-{ok:f} months."
        )
    elif months < warn:
        severity = Severity.DANGER
        message = f"You have {months:.1f} months of emergency funds. Build up to {warn:f}-{ok:f} months."
    elif months < ok:
        severity = Severity.WARNING
        message = f"You have {months:.1f} months of emergency funds. Consider building to {ok:f} months."
    else:
        severity = Severity.SUCCESS
        message = f"Great! You have {months:.1f} months of emergency funds."
    return Recommendation(
        severity=severity,
        category=RecommendationCategory.EMERGENCY_FUND,
        message=message,
    )


def _goal_recommendations(
    goals: Iterable[GoalProgress],
    monthly_net: Decimal,
    thresholds: ThresholdConfig,
) -> list[Recommendation]:
    limit = monthly_net * thresholds.goal_contribution_ratio
    recommendations = []
    for goal in goals:
        needed = goal.monthly_contribution_needed
        if needed is None or needed <= limit:
            continue
        recommendations.append(
            Recommendation(
                severity=Severity.WARNING,
                category=RecommendationCategory.GOAL,
                message=(
                    f'Goal "{goal.name}" requires {needed:,.2f}/month. '
                    "Consider extending the deadline."
                ),
                goal_id=goal.goal_id,
            )
        )
    return recommendations


def _overdue_recommendation(overdue: list[RecurringPayment]) -> Optional[Recommendation]:
    if not overdue:
        return None
    total = sum((p.amount for p in overdue), ZERO)
    noun = "payment is" if len(overdue) == 1 else "payments are"
    return Recommendation(
        severity=Severity.DANGER,
        category=RecommendationCategory.OVERDUE_BILLS,
        message=f"{len(overdue)} recurring {noun} overdue, totalling {total:,.2f}. Pay or skip them to stay current.",
    )


def recommend(
    facts: FinancialFacts,
    goal_progress: Iterable[GoalProgress] = (),
    overdue: Iterable[RecurringPayment] = (),
    thresholds: Optional[ThresholdConfig] = None,
) -> list[Recommendation]:
    """Produce recommendations for the given facts.

    Args:
        facts: Normalized monthly figures
        goal_progress: Evaluated goals; only those with a deadline are checked
        overdue: Active recurring payments that are overdue
        thresholds: Rule thresholds (``DEFAULT_THRESHOLDS`` when omitted)

    Returns:
        Savings-rate and emergency-fund recommendations, then one per
        strained goal, then the overdue-bills warning if any
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    rate = savings_rate(facts)
    months = emergency_fund_months(facts)

    recommendations = [
        _savings_rate_recommendation(rate, thresholds),
        _emergency_fund_recommendation(facts, months, thresholds),
    ]
    recommendations.extend(_goal_recommendations(goal_progress, facts.monthly_net, thresholds))

    overdue_rec = _overdue_recommendation(list(overdue))
    if overdue_rec is not None:
        recommendations.append(overdue_rec)

    logger.info(
        "recommendations_generated",
        savings_rate=str(rate),
        emergency_fund_months=str(months),
        count=len(recommendations),
        danger=sum(1 for r in recommendations if r.severity == Severity.DANGER),
    )
    return recommendations
