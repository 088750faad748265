"""Scenario projection of savings and investments.

Two streams are projected month by month and never merged:

- savings grow linearly by a fixed monthly amount and earn nothing (cash set
  aside);
- investments compound monthly at the expected annual return / 12.

Month 0 is today, before any growth. Values are exact Decimals; rounding
for display is done with ``round_points`` and does not feed back into the
engine.
"""

from decimal import Decimal
from typing import Iterable

import structlog

from .exceptions import InvalidProjectionHorizonError, LedgerwiseValidationError
from .models import ProjectionPoint, ProjectionScenario
from .numeric import HUNDRED, ZERO, round_half_up

logger = structlog.get_logger()

MONTHS_PER_YEAR = Decimal("12")


def monthly_savings(scenario: ProjectionScenario) -> Decimal:
    """Amount added to the savings stream each month."""
    return (
        scenario.monthly_net_income * scenario.savings_rate_percent / HUNDRED
        + scenario.extra_monthly_savings
    )


def monthly_return(scenario: ProjectionScenario) -> Decimal:
    """Monthly compounding rate derived from the annual percentage."""
    return scenario.expected_annual_return_percent / HUNDRED / MONTHS_PER_YEAR


def project(scenario: ProjectionScenario) -> list[ProjectionPoint]:
    """Project a scenario forward month by month.

    Args:
        scenario: Projection inputs

    Returns:
        ``months + 1`` points ordered by month index, index 0 being today

    Raises:
        InvalidProjectionHorizonError: If ``months`` is not a positive integer
    """
    months = scenario.months
    if isinstance(months, bool) or not isinstance(months, int) or months < 1:
        logger.warning("invalid_projection_horizon", months=months)
        raise InvalidProjectionHorizonError(
            f"Projection horizon must be a positive number of months, got {months!r}",
            months=months,
        )

    savings_step = monthly_savings(scenario)
    growth = 1 + monthly_return(scenario)

    cumulative_savings = ZERO
    investment_value = scenario.starting_investment_value
    points = [
        ProjectionPoint(
            month_index=0,
            cumulative_savings=cumulative_savings,
            investment_value=investment_value,
            net_worth=cumulative_savings + investment_value,
        )
    ]

    for i in range(1, months + 1):
        cumulative_savings += savings_step
        investment_value *= growth
        points.append(
            ProjectionPoint(
                month_index=i,
                cumulative_savings=cumulative_savings,
                investment_value=investment_value,
                net_worth=cumulative_savings + investment_value,
            )
        )

    logger.info(
        "scenario_projected",
        months=months,
        monthly_savings=str(savings_step),
        final_net_worth=str(points[-1].net_worth),
    )
    return points


def project_many(scenarios: Iterable[ProjectionScenario]) -> list[list[ProjectionPoint]]:
    """Project several independent scenarios."""
    return [project(s) for s in scenarios]


def final_point(points: list[ProjectionPoint]) -> ProjectionPoint:
    """The last point of a projection (the end of the horizon)."""
    if not points:
        raise LedgerwiseValidationError(
            "Projection has no points",
            field="points",
            constraint="at least one point",
        )
    return points[-1]


def round_points(points: Iterable[ProjectionPoint], places: int = 0) -> list[ProjectionPoint]:
    """Copies of the points rounded half-up for display."""
    return [
        p.model_copy(
            update={
                "cumulative_savings": round_half_up(p.cumulative_savings, places),
                "investment_value": round_half_up(p.investment_value, places),
                "net_worth": round_half_up(p.net_worth, places),
            }
        )
        for p in points
    ]
