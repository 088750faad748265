"""Investment performance: cost basis versus market value.

Prices are whatever the caller supplies; this module never looks anything
up. Zero denominators are a legitimate data state (a position received for
free, or an empty portfolio) and produce a gain percentage of 0 instead of
an error.
"""

from decimal import Decimal
from typing import Iterable

import structlog

from .models import Investment, InvestmentPerformance, PortfolioPerformance
from .numeric import ZERO, percentage_of

logger = structlog.get_logger()


def performance(investment: Investment) -> InvestmentPerformance:
    """Calculate value, cost basis and gain for one position.

    Args:
        investment: The position to evaluate

    Returns:
        InvestmentPerformance where ``gain_percentage`` is 0 if the cost
        basis is 0
    """
    cost_basis = investment.quantity * investment.purchase_price
    current_value = investment.quantity * investment.current_price
    gain = current_value - cost_basis

    return InvestmentPerformance(
        investment_id=investment.id,
        current_value=current_value,
        cost_basis=cost_basis,
        gain=gain,
        gain_percentage=percentage_of(gain, cost_basis),
        is_positive=gain >= 0,
    )


def portfolio_performance(investments: Iterable[Investment]) -> PortfolioPerformance:
    """Aggregate performance across positions.

    ``total_gain_percentage`` is ``total_gain / (total_value - total_gain)``,
    i.e. gain relative to the combined cost basis, and 0 when that is 0.
    """
    positions = [performance(inv) for inv in investments]
    total_value = sum((p.current_value for p in positions), ZERO)
    total_gain = sum((p.gain for p in positions), ZERO)
    total_cost = total_value - total_gain

    result = PortfolioPerformance(
        total_value=total_value,
        total_cost_basis=total_cost,
        total_gain=total_gain,
        total_gain_percentage=percentage_of(total_gain, total_cost),
        positions=positions,
    )
    logger.debug(
        "portfolio_evaluated",
        positions=len(positions),
        total_value=str(total_value),
        total_gain=str(total_gain),
    )
    return result


def total_market_value(investments: Iterable[Investment]) -> Decimal:
    """Current market value of all positions."""
    return sum((inv.quantity * inv.current_price for inv in investments), ZERO)
