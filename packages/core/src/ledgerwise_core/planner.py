"""Financial planner: run the whole engine over one record snapshot.

The planner chains the components in their data-flow order

    records -> facts -> budgets and goals -> projection -> recommendations

and records every step in an audit log so a figure on screen can be traced
back to its inputs. It holds no state between calls.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from .budget import aggregate
from .config import EngineConfig
from .dates import month_bounds
from .goals import progress_all
from .investments import portfolio_performance
from .models import (
    AuditEntry,
    FinancialPlan,
    FinancialRecords,
    ProjectionScenario,
)
from .projection import final_point, project
from .recommendations import emergency_fund_months, recommend, savings_rate
from .recurring import overdue_payments
from .summary import build_facts

logger = structlog.get_logger()


class FinancialPlanner:
    """
    Build a complete financial plan from a user's records.

    Scenario inputs default to the ``projection`` section of the engine
    configuration and can be overridden per call. The monthly net income and
    starting investment value of the scenario always come from the records.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the planner.

        Args:
            config: Engine configuration (default: loaded from environment)
        """
        self.config = config or EngineConfig()

    def _log_step(
        self,
        audit_log: list[AuditEntry],
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None,
    ) -> None:
        """Add an entry to the audit log."""
        audit_log.append(
            AuditEntry(
                step=step,
                input_value=input_value,
                output_value=output_value,
                source=source,
                notes=notes,
            )
        )
        logger.info(
            "planner_step",
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    def scenario_for(
        self,
        monthly_net_income: Decimal,
        starting_investment_value: Decimal,
        savings_rate_percent: Optional[Decimal] = None,
        expected_annual_return_percent: Optional[Decimal] = None,
        months: Optional[int] = None,
        extra_monthly_savings: Optional[Decimal] = None,
    ) -> ProjectionScenario:
        """Build a scenario from configured defaults and explicit overrides."""
        defaults = self.config.projection
        return ProjectionScenario(
            savings_rate_percent=(
                defaults.savings_rate_percent if savings_rate_percent is None else savings_rate_percent
            ),
            expected_annual_return_percent=(
                defaults.expected_annual_return_percent
                if expected_annual_return_percent is None
                else expected_annual_return_percent
            ),
            months=defaults.months if months is None else months,
            extra_monthly_savings=(
                defaults.extra_monthly_savings if extra_monthly_savings is None else extra_monthly_savings
            ),
            starting_investment_value=starting_investment_value,
            monthly_net_income=monthly_net_income,
        )

    def plan(
        self,
        records: FinancialRecords,
        today: date,
        savings_rate_percent: Optional[Decimal] = None,
        expected_annual_return_percent: Optional[Decimal] = None,
        months: Optional[int] = None,
        extra_monthly_savings: Optional[Decimal] = None,
    ) -> FinancialPlan:
        """
        Produce facts, goal progress, projection and recommendations.

        Args:
            records: The user's record snapshot
            today: The caller's current date
            savings_rate_percent: Override for the scenario savings rate
            expected_annual_return_percent: Override for the expected return
            months: Override for the projection horizon
            extra_monthly_savings: Override for the fixed extra savings

        Returns:
            FinancialPlan with a full audit trail

        Raises:
            InvalidProjectionHorizonError: If the horizon is not positive
        """
        audit_log: list[AuditEntry] = []

        # Step 1: Normalize records into monthly facts
        facts = build_facts(
            records.income_sources,
            records.expenses,
            records.recurring_payments,
            records.investments,
            today,
        )
        self._log_step(
            audit_log,
            step="monthly_income",
            input_value=f"{sum(1 for s in records.income_sources if s.is_active)} active income sources",
            output_value=str(facts.monthly_income),
            source="Frequency normalizer",
        )
        self._log_step(
            audit_log,
            step="monthly_expenses",
            input_value=f"{len(records.expenses)} expenses, recurring={facts.monthly_recurring}",
            output_value=str(facts.monthly_expenses),
            source="Summary",
            notes="Previous month's spending, or recurring total when none was recorded",
        )

        # Step 2: Portfolio
        portfolio = portfolio_performance(records.investments)
        self._log_step(
            audit_log,
            step="portfolio",
            input_value=f"{len(records.investments)} positions",
            output_value=f"value={portfolio.total_value}, gain={portfolio.total_gain}",
            source="Investment performance calculator",
        )

        # Step 3: Budgets for the current month
        month_start, month_end = month_bounds(today)
        budgets = aggregate(
            records.expenses,
            records.budgets,
            month_start,
            month_end,
            near_limit_percent=self.config.thresholds.near_limit_percent,
        )
        self._log_step(
            audit_log,
            step="budget_consumption",
            input_value=f"{len(records.budgets)} budgets, {month_start.isoformat()}..{month_end.isoformat()}",
            output_value=", ".join(f"{b.category}={b.percentage}%" for b in budgets) or "none",
            source="Budget consumption aggregator",
        )

        # Step 4: Goals
        goals = progress_all(records.goals, today)
        self._log_step(
            audit_log,
            step="goal_progress",
            input_value=f"{len(records.goals)} goals",
            output_value=f"{sum(1 for g in goals if g.is_complete)} complete",
            source="Goal progress evaluator",
        )

        # Step 5: Projection
        scenario = self.scenario_for(
            monthly_net_income=facts.monthly_net,
            starting_investment_value=facts.total_investments,
            savings_rate_percent=savings_rate_percent,
            expected_annual_return_percent=expected_annual_return_percent,
            months=months,
            extra_monthly_savings=extra_monthly_savings,
        )
        projection = project(scenario)
        end = final_point(projection)
        self._log_step(
            audit_log,
            step="projection",
            input_value=(
                f"net={scenario.monthly_net_income}, rate={scenario.savings_rate_percent}%, "
                f"return={scenario.expected_annual_return_percent}%, months={scenario.months}"
            ),
            output_value=f"net_worth={end.net_worth}",
            source="Scenario projection engine",
        )

        # Step 6: Recommendations
        overdue = overdue_payments(records.recurring_payments, today)
        recommendations = recommend(
            facts,
            goal_progress=goals,
            overdue=overdue,
            thresholds=self.config.thresholds,
        )
        self._log_step(
            audit_log,
            step="recommendations",
            input_value=f"{len(goals)} goals, {len(overdue)} overdue payments",
            output_value=", ".join(r.severity.value for r in recommendations),
            source="Recommendation engine",
        )

        return FinancialPlan(
            as_of=today,
            facts=facts,
            portfolio=portfolio,
            budgets=budgets,
            goals=goals,
            projection=projection,
            recommendations=recommendations,
            savings_rate=savings_rate(facts),
            emergency_fund_months=emergency_fund_months(facts),
            overdue_payments=overdue,
            audit_log=audit_log,
        )
