"""Result models produced by the Ledgerwise engine.

Each calculator returns one of these frozen models. None of them carries a
wall-clock timestamp, so identical inputs always produce identical results.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .records import Expense, RecurringPayment


class _Result(BaseModel):
    model_config = {"frozen": True}


# =============================================================================
# ENUMERATIONS
# =============================================================================


class BudgetStatus(str, Enum):
    """Budget consumption state derived from the clamped percentage."""

    ON_TRACK = "on_track"
    NEAR_LIMIT = "near_limit"
    OVER_BUDGET = "over_budget"


class DueStatus(str, Enum):
    """Urgency of a recurring payment relative to today."""

    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"
    SCHEDULED = "scheduled"


class Severity(str, Enum):
    """Severity of an advisory recommendation."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


class RecommendationCategory(str, Enum):
    """Which rule produced a recommendation."""

    SAVINGS_RATE = "savings_rate"
    EMERGENCY_FUND = "emergency_fund"
    GOAL = "goal"
    OVERDUE_BILLS = "overdue_bills"


class CalendarEventType(str, Enum):
    """Kinds of dated events shown on the financial calendar."""

    PAYMENT = "payment"
    INCOME = "income"
    GOAL = "goal"


# =============================================================================
# COMPONENT RESULTS
# =============================================================================


class PaymentTransition(_Result):
    """Outcome of a Paid or Skip action on a recurring payment."""

    payment: RecurringPayment = Field(
        description="New payment value with next_due_date advanced one step"
    )
    expense: Optional[Expense] = Field(
        default=None,
        description="Expense fact emitted by MarkPaid; None for Skip",
    )


class BudgetConsumption(_Result):
    """Spending against one budget within a period."""

    budget_id: str
    category: str
    budget_amount: Decimal
    spent: Decimal
    percentage: int = Field(
        ge=0,
        le=100,
        description="Rounded percentage clamped to 100 for progress bars",
    )
    raw_percentage: Decimal = Field(
        description="Unrounded, unclamped spent / budget x 100",
    )
    remaining: Decimal = Field(description="budget - spent; negative when over")
    status: BudgetStatus


class InvestmentPerformance(_Result):
    """Cost basis versus market value for one position."""

    investment_id: str
    current_value: Decimal
    cost_basis: Decimal
    gain: Decimal
    gain_percentage: Decimal
    is_positive: bool


class PortfolioPerformance(_Result):
    """Aggregate performance across all positions."""

    total_value: Decimal
    total_cost_basis: Decimal
    total_gain: Decimal
    total_gain_percentage: Decimal
    positions: list[InvestmentPerformance] = Field(default_factory=list)


class GoalProgress(_Result):
    """Progress of a goal as of a given date.

    The deadline-derived fields are None when the goal has no target date.
    """

    goal_id: str
    name: str
    percentage: Decimal
    remaining: Decimal
    months_remaining: Optional[int] = None
    monthly_contribution_needed: Optional[Decimal] = None
    days_remaining: Optional[int] = None

    @computed_field
    @property
    def is_complete(self) -> bool:
        """A goal is complete once it reaches 100%."""
        return self.percentage >= 100

    @computed_field
    @property
    def has_deadline(self) -> bool:
        return self.months_remaining is not None


class ProjectionPoint(_Result):
    """Projected balances at the end of one month."""

    month_index: int = Field(ge=0)
    cumulative_savings: Decimal
    investment_value: Decimal
    net_worth: Decimal


class Recommendation(_Result):
    """An advisory message with a severity."""

    severity: Severity
    category: RecommendationCategory
    message: str
    goal_id: Optional[str] = None


# =============================================================================
# SUMMARY RESULTS
# =============================================================================


class FinancialFacts(_Result):
    """Normalized monthly figures that feed projection and recommendations."""

    monthly_income: Decimal = Decimal("0")
    monthly_expenses: Decimal = Decimal("0")
    monthly_recurring: Decimal = Decimal("0")
    total_investments: Decimal = Decimal("0")
    investment_gains: Decimal = Decimal("0")

    @computed_field
    @property
    def monthly_net(self) -> Decimal:
        """Income left after expenses each month."""
        return self.monthly_income - self.monthly_expenses


class CategoryTotal(_Result):
    """Total spent in one category."""

    category: str
    total: Decimal


class MonthlyCashFlow(_Result):
    """Income versus expenses for one calendar month."""

    year: int
    month: int
    income: Decimal
    expenses: Decimal

    @computed_field
    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


class DailySpending(_Result):
    """Spending on one day, with the running total for the month."""

    day: int
    daily: Decimal
    cumulative: Decimal


class CalendarEvent(_Result):
    """A dated money event within a month."""

    date: date
    event_type: CalendarEventType
    name: str
    amount: Decimal
    source_id: str


class TaxEstimate(_Result):
    """Estimated annual income tax under progressive brackets."""

    gross_income: Decimal
    tax_amount: Decimal
    net_income: Decimal
    effective_rate: Decimal = Field(description="Tax as a percentage of gross income")
    country: str


# =============================================================================
# PLANNER RESULT
# =============================================================================


class AuditEntry(_Result):
    """Audit log entry for calculation transparency."""

    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None


class FinancialPlan(_Result):
    """Complete planner output: facts, forecast, advice and how they were derived."""

    as_of: date
    facts: FinancialFacts
    portfolio: PortfolioPerformance
    budgets: list[BudgetConsumption] = Field(default_factory=list)
    goals: list[GoalProgress]
    projection: list[ProjectionPoint]
    recommendations: list[Recommendation]
    savings_rate: Decimal
    emergency_fund_months: Decimal
    overdue_payments: list[RecurringPayment] = Field(default_factory=list)
    audit_log: list[AuditEntry] = Field(default_factory=list)
