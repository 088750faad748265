"""Record models consumed by the Ledgerwise engine.

These are the snapshot shapes a record store hands to the engine: income
sources, expenses, budgets, recurring payments, investments and goals, plus
the projection scenario input. Every model is frozen and rejects unknown
fields so malformed rows fail at the boundary instead of propagating missing
values into the calculations.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMERATIONS
# =============================================================================


class Frequency(str, Enum):
    """Cadence of a recurring amount."""

    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"
    ONE_TIME = "one-time"

    @classmethod
    def _missing_(cls, value):
        """Accept spelling variants such as ``bi_weekly`` or ``Bi-Weekly``."""
        if not isinstance(value, str):
            return None
        key = "".join(ch for ch in value.strip().lower() if ch.isalnum())
        aliases = {
            "biweekly": cls.BI_WEEKLY,
            "fortnightly": cls.BI_WEEKLY,
            "onetime": cls.ONE_TIME,
            "once": cls.ONE_TIME,
            "yearly": cls.ANNUALLY,
            "annual": cls.ANNUALLY,
        }
        for member in cls:
            if member.value.replace("-", "") == key:
                return member
        return aliases.get(key)


RECURRING_FREQUENCIES = frozenset(
    {
        Frequency.WEEKLY,
        Frequency.BI_WEEKLY,
        Frequency.MONTHLY,
        Frequency.QUARTERLY,
        Frequency.ANNUALLY,
    }
)

DEFAULT_EXPENSE_CATEGORY = "Other"


class _Record(BaseModel):
    """Shared configuration: immutable, no undeclared fields."""

    model_config = {"frozen": True, "extra": "forbid"}


def _coerce_frequency(v):
    if isinstance(v, Frequency):
        return v
    return Frequency(v)


# =============================================================================
# INCOME AND EXPENSES
# =============================================================================


class IncomeSource(_Record):
    """A source of income with its payment cadence."""

    id: str
    amount: Decimal = Field(ge=0, description="Amount received per occurrence")
    frequency: Frequency = Frequency.MONTHLY
    is_active: bool = Field(
        default=True,
        description="Only active sources contribute to monthly income",
    )
    start_date: Optional[date] = None
    name: Optional[str] = None

    @field_validator("frequency", mode="before")
    @classmethod
    def coerce_frequency(cls, v):
        """Normalize frequency spellings to the enum."""
        return _coerce_frequency(v)


class Expense(_Record):
    """A historical spending fact.

    ``is_recurring`` is informational only; it does not link back to a
    RecurringPayment.
    """

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "id": "exp-1",
                    "amount": "42.50",
                    "category": "Food",
                    "date": "2025-01-15",
                    "is_recurring": False,
                }
            ]
        },
    }

    id: Optional[str] = Field(
        default=None,
        description="Store identifier; None for facts the engine just emitted",
    )
    amount: Decimal = Field(ge=0)
    category: str
    date: date
    is_recurring: bool = False
    description: Optional[str] = None


class Budget(_Record):
    """A spending limit for one category.

    The amount is deliberately unconstrained here; the aggregator rejects
    non-positive amounts when it needs to divide by them.
    """

    id: str
    category: str
    amount: Decimal
    period: str = "monthly"


# =============================================================================
# RECURRING PAYMENTS
# =============================================================================


class RecurringPayment(_Record):
    """A recurring obligation awaiting its next due date.

    ``next_due_date`` is always the next unresolved occurrence. It only moves
    forward, one cadence step per Paid or Skip action.
    """

    id: str
    amount: Decimal = Field(ge=0)
    frequency: Frequency = Frequency.MONTHLY
    category: Optional[str] = None
    next_due_date: date
    is_active: bool = True
    name: Optional[str] = None

    @field_validator("frequency", mode="before")
    @classmethod
    def coerce_frequency(cls, v):
        """Normalize frequency spellings to the enum."""
        return _coerce_frequency(v)

    @field_validator("frequency")
    @classmethod
    def reject_one_time(cls, v: Frequency) -> Frequency:
        """Recurring payments cannot be one-time."""
        if v not in RECURRING_FREQUENCIES:
            raise ValueError(f"Recurring payments cannot use frequency {v.value!r}")
        return v


# =============================================================================
# INVESTMENTS AND GOALS
# =============================================================================


class Investment(_Record):
    """A held position. Both prices are supplied by the caller."""

    id: str
    quantity: Decimal = Field(gt=0)
    purchase_price: Decimal = Field(ge=0)
    current_price: Decimal = Field(ge=0)
    purchase_date: Optional[date] = None
    name: Optional[str] = None


class Goal(_Record):
    """A savings target, optionally with a deadline.

    ``current_amount`` may exceed ``target_amount``; the goal then simply
    counts as complete.
    """

    id: str
    target_amount: Decimal = Field(gt=0)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)
    target_date: Optional[date] = None
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or self.id


# =============================================================================
# PROJECTION INPUT
# =============================================================================


class ProjectionScenario(_Record):
    """Inputs for a multi-month savings and investment projection.

    Rates are percentages and are not range checked; the horizon is checked
    by the projection engine.
    """

    savings_rate_percent: Decimal
    expected_annual_return_percent: Decimal
    months: int
    extra_monthly_savings: Decimal = Decimal("0")
    starting_investment_value: Decimal = Decimal("0")
    monthly_net_income: Decimal


class FinancialRecords(_Record):
    """One user's record snapshot, as read from the record store."""

    income_sources: list[IncomeSource] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    budgets: list[Budget] = Field(default_factory=list)
    recurring_payments: list[RecurringPayment] = Field(default_factory=list)
    investments: list[Investment] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
