"""Ledgerwise Core - Financial aggregation and projection engine."""

__version__ = "0.1.0"

from .budget import aggregate, toggle_category_filter
from .exceptions import (
    ConfigurationError,
    InvalidBudgetAmountError,
    InvalidPaymentStateError,
    InvalidProjectionHorizonError,
    LedgerwiseError,
    LedgerwiseValidationError,
    UnsupportedFrequencyError,
)
from .frequency import monthly_equivalent, parse_frequency, total_monthly_income
from .goals import progress
from .investments import performance, portfolio_performance
from .models import (
    Budget,
    BudgetConsumption,
    BudgetStatus,
    DueStatus,
    Expense,
    FinancialFacts,
    FinancialPlan,
    FinancialRecords,
    Frequency,
    Goal,
    GoalProgress,
    IncomeSource,
    Investment,
    InvestmentPerformance,
    PaymentTransition,
    PortfolioPerformance,
    ProjectionPoint,
    ProjectionScenario,
    Recommendation,
    RecurringPayment,
    Severity,
)
from .planner import FinancialPlanner
from .projection import project
from .recommendations import recommend
from .recurring import advance, classify_due, mark_paid, skip
from .summary import build_facts

__all__ = [
    # Operations
    "advance",
    "aggregate",
    "build_facts",
    "classify_due",
    "mark_paid",
    "monthly_equivalent",
    "parse_frequency",
    "performance",
    "portfolio_performance",
    "progress",
    "project",
    "recommend",
    "skip",
    "toggle_category_filter",
    "total_monthly_income",
    "FinancialPlanner",
    # Models
    "Budget",
    "BudgetConsumption",
    "BudgetStatus",
    "DueStatus",
    "Expense",
    "FinancialFacts",
    "FinancialPlan",
    "FinancialRecords",
    "Frequency",
    "Goal",
    "GoalProgress",
    "IncomeSource",
    "Investment",
    "InvestmentPerformance",
    "PaymentTransition",
    "PortfolioPerformance",
    "ProjectionPoint",
    "ProjectionScenario",
    "Recommendation",
    "RecurringPayment",
    "Severity",
    # Errors
    "ConfigurationError",
    "InvalidBudgetAmountError",
    "InvalidPaymentStateError",
    "InvalidProjectionHorizonError",
    "LedgerwiseError",
    "LedgerwiseValidationError",
    "UnsupportedFrequencyError",
]
