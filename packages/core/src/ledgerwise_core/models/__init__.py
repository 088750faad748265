"""Data models for ledgerwise-core.

This package provides:
- Record snapshots read from the record store (records.py)
- Calculator results, summaries and the planner output (results.py)
"""

from ledgerwise_core.models.records import (
    DEFAULT_EXPENSE_CATEGORY,
    RECURRING_FREQUENCIES,
    Budget,
    Expense,
    FinancialRecords,
    Frequency,
    Goal,
    IncomeSource,
    Investment,
    ProjectionScenario,
    RecurringPayment,
)
from ledgerwise_core.models.results import (
    AuditEntry,
    BudgetConsumption,
    BudgetStatus,
    CalendarEvent,
    CalendarEventType,
    CategoryTotal,
    DailySpending,
    DueStatus,
    FinancialFacts,
    FinancialPlan,
    GoalProgress,
    InvestmentPerformance,
    MonthlyCashFlow,
    PaymentTransition,
    PortfolioPerformance,
    ProjectionPoint,
    Recommendation,
    RecommendationCategory,
    Severity,
    TaxEstimate,
)

__all__ = [
    # Records
    "DEFAULT_EXPENSE_CATEGORY",
    "RECURRING_FREQUENCIES",
    "Budget",
    "Expense",
    "FinancialRecords",
    "Frequency",
    "Goal",
    "IncomeSource",
    "Investment",
    "ProjectionScenario",
    "RecurringPayment",
    # Results
    "AuditEntry",
    "BudgetConsumption",
    "BudgetStatus",
    "CalendarEvent",
    "CalendarEventType",
    "CategoryTotal",
    "DailySpending",
    "DueStatus",
    "FinancialFacts",
    "FinancialPlan",
    "GoalProgress",
    "InvestmentPerformance",
    "MonthlyCashFlow",
    "PaymentTransition",
    "PortfolioPerformance",
    "ProjectionPoint",
    "Recommendation",
    "RecommendationCategory",
    "Severity",
    "TaxEstimate",
]
