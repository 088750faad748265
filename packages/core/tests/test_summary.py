"""Tests for the financial summary and dashboard aggregates."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerwise_core import (
    Expense,
    IncomeSource,
    Investment,
    LedgerwiseValidationError,
    RecurringPayment,
    build_facts,
)
from ledgerwise_core.summary import (
    cash_flow_history,
    category_breakdown,
    cumulative_spending,
    expenses_in_month,
    month_over_month_change,
    total_spent,
)

TODAY = date(2025, 3, 15)


@pytest.fixture
def income_sources():
    return [
        IncomeSource(id="salary", amount=Decimal("1000"), frequency="weekly"),
        IncomeSource(id="old-job", amount=Decimal("800"), frequency="monthly", is_active=False),
    ]


@pytest.fixture
def recurring_payments():
    return [
        RecurringPayment(id="rent", amount=Decimal("1200"), frequency="monthly", next_due_date=date(2025, 4, 1)),
    ]


@pytest.fixture
def investments():
    return [
        Investment(id="acme", quantity=Decimal("2"), purchase_price=Decimal("100"), current_price=Decimal("150")),
    ]


@pytest.fixture
def expenses():
    return [
        Expense(amount=Decimal("1000"), category="Rent", date=date(2025, 2, 1)),
        Expense(amount=Decimal("300"), category="Food", date=date(2025, 2, 14)),
        Expense(amount=Decimal("200"), category="Food", date=date(2025, 2, 28)),
        Expense(amount=Decimal("50"), category="Food", date=date(2025, 3, 2)),
        Expense(amount=Decimal("25"), category="Fun", date=date(2025, 3, 2)),
        Expense(amount=Decimal("75"), category="Transport", date=date(2025, 3, 5)),
    ]


class TestBuildFacts:
    """Tests for build_facts."""

    def test_facts_from_records(self, income_sources, expenses, recurring_payments, investments):
        facts = build_facts(income_sources, expenses, recurring_payments, investments, TODAY)

        assert facts.monthly_income == Decimal("4330")
        assert facts.monthly_expenses == Decimal("1500")
        assert facts.monthly_recurring == Decimal("1200")
        assert facts.total_investments == Decimal("300")
        assert facts.investment_gains == Decimal("100")
        assert facts.monthly_net == Decimal("2830")

    def test_falls_back_to_recurring_total(self, income_sources, recurring_payments, investments):
        """Without spending last month, the recurring total stands in for expenses."""
        current_only = [Expense(amount=Decimal("90"), category="Food", date=date(2025, 3, 1))]

        facts = build_facts(income_sources, current_only, recurring_payments, investments, TODAY)

        assert facts.monthly_expenses == Decimal("1200")

    def test_january_uses_previous_december(self, expenses):
        december = [Expense(amount=Decimal("640"), category="Gifts", date=date(2024, 12, 24))]

        facts = build_facts([], expenses + december, [], [], date(2025, 1, 10))

        assert facts.monthly_expenses == Decimal("640")

    def test_empty_records(self):
        facts = build_facts([], [], [], [], TODAY)

        assert facts.monthly_income == Decimal("0")
        assert facts.monthly_expenses == Decimal("0")
        assert facts.monthly_net == Decimal("0")


class TestCategoryBreakdown:
    """Tests for category_breakdown."""

    def test_sorted_largest_first(self, expenses):
        result = category_breakdown(expenses)

        assert [(c.category, c.total) for c in result] == [
            ("Rent", Decimal("1000")),
            ("Food", Decimal("550")),
            ("Transport", Decimal("75")),
            ("Fun", Decimal("25")),
        ]

    def test_limit(self, expenses):
        assert [c.category for c in category_breakdown(expenses, limit=2)] == ["Rent", "Food"]

    def test_ties_ordered_by_name(self):
        tied = [
            Expense(amount=Decimal("10"), category="Zoo", date=TODAY),
            Expense(amount=Decimal("10"), category="Art", date=TODAY),
        ]
        assert [c.category for c in category_breakdown(tied)] == ["Art", "Zoo"]


class TestHistory:
    """Tests for the month-based helpers."""

    def test_expenses_in_month(self, expenses):
        march = expenses_in_month(expenses, 2025, 3)
        assert total_spent(march) == Decimal("150")

    def test_month_over_month_change(self):
        assert month_over_month_change(Decimal("1200"), Decimal("1000")) == Decimal("20")
        assert month_over_month_change(Decimal("800"), Decimal("1000")) == Decimal("-20")

    def test_month_over_month_without_baseline(self):
        assert month_over_month_change(Decimal("500"), Decimal("0")) == Decimal("0")

    def test_cash_flow_history(self, income_sources, expenses):
        history = cash_flow_history(income_sources, expenses, TODAY, months=3)

        assert [(h.year, h.month) for h in history] == [(2025, 1), (2025, 2), (2025, 3)]
        assert [h.expenses for h in history] == [Decimal("0"), Decimal("1500"), Decimal("150")]
        assert all(h.income == Decimal("4330") for h in history)
        assert history[1].net == Decimal("2830")

    def test_cash_flow_history_crosses_year(self):
        history = cash_flow_history([], [], date(2025, 1, 20), months=2)
        assert [(h.year, h.month) for h in history] == [(2024, 12), (2025, 1)]

    def test_cash_flow_history_requires_a_month(self):
        with pytest.raises(LedgerwiseValidationError) as exc_info:
            cash_flow_history([], [], TODAY, months=0)

        assert exc_info.value.details["field"] == "months"

    def test_cumulative_spending(self, expenses):
        result = cumulative_spending(expenses, date(2025, 3, 5))

        assert [r.day for r in result] == [1, 2, 3, 4, 5]
        assert [r.daily for r in result] == [
            Decimal("0"),
            Decimal("75"),
            Decimal("0"),
            Decimal("0"),
            Decimal("75"),
        ]
        assert [r.cumulative for r in result] == [
            Decimal("0"),
            Decimal("75"),
            Decimal("75"),
            Decimal("75"),
            Decimal("150"),
        ]
