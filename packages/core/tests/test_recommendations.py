"""Tests for the recommendation engine."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerwise_core import (
    FinancialFacts,
    GoalProgress,
    RecurringPayment,
    Severity,
    recommend,
)
from ledgerwise_core.config import ThresholdConfig
from ledgerwise_core.models import RecommendationCategory
from ledgerwise_core.recommendations import (
    DEFAULT_THRESHOLDS,
    emergency_fund_months,
    savings_rate,
)


def _facts(income="5000", expenses="4000", investments="30000"):
    return FinancialFacts(
        monthly_income=Decimal(income),
        monthly_expenses=Decimal(expenses),
        total_investments=Decimal(investments),
    )


def _by_category(recommendations, category):
    return [r for r in recommendations if r.category == category]


@pytest.fixture
def thresholds():
    """Default thresholds, independent of the environment."""
    return ThresholdConfig(
        near_limit_percent=Decimal("80"),
        savings_rate_warning=Decimal("10"),
        savings_rate_success=Decimal("20"),
        emergency_fund_warning_months=Decimal("3"),
        emergency_fund_success_months=Decimal("6"),
        goal_contribution_ratio=Decimal("0.5"),
    )


class TestSavingsRate:
    """Tests for the savings-rate rule."""

    @pytest.mark.parametrize(
        "income,expenses,expected",
        [
            ("1000", "800", Severity.SUCCESS),
            ("100000", "80001", Severity.WARNING),
            ("1000", "900", Severity.WARNING),
            ("100000", "90001", Severity.DANGER),
            ("1000", "1200", Severity.DANGER),
        ],
    )
    def test_boundaries(self, thresholds, income, expenses, expected):
        """Exactly 20% is success; 19.999% is warning; below 10% is danger."""
        recs = recommend(_facts(income, expenses), thresholds=thresholds)

        [rec] = _by_category(recs, RecommendationCategory.SAVINGS_RATE)
        assert rec.severity == expected

    def test_zero_income(self, thresholds):
        facts = _facts(income="0", expenses="500")

        assert savings_rate(facts) == Decimal("0")
        [rec] = _by_category(recommend(facts, thresholds=thresholds), RecommendationCategory.SAVINGS_RATE)
        assert rec.severity == Severity.DANGER

    def test_success_message_reports_rate(self, thresholds):
        [rec] = _by_category(
            recommend(_facts("1000", "750"), thresholds=thresholds),
            RecommendationCategory.SAVINGS_RATE,
        )
        assert "25.0%" in rec.message

    def test_custom_thresholds(self):
        """A stricter success threshold downgrades a 20% rate."""
        strict = ThresholdConfig(savings_rate_success=Decimal("30"))

        [rec] = _by_category(
            recommend(_facts("1000", "800"), thresholds=strict),
            RecommendationCategory.SAVINGS_RATE,
        )
        assert rec.severity == Severity.WARNING


class TestEmergencyFund:
    """Tests for the emergency-fund rule."""

    @pytest.mark.parametrize(
        "investments,expected",
        [
            ("6000", Severity.SUCCESS),
            ("5999", Severity.WARNING),
            ("3000", Severity.WARNING),
            ("2999", Severity.DANGER),
        ],
    )
    def test_boundaries(self, thresholds, investments, expected):
        """Exactly 6 months is success; just under is warning; under 3 is danger."""
        recs = recommend(_facts("2000", "1000", investments), thresholds=thresholds)

        [rec] = _by_category(recs, RecommendationCategory.EMERGENCY_FUND)
        assert rec.severity == expected

    def test_zero_expenses_is_insufficient_data(self, thresholds):
        facts = _facts(expenses="0", investments="100000")

        assert emergency_fund_months(facts) == Decimal("0")
        [rec] = _by_category(recommend(facts, thresholds=thresholds), RecommendationCategory.EMERGENCY_FUND)
        assert rec.severity == Severity.DANGER
        assert rec.message.startswith("Not enough expense data")

    def test_months_value(self):
        assert emergency_fund_months(_facts(expenses="1000", investments="4500")) == Decimal("4.5")


class TestGoalWarnings:
    """Tests for goal contribution warnings."""

    def _goal(self, needed, months=6):
        return GoalProgress(
            goal_id="car",
            name="New car",
            percentage=Decimal("10"),
            remaining=Decimal("3600"),
            months_remaining=months,
            monthly_contribution_needed=None if needed is None else Decimal(needed),
        )

    def test_strained_goal_warns(self, thresholds):
        """Needing more than half the monthly net produces a warning."""
        facts = _facts("3000", "2000")

        recs = recommend(facts, goal_progress=[self._goal("600")], thresholds=thresholds)

        [rec] = _by_category(recs, RecommendationCategory.GOAL)
        assert rec.severity == Severity.WARNING
        assert rec.goal_id == "car"
        assert 'Goal "New car" requires 600.00/month' in rec.message

    def test_exactly_half_does_not_warn(self, thresholds):
        recs = recommend(_facts("3000", "2000"), goal_progress=[self._goal("500")], thresholds=thresholds)
        assert _by_category(recs, RecommendationCategory.GOAL) == []

    def test_goal_without_deadline_ignored(self, thresholds):
        recs = recommend(
            _facts("3000", "2000"),
            goal_progress=[self._goal(None, months=None)],
            thresholds=thresholds,
        )
        assert _by_category(recs, RecommendationCategory.GOAL) == []


class TestOverdueBills:
    """Tests for the overdue-bills rule."""

    def test_single_overdue_payment(self, thresholds):
        overdue = [
            RecurringPayment(id="rent", amount=Decimal("1200"), next_due_date=date(2025, 3, 1)),
        ]

        recs = recommend(_facts(), overdue=overdue, thresholds=thresholds)

        [rec] = _by_category(recs, RecommendationCategory.OVERDUE_BILLS)
        assert rec.severity == Severity.DANGER
        assert rec.message.startswith("1 recurring payment is overdue, totalling 1,200.00")

    def test_no_overdue(self, thresholds):
        recs = recommend(_facts(), thresholds=thresholds)
        assert _by_category(recs, RecommendationCategory.OVERDUE_BILLS) == []


class TestOrdering:
    """Tests for recommendation ordering."""

    def test_fixed_order(self, thresholds):
        overdue = [RecurringPayment(id="x", amount=Decimal("5"), next_due_date=date(2025, 3, 1))]
        goal = GoalProgress(
            goal_id="g",
            name="G",
            percentage=Decimal("0"),
            remaining=Decimal("10000"),
            months_remaining=1,
            monthly_contribution_needed=Decimal("10000"),
        )

        recs = recommend(_facts(), goal_progress=[goal], overdue=overdue, thresholds=thresholds)

        assert [r.category for r in recs] == [
            RecommendationCategory.SAVINGS_RATE,
            RecommendationCategory.EMERGENCY_FUND,
            RecommendationCategory.GOAL,
            RecommendationCategory.OVERDUE_BILLS,
        ]

    def test_recomputed_each_call(self, thresholds):
        facts = _facts()
        assert recommend(facts, thresholds=thresholds) == recommend(facts, thresholds=thresholds)


class TestDefaultThresholds:
    """Tests for the thresholds used when none are passed."""

    def test_defaults_match_documented_values(self):
        assert DEFAULT_THRESHOLDS.savings_rate_warning == Decimal("10")
        assert DEFAULT_THRESHOLDS.savings_rate_success == Decimal("20")
        assert DEFAULT_THRESHOLDS.emergency_fund_warning_months == Decimal("3")
        assert DEFAULT_THRESHOLDS.emergency_fund_success_months == Decimal("6")
        assert DEFAULT_THRESHOLDS.goal_contribution_ratio == Decimal("0.5")

    def test_environment_does_not_change_result(self, monkeypatch):
        """Without explicit thresholds, the result depends only on the arguments."""
        facts = _facts("1000", "800")
        before = recommend(facts)

        monkeypatch.setenv("LEDGERWISE_THRESHOLD_SAVINGS_RATE_SUCCESS", "50")
        monkeypatch.setenv("LEDGERWISE_THRESHOLD_EMERGENCY_FUND_SUCCESS_MONTHS", "600")
        after = recommend(facts)

        assert after == before
        [rec] = _by_category(after, RecommendationCategory.SAVINGS_RATE)
        assert rec.severity == Severity.SUCCESS
