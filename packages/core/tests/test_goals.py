"""Tests for goal progress evaluation."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from ledgerwise_core import Goal, progress
from ledgerwise_core.goals import progress_all

AS_OF = date(2025, 1, 10)


@pytest.fixture
def vacation_goal():
    """Half-funded goal due in six months."""
    return Goal(
        id="vacation",
        name="Summer vacation",
        target_amount=Decimal("1200"),
        current_amount=Decimal("600"),
        target_date=date(2025, 7, 10),
    )


class TestProgress:
    """Tests for progress."""

    def test_half_funded_example(self, vacation_goal):
        result = progress(vacation_goal, AS_OF)

        assert result.percentage == Decimal("50")
        assert result.remaining == Decimal("600")
        assert result.months_remaining == 6
        assert result.monthly_contribution_needed == Decimal("100")
        assert result.days_remaining == 181
        assert result.name == "Summer vacation"
        assert result.is_complete is False
        assert result.has_deadline is True

    def test_no_target_date(self):
        """Goals without a deadline have no deadline-derived fields."""
        goal = Goal(id="rainy-day", target_amount=Decimal("1000"), current_amount=Decimal("250"))

        result = progress(goal, AS_OF)

        assert result.percentage == Decimal("25")
        assert result.months_remaining is None
        assert result.monthly_contribution_needed is None
        assert result.days_remaining is None
        assert result.has_deadline is False
        assert result.name == "rainy-day"

    def test_overfunded_goal(self):
        """Progress is not clamped past 100%."""
        goal = Goal(id="car", target_amount=Decimal("1000"), current_amount=Decimal("1500"))

        result = progress(goal, AS_OF)

        assert result.percentage == Decimal("150")
        assert result.remaining == Decimal("-500")
        assert result.is_complete is True

    def test_target_later_this_month(self):
        """A deadline within the current month needs the whole remainder now."""
        goal = Goal(
            id="gift",
            target_amount=Decimal("300"),
            current_amount=Decimal("100"),
            target_date=date(2025, 1, 25),
        )

        result = progress(goal, AS_OF)

        assert result.months_remaining == 0
        assert result.monthly_contribution_needed == Decimal("200")
        assert result.days_remaining == 15

    def test_past_deadline(self):
        goal = Goal(
            id="late",
            target_amount=Decimal("300"),
            current_amount=Decimal("0"),
            target_date=date(2024, 11, 1),
        )

        result = progress(goal, AS_OF)

        assert result.months_remaining == 0
        assert result.monthly_contribution_needed == Decimal("300")
        assert result.days_remaining < 0

    def test_day_of_month_ignored(self):
        """Month counting only looks at calendar months."""
        goal = Goal(
            id="g",
            target_amount=Decimal("100"),
            target_date=date(2025, 2, 1),
        )

        assert progress(goal, date(2025, 1, 31)).months_remaining == 1

    def test_repeatable(self, vacation_goal):
        """The same goal and date always give the same progress."""
        assert progress(vacation_goal, AS_OF) == progress(vacation_goal, AS_OF)

    def test_progress_all_preserves_order(self, vacation_goal):
        other = Goal(id="other", target_amount=Decimal("10"))

        results = progress_all([other, vacation_goal], AS_OF)

        assert [r.goal_id for r in results] == ["other", "vacation"]


class TestGoalModel:
    """Tests for Goal validation."""

    def test_zero_target_rejected(self):
        with pytest.raises(ValidationError):
            Goal(id="g", target_amount=Decimal("0"))

    def test_label_falls_back_to_id(self):
        assert Goal(id="g", target_amount=Decimal("5")).label == "g"
