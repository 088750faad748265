"""Goal progress evaluation.

Percentages are not clamped: a goal funded past its target reports more
than 100% and a negative remaining amount. Month counting only looks at the
calendar month, not the day, so a target later this month has zero months
remaining and the whole remaining amount is due now.
"""

from datetime import date
from typing import Iterable

import structlog

from .dates import months_between
from .models import Goal, GoalProgress
from .numeric import percentage_of

logger = structlog.get_logger()


def progress(goal: Goal, as_of: date) -> GoalProgress:
    """Evaluate a goal as of a date supplied by the caller.

    Args:
        goal: The goal to evaluate
        as_of: The caller's current date

    Returns:
        GoalProgress; deadline fields are None when the goal has no target date
    """
    percentage = percentage_of(goal.current_amount, goal.target_amount)
    remaining = goal.target_amount - goal.current_amount

    months_remaining = None
    monthly_needed = None
    days_remaining = None

    if goal.target_date is not None:
        months_remaining = max(0, months_between(as_of, goal.target_date))
        monthly_needed = remaining / months_remaining if months_remaining > 0 else remaining
        days_remaining = (goal.target_date - as_of).days

    return GoalProgress(
        goal_id=goal.id,
        name=goal.label,
        percentage=percentage,
        remaining=remaining,
        months_remaining=months_remaining,
        monthly_contribution_needed=monthly_needed,
        days_remaining=days_remaining,
    )


def progress_all(goals: Iterable[Goal], as_of: date) -> list[GoalProgress]:
    """Evaluate every goal, preserving input order."""
    results = [progress(goal, as_of) for goal in goals]
    logger.debug(
        "goals_evaluated",
        goals=len(results),
        complete=sum(1 for r in results if r.is_complete),
    )
    return results
