"""
Adaptation State

A short countdown started when the user logs an off-plan meal. While it
runs, each new day's plan gets a few extra workout minutes and the counter
drops by one: Inactive -> Active(n) -> ... -> Active(1) -> Inactive.
It does not look at whether the user actually followed the plan.
"""

from collections import namedtuple

from constants import ADAPTATION_BONUS_MINUTES

AdaptationState = namedtuple('AdaptationState', ['active', 'days_remaining'])

INACTIVE = AdaptationState(False, 0)


def activate(state, days=3):
    """Start a countdown of ``days``. A running countdown is left alone."""
    if state.active and state.days_remaining > 0:
        return state
    if days <= 0:
        return INACTIVE
    return AdaptationState(True, days)


def advance(previous):
    """
    Step from the previous day's state to the next day's.

    Returns:
        (bonus_minutes, next_state, carried) where ``carried`` tells the
        caller whether the new plan's state must be written.
    """
    if previous.active and previous.days_remaining > 0:
        remaining = previous.days_remaining - 1
        next_state = AdaptationState(True, remaining) if remaining > 0 else INACTIVE
        return ADAPTATION_BONUS_MINUTES, next_state, True
    return 0, INACTIVE, False


def from_plan(plan):
    """Read the state stored on a DailyPlan row (None means no plan)."""
    if plan is None or not plan.adaptation_active:
        return INACTIVE
    return AdaptationState(True, plan.adaptation_days_remaining or 0)
