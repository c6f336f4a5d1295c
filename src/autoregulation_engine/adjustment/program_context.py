"""Goal pacing: progress summaries and the context adjustments read from them."""

from __future__ import annotations

import math
from datetime import date

from autoregulation_engine.math.rpe import round_half_up
from autoregulation_engine.models.enums import PACE_TOLERANCE_WEEKS, PaceVsPlan
from autoregulation_engine.models.program import (
    GoalProgressSummary,
    ProgramContext,
    ProgramGoal,
)


def compute_goal_summary(
    goal: ProgramGoal,
    current_value: float,
    target_value: float,
    as_of: date,
) -> GoalProgressSummary:
    """Summarise progress toward a goal's target value.

    Weeks elapsed count partial weeks as whole ones (minimum 1, capped at the
    program length). Pace compares the current value with the linear plan,
    allowing half a week of planned progress either way.

    Args:
        goal: The goal being tracked.
        current_value: Latest measured value for the goal metric.
        target_value: Value that marks the goal as complete.
        as_of: Injected "today".

    Returns:
        A GoalProgressSummary.

    Raises:
        ValueError: If target_value is not positive.
    """
    if target_value <= 0:
        raise ValueError(f"target_value must be positive, got {target_value}")

    total_weeks = max(1, goal.total_weeks)
    elapsed_days = (as_of - goal.start_date).days
    weeks_elapsed = max(1, math.ceil(elapsed_days / 7))

    percent = max(0, min(100, round_half_up(current_value / target_value * 100)))

    planned_per_week = target_value / total_weeks
    expected = planned_per_week * weeks_elapsed
    tolerance = planned_per_week * PACE_TOLERANCE_WEEKS
    if current_value > expected + tolerance:
        pace = PaceVsPlan.AHEAD
    elif current_value < expected - tolerance:
        pace = PaceVsPlan.BEHIND
    else:
        pace = PaceVsPlan.ON_TRACK

    return GoalProgressSummary(
        goal_id=goal.id,
        percent_complete=float(percent),
        weeks_elapsed=min(weeks_elapsed, total_weeks),
        total_weeks=total_weeks,
        pace_vs_plan=pace,
    )


def build_program_context(
    goal: ProgramGoal | None, summary: GoalProgressSummary | None
) -> ProgramContext | None:
    """Derive pacing context for a goal, or None without a goal and summary.

    ``progress_delta`` is percent complete minus the percentage of program
    weeks elapsed; positive means ahead of the linear plan.
    """
    if goal is None or summary is None:
        return None

    expected = summary.weeks_elapsed / summary.total_weeks * 100 if summary.total_weeks > 0 else 0.0
    return ProgramContext(
        goal=goal,
        summary=summary,
        progress_delta=summary.percent_complete - expected,
        is_ahead_of_schedule=summary.pace_vs_plan == PaceVsPlan.AHEAD,
        is_behind_schedule=summary.pace_vs_plan == PaceVsPlan.BEHIND,
        weeks_remaining=max(0, summary.total_weeks - summary.weeks_elapsed),
    )
