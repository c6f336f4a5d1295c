"""Description builder: best-effort prose layered over structured adjustments.

The structured fields of an adjusted WorkoutPrescription (intensity,
duration, type) are authoritative. Everything here only keeps the free-text
description and notes consistent with them.
"""

from __future__ import annotations

import re

from autoregulation_engine.math.mesocycle import MESOCYCLE_PHASE_PROFILES
from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.enums import (
    PROGRAM_CONTEXT_GOOD_RECOVERY,
    AdjustmentType,
    IntensityLevel,
)
from autoregulation_engine.models.program import ProgramContext

_INTENSITY_WORDS = re.compile(
    r"high[- ]intensity|intense|challenging|hard|moderate|medium|light|easy|gentle",
    re.IGNORECASE,
)
_HARD_EFFORT_WORDS = re.compile(r"intervals|sprints|heavy", re.IGNORECASE)
_DURATION_TEXT = re.compile(r"\d+(?:-\d+)?\s*minutes?", re.IGNORECASE)

_LOW_LEVELS = frozenset({IntensityLevel.VERY_LOW, IntensityLevel.LOW})


def rewrite_for_intensity(description: str, level: IntensityLevel) -> str:
    """Swap effort words in ``description`` for the new intensity label."""
    label = level.label.lower()
    rewritten = _INTENSITY_WORDS.sub(label, description)
    if level in _LOW_LEVELS:
        rewritten = _HARD_EFFORT_WORDS.sub("easy pace", rewritten)
    return rewritten


def rewrite_for_duration(description: str, duration: str) -> str:
    """Replace any "N minutes" / "N-M minutes" mention with ``duration``."""
    return _DURATION_TEXT.sub(duration, description)


def program_context_sentence(
    context: ProgramContext,
    adjustment_type: AdjustmentType,
    recovery: float,
) -> str:
    """Pick at most one pacing sentence for the adjusted description.

    Priority: behind schedule with good recovery (unless skipping), then
    ahead of schedule on an intensity change, then a skip while behind.
    Returns an empty string when none applies.
    """
    title = context.goal.display_title
    delta = context.progress_delta

    if (
        context.is_behind_schedule
        and recovery > PROGRAM_CONTEXT_GOOD_RECOVERY
        and adjustment_type != AdjustmentType.SKIP
    ):
        return (
            f" Note: You're {abs(delta):.0f}% behind on your {title} goal"
            f" - good recovery allows for focused effort."
        )
    if context.is_ahead_of_schedule and adjustment_type == AdjustmentType.INTENSITY:
        return (
            f" Note: You're {delta:.0f}% ahead of schedule on your {title} goal"
            f" - can afford to prioritize recovery."
        )
    if adjustment_type == AdjustmentType.SKIP and context.is_behind_schedule:
        return (
            f" Note: Despite being behind on your {title} goal,"
            f" recovery is prioritized for long-term success."
        )
    return ""


def build_adjustment_notes(
    reason: str, analysis: ProgramAwareAnalysis | None = None
) -> tuple[str, ...]:
    """Notes attached to an adjusted workout.

    Always starts with the adjustment reason; with an analysis, follows with
    the volume change, substitution guidance, current phase and the
    analysis' own notes, in that order.
    """
    notes = [f"Auto-adjusted: {reason}"]
    if analysis is None:
        return tuple(notes)

    notes.append(f"Volume change: {analysis.volume_change_pct:+d}%")
    notes.extend(f"Substitution: {s}" for s in analysis.exercise_substitutions)
    phase_name = MESOCYCLE_PHASE_PROFILES[analysis.current_phase].name
    notes.append(f"Phase: {phase_name}")
    notes.extend(analysis.notes)
    return tuple(notes)
