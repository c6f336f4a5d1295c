"""Mesocycle phase resolution for block-periodized programs.

A mesocycle runs accumulation → intensification → realization and closes
with a deload; the next block repeats the cycle. Programs without an
explicit periodization fall back to a proportional split of the whole
program.

References:
    Issurin (2010), New horizons for the methodology and physiology of
        training periodization. Sports Med 40(3):189-206.
    Israetel, Hoffmann & Smith, Scientific Principles of Hypertrophy Training.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from autoregulation_engine.models.enums import (
    FALLBACK_ACCUMULATION_END,
    FALLBACK_INTENSIFICATION_END,
    FALLBACK_REALIZATION_END,
    MesocyclePhase,
)
from autoregulation_engine.models.program import PeriodizationConfig, ProgramGoal


@dataclass(frozen=True)
class PhaseProfile:
    """Training character of one mesocycle phase."""

    name: str
    description: str
    volume_multiplier: float
    rpe_range: tuple[float, float]
    focus: str


MESOCYCLE_PHASE_PROFILES: dict[MesocyclePhase, PhaseProfile] = {
    MesocyclePhase.ACCUMULATION: PhaseProfile(
        name="Accumulation",
        description="Build volume and work capacity",
        volume_multiplier=1.0,
        rpe_range=(6.0, 7.0),
        focus="Volume, technique, adaptation",
    ),
    MesocyclePhase.INTENSIFICATION: PhaseProfile(
        name="Intensification",
        description="Increase intensity while maintaining volume",
        volume_multiplier=0.9,
        rpe_range=(7.0, 8.5),
        focus="Intensity, strength, power",
    ),
    MesocyclePhase.REALIZATION: PhaseProfile(
        name="Realization",
        description="Peak performance and testing",
        volume_multiplier=0.7,
        rpe_range=(8.0, 10.0),
        focus="Peak performance, testing maxes",
    ),
    MesocyclePhase.DELOAD: PhaseProfile(
        name="Deload",
        description="Recovery and adaptation",
        volume_multiplier=0.5,
        rpe_range=(4.0, 6.0),
        focus="Recovery, mobility, light movement",
    ),
}


def week_in_mesocycle(current_week: int, mesocycle_length: int) -> int:
    """Position of ``current_week`` inside its mesocycle (1-indexed).

    Raises:
        ValueError: If current_week or mesocycle_length is below 1.
    """
    if current_week < 1:
        raise ValueError(f"current_week must be >= 1, got {current_week}")
    if mesocycle_length < 1:
        raise ValueError(f"mesocycle_length must be >= 1, got {mesocycle_length}")
    return ((current_week - 1) % mesocycle_length) + 1


def _phase_from_periodization(current_week: int, periodization: PeriodizationConfig) -> MesocyclePhase:
    week = week_in_mesocycle(current_week, periodization.mesocycle_length)
    dist = periodization.phase_distribution

    if week <= dist.accumulation:
        return MesocyclePhase.ACCUMULATION
    if week <= dist.accumulation + dist.intensification:
        return MesocyclePhase.INTENSIFICATION
    if week <= dist.loading_weeks:
        return MesocyclePhase.REALIZATION
    return MesocyclePhase.DELOAD


def _phase_from_program_fraction(current_week: int, total_weeks: int) -> MesocyclePhase:
    fraction = current_week / max(1, total_weeks)

    if fraction < FALLBACK_ACCUMULATION_END:
        return MesocyclePhase.ACCUMULATION
    if fraction < FALLBACK_INTENSIFICATION_END:
        return MesocyclePhase.INTENSIFICATION
    if fraction <= FALLBACK_REALIZATION_END:
        return MesocyclePhase.REALIZATION
    return MesocyclePhase.DELOAD


def resolve_phase(current_week: int, goal: ProgramGoal) -> MesocyclePhase:
    """Determine the mesocycle phase for a program week.

    With an explicit periodization the week is folded into its mesocycle and
    classified by the cumulative phase distribution; anything past the
    loading weeks is deload. Without one, the phase follows the fraction of
    the whole program completed: <50% accumulation, <75% intensification,
    up to 95% realization, deload beyond.

    Args:
        current_week: 1-indexed program week. Passed explicitly so the
            function stays deterministic.
        goal: The program goal being trained for.

    Returns:
        The MesocyclePhase for that week.

    Raises:
        ValueError: If current_week < 1 or the mesocycle length is < 1.
    """
    if current_week < 1:
        raise ValueError(f"current_week must be >= 1, got {current_week}")

    if goal.periodization is not None:
        return _phase_from_periodization(current_week, goal.periodization)
    return _phase_from_program_fraction(current_week, goal.total_weeks)


def compute_current_week(start_date: date, as_of: date) -> int:
    """Convert a program start date and an injected "today" into a week number.

    Dates before the start map to week 1.
    """
    elapsed_days = (as_of - start_date).days
    return max(1, elapsed_days // 7 + 1)
