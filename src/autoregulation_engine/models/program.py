"""Program goals, periodization and goal progress."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from autoregulation_engine.models.enums import (
    WEEKS_PER_MONTH,
    GoalType,
    PaceVsPlan,
    TimeframeUnit,
)

_GOAL_TITLES: dict[GoalType, str] = {
    GoalType.MUSCLE_GAIN: "Muscle Gain",
    GoalType.STRENGTH: "Strength",
    GoalType.FAT_LOSS: "Fat Loss",
    GoalType.ENDURANCE: "Endurance",
    GoalType.GENERAL_HEALTH: "General Health",
}


@dataclass(frozen=True)
class Timeframe:
    value: int
    unit: TimeframeUnit = TimeframeUnit.WEEKS

    @property
    def total_weeks(self) -> int:
        if self.unit == TimeframeUnit.MONTHS:
            return self.value * WEEKS_PER_MONTH
        return self.value


@dataclass(frozen=True)
class PhaseDistribution:
    """Weeks allotted to each loading phase; the rest of the block is deload."""

    accumulation: int
    intensification: int
    realization: int

    @property
    def loading_weeks(self) -> int:
        return self.accumulation + self.intensification + self.realization


@dataclass(frozen=True)
class PeriodizationConfig:
    mesocycle_length: int
    phase_distribution: PhaseDistribution


@dataclass(frozen=True)
class ProgramGoal:
    """A user's training goal, optionally with an explicit mesocycle layout."""

    id: str
    type: GoalType
    timeframe: Timeframe
    start_date: date
    periodization: PeriodizationConfig | None = None
    title: str = ""

    @property
    def total_weeks(self) -> int:
        return self.timeframe.total_weeks

    @property
    def display_title(self) -> str:
        return self.title or _GOAL_TITLES[self.type]


@dataclass(frozen=True)
class GoalProgressSummary:
    """Progress snapshot supplied by the ProgramStore for one goal."""

    goal_id: str
    percent_complete: float
    weeks_elapsed: int
    total_weeks: int
    pace_vs_plan: PaceVsPlan = PaceVsPlan.ON_TRACK


@dataclass(frozen=True)
class ProgramContext:
    """Goal-aware pacing context derived from a GoalProgressSummary."""

    goal: ProgramGoal
    summary: GoalProgressSummary
    progress_delta: float
    is_ahead_of_schedule: bool
    is_behind_schedule: bool
    weeks_remaining: int
