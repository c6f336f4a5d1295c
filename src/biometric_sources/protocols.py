"""Collaborator interfaces the engine depends on.

The engine never fetches data itself: callers resolve records, goals and
exercise definitions through these protocols and pass plain values in.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from autoregulation_engine.models.biometrics import RecoveryRecord, SleepRecord, StrainRecord
from autoregulation_engine.models.enums import MovementPattern
from autoregulation_engine.models.program import GoalProgressSummary, ProgramGoal
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.models.workout import WorkoutPrescription


@dataclass(frozen=True)
class ExerciseDefinition:
    exercise_id: str
    name: str
    movement_pattern: MovementPattern
    equipment: tuple[str, ...] = field(default_factory=tuple)


class BiometricDataSource(Protocol):
    """Daily readiness records, newest first, at most one per date."""

    def recovery_records(self) -> Sequence[RecoveryRecord]: ...

    def strain_records(self) -> Sequence[StrainRecord]: ...

    def sleep_records(self) -> Sequence[SleepRecord]: ...


class ExerciseCatalog(Protocol):
    def lookup(self, exercise_id: str) -> ExerciseDefinition | None: ...


class ProgramStore(Protocol):
    """Goals, prescribed workouts, settings and goal progress."""

    def get_goal(self, goal_id: str) -> ProgramGoal: ...

    def active_goals(self) -> Sequence[ProgramGoal]: ...

    def get_workout(self, day: date) -> WorkoutPrescription | None: ...

    def get_settings(self) -> AutoregulationConfig: ...

    def get_goal_summary(self, goal_id: str) -> GoalProgressSummary | None: ...
