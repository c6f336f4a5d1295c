"""Dict-backed implementations of the collaborator protocols."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from autoregulation_engine.models.biometrics import RecoveryRecord, SleepRecord, StrainRecord
from autoregulation_engine.models.program import GoalProgressSummary, ProgramGoal
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.models.workout import WorkoutPrescription
from biometric_sources.exceptions import RecordNotFoundError
from biometric_sources.protocols import ExerciseDefinition


def _newest_first(records: Iterable, kind: str) -> tuple:
    """Sort records by date descending, rejecting duplicate dates."""
    ordered = tuple(sorted(records, key=lambda r: r.date, reverse=True))
    seen: set[date] = set()
    for record in ordered:
        if record.date in seen:
            raise ValueError(f"Duplicate {kind} record for {record.date.isoformat()}")
        seen.add(record.date)
    return ordered


class InMemoryBiometricSource:
    """Holds readiness records in memory, ordered newest first."""

    def __init__(
        self,
        recovery: Iterable[RecoveryRecord] = (),
        strain: Iterable[StrainRecord] = (),
        sleep: Iterable[SleepRecord] = (),
    ) -> None:
        self._recovery = _newest_first(recovery, "recovery")
        self._strain = _newest_first(strain, "strain")
        self._sleep = _newest_first(sleep, "sleep")

    def recovery_records(self) -> Sequence[RecoveryRecord]:
        return self._recovery

    def strain_records(self) -> Sequence[StrainRecord]:
        return self._strain

    def sleep_records(self) -> Sequence[SleepRecord]:
        return self._sleep


class InMemoryExerciseCatalog:
    def __init__(self, definitions: Iterable[ExerciseDefinition] = ()) -> None:
        self._definitions = {d.exercise_id: d for d in definitions}

    def lookup(self, exercise_id: str) -> ExerciseDefinition | None:
        return self._definitions.get(exercise_id)

    def __len__(self) -> int:
        return len(self._definitions)


class InMemoryProgramStore:
    """Goals, dated workouts, settings and progress summaries held in dicts."""

    def __init__(
        self,
        goals: Iterable[ProgramGoal] = (),
        workouts: Mapping[date, WorkoutPrescription] | None = None,
        settings: AutoregulationConfig | None = None,
        summaries: Iterable[GoalProgressSummary] = (),
    ) -> None:
        self._goals = {g.id: g for g in goals}
        self._workouts = dict(workouts or {})
        self._settings = settings or AutoregulationConfig()
        self._summaries = {s.goal_id: s for s in summaries}

    def get_goal(self, goal_id: str) -> ProgramGoal:
        try:
            return self._goals[goal_id]
        except KeyError:
            raise RecordNotFoundError(f"No goal with id {goal_id!r}") from None

    def active_goals(self) -> Sequence[ProgramGoal]:
        """Goals whose summary is missing or not yet complete."""
        return tuple(
            g
            for g in self._goals.values()
            if g.id not in self._summaries or self._summaries[g.id].percent_complete < 100
        )

    def get_workout(self, day: date) -> WorkoutPrescription | None:
        return self._workouts.get(day)

    def get_settings(self) -> AutoregulationConfig:
        return self._settings

    def get_goal_summary(self, goal_id: str) -> GoalProgressSummary | None:
        return self._summaries.get(goal_id)
