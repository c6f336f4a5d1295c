"""Shared test fixtures: readiness snapshots, goals, workouts and record histories."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from autoregulation_engine.engine import AutoregulationEngine
from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.biometrics import (
    DailyMetrics,
    RecoveryRecord,
    SleepRecord,
    StrainRecord,
)
from autoregulation_engine.models.enums import (
    GoalType,
    IntensityLevel,
    MesocyclePhase,
    MovementPattern,
    TimeframeUnit,
    WorkoutType,
)
from autoregulation_engine.models.program import (
    PeriodizationConfig,
    PhaseDistribution,
    ProgramGoal,
    Timeframe,
)
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.models.workout import ProgramExercise, WorkoutPrescription
from autoregulation_engine.rules.base import RuleContext

TODAY = date(2025, 3, 3)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def default_config() -> AutoregulationConfig:
    return AutoregulationConfig()


@pytest.fixture
def make_metrics() -> Callable[..., DailyMetrics]:
    """Factory for a readiness snapshot; defaults describe an ordinary, well-rested day."""

    def _make(
        recovery: float = 70.0,
        strain: float = 10.0,
        hrv: float = 55.0,
        sleep_quality: float = 85.0,
    ) -> DailyMetrics:
        return DailyMetrics(recovery=recovery, strain=strain, hrv=hrv, sleep_quality=sleep_quality)

    return _make


@pytest.fixture
def squat_day_exercises() -> tuple[ProgramExercise, ...]:
    return (
        ProgramExercise("back_squat", MovementPattern.SQUAT, sets=4, reps="5", target_rpe=8.0),
        ProgramExercise("romanian_deadlift", MovementPattern.HINGE, sets=3, reps="8", target_rpe=7.5),
        ProgramExercise("walking_lunge", MovementPattern.LUNGE, sets=3, reps="10", target_rpe=7.0),
        ProgramExercise("bench_press", MovementPattern.PUSH, sets=3, reps="8", target_rpe=7.0),
    )


@pytest.fixture
def make_workout(squat_day_exercises: tuple[ProgramExercise, ...]) -> Callable[..., WorkoutPrescription]:
    """Factory for a prescribed workout."""

    def _make(
        intensity: IntensityLevel = IntensityLevel.HIGH,
        duration: str = "60 minutes",
        description: str = "Heavy squats and intense accessory work",
        workout_type: WorkoutType = WorkoutType.STRENGTH,
        with_exercises: bool = False,
    ) -> WorkoutPrescription:
        return WorkoutPrescription(
            day="Monday",
            title="Lower Body Strength",
            description=description,
            intensity=intensity,
            duration=duration,
            type=workout_type,
            exercises=squat_day_exercises if with_exercises else (),
            program_id="prog-strength",
        )

    return _make


@pytest.fixture
def strength_goal() -> ProgramGoal:
    """12-week strength goal without explicit periodization (fraction-based phases)."""
    return ProgramGoal(
        id="goal-strength",
        type=GoalType.STRENGTH,
        timeframe=Timeframe(12, TimeframeUnit.WEEKS),
        start_date=date(2025, 1, 6),
    )


@pytest.fixture
def periodized_goal() -> ProgramGoal:
    """Hypertrophy goal on 4-week mesocycles: 2 accumulation, 1 intensification, 1 realization."""
    return ProgramGoal(
        id="goal-hypertrophy",
        type=GoalType.MUSCLE_GAIN,
        timeframe=Timeframe(4, TimeframeUnit.MONTHS),
        start_date=date(2025, 1, 6),
        periodization=PeriodizationConfig(
            mesocycle_length=4,
            phase_distribution=PhaseDistribution(accumulation=2, intensification=1, realization=1),
        ),
        title="Hypertrophy Program",
    )


@pytest.fixture
def deload_goal() -> ProgramGoal:
    """5-week mesocycle whose last week is a deload."""
    return ProgramGoal(
        id="goal-deload",
        type=GoalType.GENERAL_HEALTH,
        timeframe=Timeframe(10, TimeframeUnit.WEEKS),
        start_date=date(2025, 1, 6),
        periodization=PeriodizationConfig(
            mesocycle_length=5,
            phase_distribution=PhaseDistribution(accumulation=2, intensification=1, realization=1),
        ),
    )


@pytest.fixture
def make_history() -> Callable[..., tuple]:
    """Build newest-first recovery/strain/sleep records ending on TODAY."""

    def _make(
        recovery_scores: list[float],
        strain_scores: list[float] | None = None,
        sleep_efficiencies: list[float] | None = None,
        hrv: float = 55.0,
        end: date = TODAY,
    ) -> tuple[tuple[RecoveryRecord, ...], tuple[StrainRecord, ...], tuple[SleepRecord, ...]]:
        recovery = tuple(
            RecoveryRecord(end - timedelta(days=i), score, hrv, 50.0)
            for i, score in enumerate(recovery_scores)
        )
        strain = tuple(
            StrainRecord(end - timedelta(days=i), score)
            for i, score in enumerate(strain_scores or [])
        )
        sleep = tuple(
            SleepRecord(end - timedelta(days=i), eff, 450.0)
            for i, eff in enumerate(sleep_efficiencies or [])
        )
        return recovery, strain, sleep

    return _make


@pytest.fixture
def engine() -> AutoregulationEngine:
    return AutoregulationEngine()


@pytest.fixture
def make_rule_context(strength_goal: ProgramGoal) -> Callable[..., RuleContext]:
    """Factory for a RuleContext with an explicit phase."""

    def _make(
        recovery: float = 70.0,
        strain: float = 10.0,
        sleep_quality: float = 85.0,
        phase: MesocyclePhase = MesocyclePhase.ACCUMULATION,
        current_week: int = 2,
    ) -> RuleContext:
        return RuleContext(
            metrics=DailyMetrics(recovery=recovery, strain=strain, hrv=55.0, sleep_quality=sleep_quality),
            goal=strength_goal,
            current_week=current_week,
            phase=phase,
            config=AutoregulationConfig(),
        )

    return _make


@pytest.fixture
def fresh_analysis() -> Callable[..., ProgramAwareAnalysis]:
    def _make(
        phase: MesocyclePhase = MesocyclePhase.ACCUMULATION, **changes: object
    ) -> ProgramAwareAnalysis:
        return ProgramAwareAnalysis(current_phase=phase, **changes)

    return _make


@pytest.fixture
def snapshot_dict() -> dict:
    """A complete snapshot: a red-zone morning before a heavy squat day."""
    return {
        "today": "2025-03-03",
        "recovery": [
            {"date": "2025-03-02", "score": 45, "hrv_ms": 55, "resting_heart_rate": 51},
            {"date": "2025-03-03", "score": 30, "hrv_ms": 55, "resting_heart_rate": 52},
        ],
        "strain": [{"date": "2025-03-03", "score": 9.5}],
        "sleep": [{"date": "2025-03-03", "efficiency": 88, "duration_minutes": 450}],
        "goal": {
            "id": "goal-strength",
            "type": "strength",
            "timeframe": {"value": 12, "unit": "weeks"},
            "start_date": "2025-01-06",
        },
        "summary": {
            "percent_complete": 40,
            "weeks_elapsed": 8,
            "total_weeks": 12,
            "pace_vs_plan": "behind",
        },
        "workout": {
            "day": "Monday",
            "title": "Lower Body Strength",
            "description": "Heavy squats and intense accessory work",
            "intensity": "High",
            "duration": "60 minutes",
            "type": "strength",
            "program_id": "prog-strength",
            "exercises": [
                {"exercise_id": "back_squat", "movement_pattern": "squat", "sets": 4, "reps": "5", "target_rpe": 8},
                {"exercise_id": "romanian_deadlift", "movement_pattern": "hinge", "sets": 3, "target_rpe": 7.5},
                {"exercise_id": "walking_lunge", "movement_pattern": "lunge", "sets": 3, "target_rpe": 7},
                {"exercise_id": "bench_press", "movement_pattern": "push", "sets": 3, "target_rpe": 7},
            ],
        },
        "settings": {"aggressiveness": "moderate", "allow_skip_workouts": False},
        "exercises": [
            {"exercise_id": "back_squat_light", "name": "Goblet Squat", "movement_pattern": "squat"},
        ],
    }
