"""Pure functions mapping a JSON-like snapshot dict to engine models.

No I/O: callers load the JSON themselves. Dates are ISO strings and enum
values are lower-case member names ("muscle_gain", "squat"); intensity also
accepts display labels ("Medium-High"). Each section is optional. A missing
section maps to an empty tuple or None, while a present but malformed one
raises SnapshotFormatError. Recovery records must carry ``hrv_ms`` and
``resting_heart_rate``.

Example snapshot::

    {
      "today": "2025-03-03",
      "recovery": [{"date": "2025-03-03", "score": 62, "hrv_ms": 55, "resting_heart_rate": 52}],
      "strain": [{"date": "2025-03-03", "score": 9.5}],
      "sleep": [{"date": "2025-03-03", "efficiency": 88, "duration_minutes": 450}],
      "goal": {"id": "g1", "type": "strength", "timeframe": {"value": 12, "unit": "weeks"},
               "start_date": "2025-01-06"},
      "summary": {"percent_complete": 40, "weeks_elapsed": 8, "total_weeks": 12,
                  "pace_vs_plan": "behind"},
      "workout": {"day": "Monday", "title": "Lower Body", "description": "Heavy squats",
                  "intensity": "High", "duration": "60 minutes", "type": "strength"},
      "settings": {"aggressiveness": "moderate"},
      "exercises": [{"exercise_id": "back_squat_light", "name": "Goblet Squat",
                     "movement_pattern": "squat"}]
    }
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Any, TypeVar

from autoregulation_engine.models.biometrics import RecoveryRecord, SleepRecord, StrainRecord
from autoregulation_engine.models.enums import (
    GoalType,
    IntensityLevel,
    MovementPattern,
    PaceVsPlan,
    TimeframeUnit,
    WorkoutType,
)
from autoregulation_engine.models.program import (
    GoalProgressSummary,
    PeriodizationConfig,
    PhaseDistribution,
    ProgramGoal,
    Timeframe,
)
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.models.workout import ProgramExercise, WorkoutPrescription
from autoregulation_engine.settings import validate_settings
from biometric_sources.exceptions import SnapshotFormatError
from biometric_sources.in_memory import (
    InMemoryBiometricSource,
    InMemoryExerciseCatalog,
    InMemoryProgramStore,
)
from biometric_sources.protocols import ExerciseDefinition

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=IntEnum)


@dataclass(frozen=True)
class Snapshot:
    """Everything one engine run needs, resolved from a snapshot dict."""

    source: InMemoryBiometricSource
    catalog: InMemoryExerciseCatalog
    store: InMemoryProgramStore
    goal: ProgramGoal | None
    workout: WorkoutPrescription | None
    settings: AutoregulationConfig
    today: date | None


def parse_snapshot(raw: dict[str, Any]) -> Snapshot:
    """Map a whole snapshot dict into in-memory collaborators.

    Raises:
        SnapshotFormatError: If any present section is malformed.
    """
    if not isinstance(raw, dict):
        raise SnapshotFormatError("Snapshot must be a JSON object")

    goal = map_goal(raw.get("goal"))
    summary = map_goal_summary(raw.get("summary"), goal.id if goal else None)
    workout = map_workout(raw.get("workout"))
    settings = map_settings(raw.get("settings"))
    today = _parse_date(raw["today"], "today") if raw.get("today") else None

    try:
        source = InMemoryBiometricSource(
            recovery=map_recovery_records(raw.get("recovery")),
            strain=map_strain_records(raw.get("strain")),
            sleep=map_sleep_records(raw.get("sleep")),
        )
    except ValueError as exc:
        raise SnapshotFormatError(str(exc)) from exc
    workouts = {today: workout} if today is not None and workout is not None else {}
    store = InMemoryProgramStore(
        goals=(goal,) if goal else (),
        workouts=workouts,
        settings=settings,
        summaries=(summary,) if summary else (),
    )
    catalog = InMemoryExerciseCatalog(map_exercise_definitions(raw.get("exercises")))
    logger.debug(
        "Parsed snapshot: %d recovery, %d strain, %d sleep records, %d exercises",
        len(source.recovery_records()),
        len(source.strain_records()),
        len(source.sleep_records()),
        len(catalog),
    )
    return Snapshot(
        source=source,
        catalog=catalog,
        store=store,
        goal=goal,
        workout=workout,
        settings=settings,
        today=today,
    )


def map_recovery_records(data: Any) -> tuple[RecoveryRecord, ...]:
    return tuple(
        RecoveryRecord(
            date=_parse_date(_require(item, "date", "recovery"), "recovery"),
            score=_number(_require(item, "score", "recovery"), "recovery"),
            hrv_ms=_number(_require(item, "hrv_ms", "recovery"), "recovery"),
            resting_heart_rate=_number(
                _require(item, "resting_heart_rate", "recovery"), "recovery"
            ),
        )
        for item in _items(data, "recovery")
    )


def map_strain_records(data: Any) -> tuple[StrainRecord, ...]:
    return tuple(
        StrainRecord(
            date=_parse_date(_require(item, "date", "strain"), "strain"),
            score=_number(_require(item, "score", "strain"), "strain"),
            avg_heart_rate=_number(item.get("avg_heart_rate", 0.0), "strain"),
            max_heart_rate=_number(item.get("max_heart_rate", 0.0), "strain"),
            calories=_number(item.get("calories", 0.0), "strain"),
        )
        for item in _items(data, "strain")
    )


def map_sleep_records(data: Any) -> tuple[SleepRecord, ...]:
    return tuple(
        SleepRecord(
            date=_parse_date(_require(item, "date", "sleep"), "sleep"),
            efficiency=_number(_require(item, "efficiency", "sleep"), "sleep"),
            duration_minutes=_number(item.get("duration_minutes", 0.0), "sleep"),
        )
        for item in _items(data, "sleep")
    )


def map_goal(data: Any) -> ProgramGoal | None:
    if not data:
        return None
    _ensure_dict(data, "goal")

    timeframe_raw = _require(data, "timeframe", "goal")
    _ensure_dict(timeframe_raw, "goal")
    timeframe = Timeframe(
        value=int(_number(_require(timeframe_raw, "value", "goal"), "goal")),
        unit=_parse_enum(TimeframeUnit, timeframe_raw.get("unit", "weeks"), "goal"),
    )

    periodization = None
    if data.get("periodization"):
        periodization_raw = data["periodization"]
        _ensure_dict(periodization_raw, "goal")
        dist = _require(periodization_raw, "phase_distribution", "goal")
        _ensure_dict(dist, "goal")
        periodization = PeriodizationConfig(
            mesocycle_length=int(_number(_require(periodization_raw, "mesocycle_length", "goal"), "goal")),
            phase_distribution=PhaseDistribution(
                accumulation=int(_number(dist.get("accumulation", 0), "goal")),
                intensification=int(_number(dist.get("intensification", 0), "goal")),
                realization=int(_number(dist.get("realization", 0), "goal")),
            ),
        )

    return ProgramGoal(
        id=str(_require(data, "id", "goal")),
        type=_parse_enum(GoalType, _require(data, "type", "goal"), "goal"),
        timeframe=timeframe,
        start_date=_parse_date(_require(data, "start_date", "goal"), "goal"),
        periodization=periodization,
        title=str(data.get("title", "")),
    )


def map_goal_summary(data: Any, goal_id: str | None = None) -> GoalProgressSummary | None:
    if not data:
        return None
    _ensure_dict(data, "summary")
    resolved_id = data.get("goal_id", goal_id)
    if resolved_id is None:
        raise SnapshotFormatError("Summary has no goal_id and no goal to attach to", "summary")
    return GoalProgressSummary(
        goal_id=str(resolved_id),
        percent_complete=_number(data.get("percent_complete", 0.0), "summary"),
        weeks_elapsed=int(_number(data.get("weeks_elapsed", 1), "summary")),
        total_weeks=int(_number(data.get("total_weeks", 1), "summary")),
        pace_vs_plan=_parse_enum(PaceVsPlan, data.get("pace_vs_plan", "on_track"), "summary"),
    )


def map_workout(data: Any) -> WorkoutPrescription | None:
    if not data:
        return None
    _ensure_dict(data, "workout")

    try:
        intensity = IntensityLevel.from_label(str(_require(data, "intensity", "workout")))
    except ValueError as exc:
        raise SnapshotFormatError(str(exc), "workout") from exc

    exercises = tuple(
        ProgramExercise(
            exercise_id=str(_require(item, "exercise_id", "workout")),
            movement_pattern=_parse_enum(
                MovementPattern, _require(item, "movement_pattern", "workout"), "workout"
            ),
            sets=int(_number(item.get("sets", 3), "workout")),
            reps=str(item.get("reps", "8-12")),
            target_rpe=_number(item.get("target_rpe", 7.0), "workout"),
            autoregulation_guidelines=tuple(item.get("autoregulation_guidelines", ())),
        )
        for item in _items(data.get("exercises"), "workout")
    )

    return WorkoutPrescription(
        day=str(data.get("day", "")),
        title=str(_require(data, "title", "workout")),
        description=str(data.get("description", "")),
        intensity=intensity,
        duration=str(data.get("duration", "")),
        type=_parse_enum(WorkoutType, data.get("type", "other"), "workout"),
        exercises=exercises,
        program_id=str(data.get("program_id", "")),
    )


def map_settings(data: Any) -> AutoregulationConfig:
    """Partial settings overrides, sanitised by validate_settings()."""
    if not data:
        return validate_settings(None)
    _ensure_dict(data, "settings")
    return validate_settings(data)


def map_exercise_definitions(data: Any) -> tuple[ExerciseDefinition, ...]:
    return tuple(
        ExerciseDefinition(
            exercise_id=str(_require(item, "exercise_id", "exercises")),
            name=str(item.get("name", item["exercise_id"])),
            movement_pattern=_parse_enum(
                MovementPattern, _require(item, "movement_pattern", "exercises"), "exercises"
            ),
            equipment=tuple(item.get("equipment", ())),
        )
        for item in _items(data, "exercises")
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _items(data: Any, section: str) -> list[dict[str, Any]]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise SnapshotFormatError(f"Section {section!r} must be a list", section)
    for item in data:
        _ensure_dict(item, section)
    return data


def _ensure_dict(data: Any, section: str) -> None:
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"Entries in {section!r} must be objects", section)


def _require(data: dict[str, Any], key: str, section: str) -> Any:
    if key not in data or data[key] is None:
        raise SnapshotFormatError(f"Missing {key!r} in {section!r}", section)
    return data[key]


def _number(value: Any, section: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise SnapshotFormatError(f"Expected a number in {section!r}, got {value!r}", section) from exc


def _parse_date(value: Any, section: str) -> date:
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise SnapshotFormatError(f"Invalid ISO date in {section!r}: {value!r}", section) from exc


def _parse_enum(enum_cls: type[E], value: Any, section: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError:
        raise SnapshotFormatError(
            f"Unknown {enum_cls.__name__} {value!r} in {section!r}", section
        ) from None
