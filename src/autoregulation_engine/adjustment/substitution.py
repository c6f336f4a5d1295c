"""Per-exercise substitution and template-level volume/RPE adjustment.

Under severe fatigue, loaded leg patterns are swapped for lighter variants
and heavy compounds for isolation work. Variants are named by convention
(``<id>_light``, ``<id>_isolation``); when an ExerciseCatalog is supplied,
candidates it does not know are dropped and the original exercise stays.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from autoregulation_engine.math.rpe import round_half_up
from autoregulation_engine.models.analysis import ExerciseSubstitution
from autoregulation_engine.models.enums import (
    DELOAD_MIN_WEEK,
    DELOAD_TREND_THRESHOLD,
    ISOLATION_VARIANT_RECOVERY_THRESHOLD,
    ISOLATION_VARIANT_SUFFIX,
    LIGHT_VARIANT_RECOVERY_THRESHOLD,
    LIGHT_VARIANT_SUFFIX,
    MAX_WORKING_SET_RPE,
    MIN_WORKING_SET_RPE,
    MovementPattern,
)
from autoregulation_engine.models.workout import ProgramExercise, WorkoutPrescription

if TYPE_CHECKING:
    from biometric_sources.protocols import ExerciseCatalog

logger = logging.getLogger(__name__)

_LIGHT_PATTERNS = frozenset({MovementPattern.SQUAT, MovementPattern.LUNGE})
_ISOLATION_PATTERNS = frozenset({MovementPattern.SQUAT, MovementPattern.HINGE})


def recommend_substitutions(
    exercises: Iterable[ProgramExercise],
    recovery: float,
    catalog: ExerciseCatalog | None = None,
) -> tuple[ExerciseSubstitution, ...]:
    """Suggest lighter variants for fatiguing movement patterns.

    Squat and lunge patterns get a ``_light`` variant below 40% recovery;
    squat and hinge patterns get an ``_isolation`` variant below 35%. A
    squat under 35% therefore yields both, in that order.

    Args:
        exercises: Exercises of the prescribed workout.
        recovery: Today's recovery score (0-100).
        catalog: Optional catalog used to check that each variant exists.

    Returns:
        Substitutions in exercise order.
    """
    candidates: list[ExerciseSubstitution] = []
    for exercise in exercises:
        pattern = exercise.movement_pattern
        if pattern in _LIGHT_PATTERNS and recovery < LIGHT_VARIANT_RECOVERY_THRESHOLD:
            candidates.append(
                ExerciseSubstitution(
                    original_exercise_id=exercise.exercise_id,
                    recommended_exercise_id=exercise.exercise_id + LIGHT_VARIANT_SUFFIX,
                    reason="Low recovery - substituting with lighter leg exercise",
                )
            )
        if pattern in _ISOLATION_PATTERNS and recovery < ISOLATION_VARIANT_RECOVERY_THRESHOLD:
            candidates.append(
                ExerciseSubstitution(
                    original_exercise_id=exercise.exercise_id,
                    recommended_exercise_id=exercise.exercise_id + ISOLATION_VARIANT_SUFFIX,
                    reason="Very low recovery - substituting compound with isolation exercise",
                )
            )

    if catalog is None:
        return tuple(candidates)

    available: list[ExerciseSubstitution] = []
    for sub in candidates:
        if catalog.lookup(sub.recommended_exercise_id) is None:
            logger.warning(
                "Substitute %s not in catalog, keeping %s",
                sub.recommended_exercise_id,
                sub.original_exercise_id,
            )
            continue
        available.append(sub)
    return tuple(available)


def is_deload_recommended(recovery_trend: float, week_in_mesocycle: int) -> bool:
    """True when recovery has been falling sharply past the third week."""
    return recovery_trend < DELOAD_TREND_THRESHOLD and week_in_mesocycle > DELOAD_MIN_WEEK


def _adjust_exercise(
    exercise: ProgramExercise,
    volume_multiplier: float,
    intensity_adjustment: float,
    substitution: ExerciseSubstitution | None,
) -> ProgramExercise:
    sets = max(1, round_half_up(exercise.sets * volume_multiplier))
    rpe = max(
        float(MIN_WORKING_SET_RPE),
        min(float(MAX_WORKING_SET_RPE), exercise.target_rpe + intensity_adjustment),
    )
    if substitution is None:
        return dataclasses.replace(exercise, sets=sets, target_rpe=rpe)
    return dataclasses.replace(
        exercise,
        exercise_id=substitution.recommended_exercise_id,
        sets=sets,
        target_rpe=rpe,
        autoregulation_guidelines=exercise.autoregulation_guidelines
        + (f"Auto-adjusted: {substitution.reason}",),
    )


def apply_exercise_adjustments(
    workout: WorkoutPrescription,
    volume_multiplier: float,
    intensity_adjustment: float,
    substitutions: Sequence[ExerciseSubstitution] = (),
) -> WorkoutPrescription:
    """Scale sets, shift target RPE and swap exercises in a workout.

    Sets never drop below 1 and RPE stays within working-set bounds (6-10).
    When several substitutions name the same exercise the first one wins.

    Raises:
        ValueError: If volume_multiplier is not positive.
    """
    if volume_multiplier <= 0:
        raise ValueError(f"volume_multiplier must be positive, got {volume_multiplier}")
    if not workout.exercises:
        return workout

    by_original: dict[str, ExerciseSubstitution] = {}
    for sub in substitutions:
        by_original.setdefault(sub.original_exercise_id, sub)

    exercises = tuple(
        _adjust_exercise(
            exercise,
            volume_multiplier,
            intensity_adjustment,
            by_original.get(exercise.exercise_id),
        )
        for exercise in workout.exercises
    )
    return dataclasses.replace(workout, exercises=exercises)
