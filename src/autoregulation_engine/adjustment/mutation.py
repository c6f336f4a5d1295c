"""Workout mutation: turn an AdjustmentDecision into a new WorkoutPrescription.

Every function returns fresh values; the input prescription is never
modified (it is frozen, and adjustments go through ``dataclasses.replace``).
"""

from __future__ import annotations

import dataclasses
import re

from autoregulation_engine.adjustment.description_builder import (
    build_adjustment_notes,
    program_context_sentence,
    rewrite_for_duration,
    rewrite_for_intensity,
)
from autoregulation_engine.math.rpe import round_half_up
from autoregulation_engine.models.analysis import AdjustmentDecision, ProgramAwareAnalysis
from autoregulation_engine.models.biometrics import DailyMetrics
from autoregulation_engine.models.enums import (
    DURATION_HIGH_RECOVERY_FACTOR,
    DURATION_HIGH_RECOVERY_THRESHOLD,
    DURATION_HIGH_STRAIN_FACTOR,
    DURATION_LOW_RECOVERY_FACTOR,
    DURATION_LOW_RECOVERY_THRESHOLD,
    EXCELLENT_RECOVERY_THRESHOLD,
    GREAT_SLEEP_QUALITY,
    HIGH_HRV_FACTOR,
    INTENSE_WORKOUT_RECOVERY_THRESHOLD,
    PEAK_RECOVERY_THRESHOLD,
    RECOVERY_EXTENSION_MIN,
    RECOVERY_SESSION_DURATION,
    REST_DAY_DURATION,
    TYPE_SWAP_RECOVERY_THRESHOLD,
    VERY_LOW_RECOVERY_THRESHOLD,
    AdjustmentType,
    IntensityLevel,
    WorkoutType,
)
from autoregulation_engine.models.program import ProgramContext
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.models.workout import WorkoutPrescription

_DURATION_PATTERN = re.compile(r"^\s*(\d+)(?:\s*-\s*(\d+))?(?:\s*minutes?)?\s*$", re.IGNORECASE)

COOL_DOWN_NOTE = " + 10-15 minutes of cool-down and stretching"


def intensity_step(metrics: DailyMetrics, config: AutoregulationConfig) -> int:
    """Signed number of ladder rungs to move, from recovery, HRV and sleep bands."""
    allow_up = config.allow_intensity_increase
    step = 0

    if metrics.recovery < VERY_LOW_RECOVERY_THRESHOLD:
        step -= 3
    elif metrics.recovery < INTENSE_WORKOUT_RECOVERY_THRESHOLD:
        step -= 1
    elif metrics.recovery > PEAK_RECOVERY_THRESHOLD and allow_up:
        step += 2
    elif metrics.recovery > EXCELLENT_RECOVERY_THRESHOLD and allow_up:
        step += 1

    if metrics.hrv < config.hrv_threshold:
        step -= 1
    elif metrics.hrv > config.hrv_threshold * HIGH_HRV_FACTOR and allow_up:
        step += 1

    if metrics.sleep_quality < config.sleep_quality_threshold:
        step -= 1
    elif metrics.sleep_quality > GREAT_SLEEP_QUALITY and allow_up:
        step += 1

    return step


def adjust_intensity(
    level: IntensityLevel, metrics: DailyMetrics, config: AutoregulationConfig
) -> IntensityLevel:
    """Move ``level`` along the intensity ladder, clamped to its ends."""
    index = int(level) + intensity_step(metrics, config)
    index = max(int(IntensityLevel.VERY_LOW), min(int(IntensityLevel.HIGH), index))
    return IntensityLevel(index)


def parse_duration(duration: str) -> tuple[int, int] | None:
    """Parse "N", "N minutes" or "N-M minutes" into (low, high) minutes."""
    match = _DURATION_PATTERN.match(duration)
    if match is None:
        return None
    low = int(match.group(1))
    high = int(match.group(2)) if match.group(2) else low
    return low, high


def format_duration(low: int, high: int) -> str:
    if low == high:
        return f"{low} minutes"
    return f"{low}-{high} minutes"


def scale_duration(
    duration: str,
    metrics: DailyMetrics,
    config: AutoregulationConfig,
    allow_longer: bool = True,
) -> str:
    """Scale both bounds of a duration by the readiness multiplier.

    Unparseable strings pass through unchanged. With ``allow_longer`` off the
    multiplier is capped at 1.
    """
    bounds = parse_duration(duration)
    if bounds is None:
        return duration

    factor = 1.0
    if metrics.recovery < DURATION_LOW_RECOVERY_THRESHOLD:
        factor *= DURATION_LOW_RECOVERY_FACTOR
    elif metrics.recovery > DURATION_HIGH_RECOVERY_THRESHOLD:
        factor *= DURATION_HIGH_RECOVERY_FACTOR
    if metrics.strain > config.max_strain_threshold:
        factor *= DURATION_HIGH_STRAIN_FACTOR
    if not allow_longer:
        factor = min(factor, 1.0)

    low, high = bounds
    return format_duration(round_half_up(low * factor), round_half_up(high * factor))


def extend_duration_for_recovery(duration: str) -> str:
    bounds = parse_duration(duration)
    if bounds is None:
        return f"{duration} + recovery time"
    low, high = bounds
    return format_duration(low + RECOVERY_EXTENSION_MIN, high + RECOVERY_EXTENSION_MIN)


def recovery_session(workout: WorkoutPrescription) -> WorkoutPrescription:
    return dataclasses.replace(
        workout,
        title=f"Recovery Session ({workout.day})",
        description="Light movement, stretching, or yoga to promote recovery",
        type=WorkoutType.RECOVERY,
        intensity=IntensityLevel.LOW,
        duration=RECOVERY_SESSION_DURATION,
    )


def rest_day(workout: WorkoutPrescription) -> WorkoutPrescription:
    return dataclasses.replace(
        workout,
        title=f"Rest Day ({workout.day})",
        description="Complete rest recommended based on low recovery metrics",
        type=WorkoutType.RECOVERY,
        intensity=IntensityLevel.VERY_LOW,
        duration=REST_DAY_DURATION,
    )


def _apply_adjustment_type(
    workout: WorkoutPrescription,
    adjustment_type: AdjustmentType,
    metrics: DailyMetrics,
    config: AutoregulationConfig,
    allow_longer: bool = True,
) -> WorkoutPrescription:
    if adjustment_type == AdjustmentType.INTENSITY:
        level = adjust_intensity(workout.intensity, metrics, config)
        return dataclasses.replace(
            workout,
            intensity=level,
            description=rewrite_for_intensity(workout.description, level),
        )

    if adjustment_type == AdjustmentType.DURATION:
        duration = scale_duration(workout.duration, metrics, config, allow_longer)
        return dataclasses.replace(
            workout,
            duration=duration,
            description=rewrite_for_duration(workout.description, duration),
        )

    if adjustment_type == AdjustmentType.TYPE:
        if metrics.recovery < TYPE_SWAP_RECOVERY_THRESHOLD:
            return recovery_session(workout)
        return workout

    if adjustment_type == AdjustmentType.SKIP:
        return rest_day(workout)

    return dataclasses.replace(
        workout,
        description=workout.description + COOL_DOWN_NOTE,
        duration=extend_duration_for_recovery(workout.duration),
    )


def generate_adjusted_workout(
    workout: WorkoutPrescription,
    metrics: DailyMetrics,
    decision: AdjustmentDecision,
    config: AutoregulationConfig,
    analysis: ProgramAwareAnalysis | None = None,
    program_context: ProgramContext | None = None,
    allow_longer: bool = True,
) -> WorkoutPrescription:
    """Build the adjusted copy of ``workout`` for a classification decision.

    Args:
        workout: The prescribed workout (left untouched).
        metrics: Today's readiness snapshot.
        decision: Output of should_adjust_workout().
        config: Validated autoregulation settings.
        analysis: Optional program-aware analysis whose volume change,
            substitution guidance, phase and notes are attached as notes.
        program_context: Optional goal pacing; adds one sentence to the
            description when ``respect_program_goals`` is set.
        allow_longer: When False a DURATION adjustment never lengthens the
            workout.

    Returns:
        A new WorkoutPrescription with ``adjusted_for_recovery`` set.
    """
    adjusted = _apply_adjustment_type(
        workout, decision.adjustment_type, metrics, config, allow_longer
    )

    description = adjusted.description
    if program_context is not None and config.respect_program_goals:
        description += program_context_sentence(
            program_context, decision.adjustment_type, metrics.recovery
        )

    return dataclasses.replace(
        adjusted,
        description=description,
        adjusted_for_recovery=decision.reason,
        adjustment_notes=workout.adjustment_notes + build_adjustment_notes(decision.reason, analysis),
    )
