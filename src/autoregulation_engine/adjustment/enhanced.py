"""Enhanced autoregulation: a volume-multiplier model for workout templates.

Where the program-aware rules speak in volume recommendations, this model
produces a continuous multiplier built up from recovery, sleep, strain
trend and recovery trend, then tweaked for the goal type. Its result feeds
apply_exercise_adjustments().

Reference:
    Israetel, Hoffmann & Smith, Scientific Principles of Hypertrophy Training.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from autoregulation_engine.adjustment.substitution import (
    is_deload_recommended,
    recommend_substitutions,
)
from autoregulation_engine.models.analysis import EnhancedAutoregulationResult
from autoregulation_engine.models.biometrics import RecoveryMetrics
from autoregulation_engine.models.enums import (
    DELOAD_TREND_THRESHOLD,
    ENDURANCE_MIN_SLEEP_HOURS,
    ENHANCED_GOOD_RECOVERY,
    ENHANCED_HIGH_RECOVERY,
    ENHANCED_LOW_RECOVERY,
    ENHANCED_VERY_LOW_RECOVERY,
    MAX_INTENSITY_ADJUSTMENT,
    MIN_INTENSITY_ADJUSTMENT,
    POOR_SLEEP_EFFICIENCY_THRESHOLD,
    SHORT_SLEEP_HOURS,
    STRAIN_TREND_THRESHOLD,
    STRENGTH_CNS_RECOVERY_THRESHOLD,
    GoalType,
)
from autoregulation_engine.models.program import ProgramGoal
from autoregulation_engine.models.workout import WorkoutPrescription

if TYPE_CHECKING:
    from biometric_sources.protocols import ExerciseCatalog


def _recovery_guidance(recovery: float) -> str:
    if recovery < ENHANCED_LOW_RECOVERY:
        return (
            "Focus on sleep, hydration, and stress management. "
            "Consider additional recovery modalities."
        )
    if recovery > ENHANCED_GOOD_RECOVERY:
        return "Good recovery state. Maintain current recovery practices."
    return "Moderate recovery. Ensure adequate sleep and nutrition."


def perform_enhanced_autoregulation(
    metrics: RecoveryMetrics,
    goal: ProgramGoal,
    workout: WorkoutPrescription,
    week_in_program: int,
    catalog: ExerciseCatalog | None = None,
) -> EnhancedAutoregulationResult:
    """Compute volume, intensity and substitution adjustments for a workout.

    Args:
        metrics: Output of calculate_recovery_metrics().
        goal: The program goal; strength and endurance goals get extra tweaks.
        workout: Workout whose exercises may be substituted.
        week_in_program: Week used for the deload check.
        catalog: Optional catalog for substitute existence checks.

    Returns:
        An EnhancedAutoregulationResult. The intensity adjustment is clamped
        to [-2, +2]; the volume multiplier is always positive.
    """
    reasoning: list[str] = []
    next_day: list[str] = []
    volume = 1.0
    intensity = 0.0
    rest_day = False

    if metrics.recovery < ENHANCED_VERY_LOW_RECOVERY:
        volume = 0.5
        intensity = -2.0
        rest_day = True
        reasoning.append("Very low recovery (<30%) - significant volume reduction recommended")
        next_day.append("Consider complete rest or light mobility work")
    elif metrics.recovery < ENHANCED_LOW_RECOVERY:
        volume = 0.7
        intensity = -1.0
        reasoning.append("Low recovery (30-50%) - moderate volume reduction")
        next_day.append("Focus on technique and lighter loads")
    elif metrics.recovery > ENHANCED_HIGH_RECOVERY:
        volume = 1.1
        reasoning.append("High recovery (>80%) - slight volume increase possible")
        next_day.append("Good day for intensity or volume progression")

    if metrics.sleep_duration_hours < SHORT_SLEEP_HOURS:
        volume *= 0.8
        intensity -= 1.0
        reasoning.append(
            f"Insufficient sleep ({metrics.sleep_duration_hours:.1f}h) - reducing intensity"
        )
    elif metrics.sleep_quality < POOR_SLEEP_EFFICIENCY_THRESHOLD:
        volume *= 0.9
        reasoning.append(f"Poor sleep quality ({metrics.sleep_quality:g}%) - slight volume reduction")

    if metrics.strain_trend > STRAIN_TREND_THRESHOLD:
        volume *= 0.8
        reasoning.append("High strain trend - reducing volume to prevent overreaching")
        next_day.append("Monitor recovery closely over next few days")

    deload = False
    if metrics.recovery_trend < DELOAD_TREND_THRESHOLD:
        deload = is_deload_recommended(metrics.recovery_trend, week_in_program)
        volume *= 0.6
        reasoning.append("Declining recovery trend - deload may be needed")
        if deload:
            next_day.append("Consider implementing a deload week")

    substitutions = recommend_substitutions(workout.exercises, metrics.recovery, catalog)

    if goal.type == GoalType.STRENGTH and metrics.recovery < STRENGTH_CNS_RECOVERY_THRESHOLD:
        intensity -= 1.0
        reasoning.append("Strength program requires high CNS readiness - reducing intensity")
    elif goal.type == GoalType.ENDURANCE and metrics.sleep_duration_hours < ENDURANCE_MIN_SLEEP_HOURS:
        volume *= 0.85
        reasoning.append("Endurance training requires adequate recovery - reducing volume")

    intensity = max(MIN_INTENSITY_ADJUSTMENT, min(MAX_INTENSITY_ADJUSTMENT, intensity))

    should_adjust = (
        volume != 1.0 or intensity != 0.0 or bool(substitutions) or rest_day or deload
    )

    return EnhancedAutoregulationResult(
        should_adjust=should_adjust,
        volume_multiplier=volume,
        intensity_adjustment=intensity,
        exercise_substitutions=substitutions,
        rest_day_recommended=rest_day,
        deload_recommended=deload,
        reasoning=tuple(reasoning),
        recovery_guidance=_recovery_guidance(metrics.recovery),
        next_day_recommendations=tuple(next_day),
    )
