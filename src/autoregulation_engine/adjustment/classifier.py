"""Workout classification: does today's workout need adjusting, and how?

Each readiness check that fires adds a reason and a confidence increment
on top of a 0.5 base. The total is scaled by the user's aggressiveness and
clamped to [0, 1]. The last check to fire decides the adjustment type.
"""

from __future__ import annotations

from autoregulation_engine.models.analysis import AdjustmentDecision
from autoregulation_engine.models.biometrics import DailyMetrics
from autoregulation_engine.models.enums import (
    AGGRESSIVENESS_FACTORS,
    BASE_CONFIDENCE,
    EXCELLENT_RECOVERY_CONFIDENCE,
    EXCELLENT_RECOVERY_THRESHOLD,
    HIGH_STRAIN_CONFIDENCE,
    INTENSE_WORKOUT_RECOVERY_THRESHOLD,
    LOW_HRV_CONFIDENCE,
    LOW_RECOVERY_HIGH_INTENSITY_CONFIDENCE,
    MIN_CONFIDENCE_TO_ADJUST,
    POOR_SLEEP_CONFIDENCE,
    VERY_LOW_RECOVERY_CONFIDENCE,
    VERY_LOW_RECOVERY_THRESHOLD,
    AdjustmentType,
    IntensityLevel,
)
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.models.workout import WorkoutPrescription


def should_adjust_workout(
    metrics: DailyMetrics,
    workout: WorkoutPrescription,
    config: AutoregulationConfig,
) -> AdjustmentDecision:
    """Classify today's workout against the readiness snapshot.

    Args:
        metrics: Today's recovery, strain, HRV and sleep quality.
        workout: The prescribed workout.
        config: Validated autoregulation settings.

    Returns:
        An AdjustmentDecision. ``should_adjust`` is True only when at least
        one check fired and the scaled confidence exceeds 0.4.
    """
    confidence = BASE_CONFIDENCE
    reasons: list[str] = []
    adjustment_type = AdjustmentType.INTENSITY
    intensity = workout.intensity

    if metrics.recovery < VERY_LOW_RECOVERY_THRESHOLD:
        reasons.append(f"Very low recovery ({metrics.recovery:g}%)")
        adjustment_type = (
            AdjustmentType.SKIP if config.allow_skip_workouts else AdjustmentType.ADD_RECOVERY
        )
        confidence += VERY_LOW_RECOVERY_CONFIDENCE
    elif metrics.recovery < INTENSE_WORKOUT_RECOVERY_THRESHOLD and intensity == IntensityLevel.HIGH:
        reasons.append(f"Low recovery ({metrics.recovery:g}%) for high-intensity workout")
        adjustment_type = AdjustmentType.INTENSITY
        confidence += LOW_RECOVERY_HIGH_INTENSITY_CONFIDENCE
    elif (
        metrics.recovery > EXCELLENT_RECOVERY_THRESHOLD
        and intensity == IntensityLevel.LOW
        and config.allow_intensity_increase
    ):
        reasons.append(f"Excellent recovery ({metrics.recovery:g}%) - can increase intensity")
        adjustment_type = AdjustmentType.INTENSITY
        confidence += EXCELLENT_RECOVERY_CONFIDENCE

    if metrics.hrv < config.hrv_threshold and intensity == IntensityLevel.HIGH:
        reasons.append(f"Low HRV ({metrics.hrv:g}ms) indicates high stress")
        adjustment_type = AdjustmentType.INTENSITY
        confidence += LOW_HRV_CONFIDENCE

    if metrics.sleep_quality < config.sleep_quality_threshold and intensity != IntensityLevel.LOW:
        reasons.append(f"Poor sleep quality ({metrics.sleep_quality:g}%)")
        adjustment_type = AdjustmentType.INTENSITY
        confidence += POOR_SLEEP_CONFIDENCE

    if metrics.strain > config.max_strain_threshold:
        reasons.append(f"High accumulated strain ({metrics.strain:g})")
        adjustment_type = AdjustmentType.ADD_RECOVERY
        confidence += HIGH_STRAIN_CONFIDENCE

    confidence = max(0.0, min(1.0, confidence * AGGRESSIVENESS_FACTORS[config.aggressiveness]))

    return AdjustmentDecision(
        should_adjust=bool(reasons) and confidence > MIN_CONFIDENCE_TO_ADJUST,
        adjustment_type=adjustment_type,
        confidence=confidence,
        reasons=tuple(reasons),
    )
