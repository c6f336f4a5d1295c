"""User-tunable autoregulation settings."""

from __future__ import annotations

from dataclasses import dataclass

from autoregulation_engine.models.enums import Aggressiveness


@dataclass(frozen=True)
class AutoregulationConfig:
    """Thresholds and switches controlling automatic workout adjustment.

    Always pass through ``validate_settings()`` before rule evaluation so
    every numeric field lies within its documented bounds.
    """

    enabled: bool = True
    aggressiveness: Aggressiveness = Aggressiveness.MODERATE
    # Stored and validated only; the classifier uses INTENSE_WORKOUT_RECOVERY_THRESHOLD.
    min_recovery_for_intense: float = 70.0  # 0-100
    max_strain_threshold: float = 15.0  # 0-20
    sleep_quality_threshold: float = 70.0  # 0-100
    hrv_threshold: float = 40.0  # ms, 10-100
    allow_skip_workouts: bool = True
    allow_intensity_increase: bool = True
    respect_program_goals: bool = True
