"""Biometric records and derived readiness snapshots.

Records are supplied newest-first by a BiometricDataSource, one per ISO date.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class RecoveryRecord:
    """Daily recovery score (0-100) with the HRV and resting HR behind it."""

    date: date
    score: float
    hrv_ms: float
    resting_heart_rate: float


@dataclass(frozen=True)
class StrainRecord:
    """Daily cardiovascular strain (0-21)."""

    date: date
    score: float
    avg_heart_rate: float = 0.0
    max_heart_rate: float = 0.0
    calories: float = 0.0


@dataclass(frozen=True)
class SleepRecord:
    """Nightly sleep efficiency (0-100) and total duration."""

    date: date
    efficiency: float
    duration_minutes: float


@dataclass(frozen=True)
class DailyMetrics:
    """Today's readiness snapshot used to classify a single workout."""

    recovery: float
    strain: float
    hrv: float
    sleep_quality: float


@dataclass(frozen=True)
class RecoveryMetrics:
    """Current values plus recent-vs-older trends over the metrics window.

    A positive trend means the recent half of the window averaged higher
    than the older half.
    """

    recovery: float
    recovery_trend: float
    strain: float
    strain_trend: float
    sleep_quality: float
    sleep_duration_hours: float
    hrv_trend: float
    resting_hr_trend: float
