"""Recovery metrics: current readiness values and short-window trends.

All input sequences are newest-first (index 0 is today). The trend compares
the recent half of the window against the older half, so a positive value
means the metric has risen recently.

References:
    Plews et al. (2013). Training adaptation and heart rate variability in
    elite endurance athletes. Int J Sports Physiol Perform 8(6):688-694.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from autoregulation_engine.models.biometrics import (
    RecoveryMetrics,
    RecoveryRecord,
    SleepRecord,
    StrainRecord,
)
from autoregulation_engine.models.enums import (
    DEFAULT_METRICS_WINDOW_DAYS,
    FALLBACK_RECOVERY_SCORE,
    FALLBACK_SLEEP_DURATION_HOURS,
    FALLBACK_SLEEP_EFFICIENCY,
    FALLBACK_STRAIN_SCORE,
)


def calculate_trend(values: Sequence[float]) -> float:
    """Difference between the mean of the recent half and the older half.

    Args:
        values: Daily values, newest first.

    Returns:
        ``mean(values[:n//2]) - mean(values[n//2:])``, or 0.0 with fewer
        than two points.
    """
    if len(values) < 2:
        return 0.0
    series = np.asarray(values, dtype=np.float64)
    split = len(series) // 2
    return float(series[:split].mean() - series[split:].mean())


def calculate_recovery_metrics(
    recovery: Sequence[RecoveryRecord],
    strain: Sequence[StrainRecord],
    sleep: Sequence[SleepRecord],
    window: int = DEFAULT_METRICS_WINDOW_DAYS,
) -> RecoveryMetrics:
    """Summarise the most recent ``window`` days of biometric records.

    Missing series fall back to neutral values (recovery 50, strain 10,
    sleep efficiency 85%, 7.5 h of sleep) instead of failing.

    Args:
        recovery: Recovery records, newest first.
        strain: Strain records, newest first.
        sleep: Sleep records, newest first.
        window: Number of days to consider.

    Returns:
        A RecoveryMetrics snapshot.

    Raises:
        ValueError: If window < 1.
    """
    if window < 1:
        raise ValueError(f"Metrics window must be at least 1 day, got {window}")

    recent_recovery = list(recovery[:window])
    recent_strain = list(strain[:window])
    recent_sleep = list(sleep[:window])

    current_recovery = recent_recovery[0].score if recent_recovery else FALLBACK_RECOVERY_SCORE
    current_strain = recent_strain[0].score if recent_strain else FALLBACK_STRAIN_SCORE

    if recent_sleep:
        sleep_quality = recent_sleep[0].efficiency
        sleep_hours = recent_sleep[0].duration_minutes / 60.0
    else:
        sleep_quality = FALLBACK_SLEEP_EFFICIENCY
        sleep_hours = FALLBACK_SLEEP_DURATION_HOURS

    return RecoveryMetrics(
        recovery=float(current_recovery),
        recovery_trend=calculate_trend([r.score for r in recent_recovery]),
        strain=float(current_strain),
        strain_trend=calculate_trend([s.score for s in recent_strain]),
        sleep_quality=float(sleep_quality),
        sleep_duration_hours=float(sleep_hours),
        hrv_trend=calculate_trend([r.hrv_ms for r in recent_recovery]),
        resting_hr_trend=calculate_trend([r.resting_heart_rate for r in recent_recovery]),
    )
