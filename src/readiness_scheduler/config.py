"""Environment-variable-based configuration for the daily readiness check."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

SNAPSHOT_PATH: Path = Path(os.environ.get("AUTOREG_SNAPSHOT", "snapshot.json")).expanduser()
AGGRESSIVENESS: str | None = os.environ.get("AUTOREG_AGGRESSIVENESS")
MIN_RECOVERY: str | None = os.environ.get("AUTOREG_MIN_RECOVERY")
MAX_STRAIN: str | None = os.environ.get("AUTOREG_MAX_STRAIN")
SLEEP_THRESHOLD: str | None = os.environ.get("AUTOREG_SLEEP_THRESHOLD")
HRV_THRESHOLD: str | None = os.environ.get("AUTOREG_HRV_THRESHOLD")
ALLOW_SKIP: str | None = os.environ.get("AUTOREG_ALLOW_SKIP")
ALLOW_INCREASE: str | None = os.environ.get("AUTOREG_ALLOW_INCREASE")
DAILY_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "6"))
DAILY_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))


def settings_overrides() -> dict[str, Any]:
    """Settings set through the environment, keyed by AutoregulationConfig field.

    Unset variables are left out so snapshot settings and defaults apply.
    Values stay raw strings; validate_settings() parses and clamps them.
    """
    candidates = {
        "aggressiveness": AGGRESSIVENESS,
        "min_recovery_for_intense": MIN_RECOVERY,
        "max_strain_threshold": MAX_STRAIN,
        "sleep_quality_threshold": SLEEP_THRESHOLD,
        "hrv_threshold": HRV_THRESHOLD,
        "allow_skip_workouts": ALLOW_SKIP,
        "allow_intensity_increase": ALLOW_INCREASE,
    }
    return {key: value for key, value in candidates.items() if value is not None}
