"""Default autoregulation settings and their sanitisation."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from autoregulation_engine.models.enums import (
    HRV_THRESHOLD_BOUNDS,
    MAX_STRAIN_BOUNDS,
    MIN_RECOVERY_BOUNDS,
    SLEEP_QUALITY_BOUNDS,
    Aggressiveness,
)
from autoregulation_engine.models.settings import AutoregulationConfig

DEFAULT_SETTINGS = AutoregulationConfig()


def default_settings() -> AutoregulationConfig:
    return dataclasses.replace(DEFAULT_SETTINGS)


def _clamp(value: Any, bounds: tuple[float, float], default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number:  # NaN
        return default
    low, high = bounds
    return max(low, min(high, number))


def _parse_aggressiveness(value: Any) -> Aggressiveness:
    if isinstance(value, Aggressiveness):
        return value
    if isinstance(value, str):
        try:
            return Aggressiveness[value.strip().upper()]
        except KeyError:
            return DEFAULT_SETTINGS.aggressiveness
    return DEFAULT_SETTINGS.aggressiveness


def _parse_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def validate_settings(
    settings: AutoregulationConfig | Mapping[str, Any] | None = None,
) -> AutoregulationConfig:
    """Sanitise settings into their documented ranges.

    Accepts a full config, a mapping of partial overrides keyed by field
    name, or None. Missing fields take the defaults; numeric fields are
    clamped (recovery 0-100, strain 0-20, sleep 0-100, HRV 10-100);
    unparseable values fall back to the default.

    Returns:
        A new AutoregulationConfig.
    """
    if settings is None:
        raw: Mapping[str, Any] = {}
    elif isinstance(settings, AutoregulationConfig):
        raw = dataclasses.asdict(settings)
    else:
        raw = settings

    d = DEFAULT_SETTINGS
    return AutoregulationConfig(
        enabled=_parse_bool(raw.get("enabled"), d.enabled),
        aggressiveness=_parse_aggressiveness(raw.get("aggressiveness")),
        min_recovery_for_intense=_clamp(
            raw.get("min_recovery_for_intense", d.min_recovery_for_intense),
            MIN_RECOVERY_BOUNDS,
            d.min_recovery_for_intense,
        ),
        max_strain_threshold=_clamp(
            raw.get("max_strain_threshold", d.max_strain_threshold),
            MAX_STRAIN_BOUNDS,
            d.max_strain_threshold,
        ),
        sleep_quality_threshold=_clamp(
            raw.get("sleep_quality_threshold", d.sleep_quality_threshold),
            SLEEP_QUALITY_BOUNDS,
            d.sleep_quality_threshold,
        ),
        hrv_threshold=_clamp(
            raw.get("hrv_threshold", d.hrv_threshold),
            HRV_THRESHOLD_BOUNDS,
            d.hrv_threshold,
        ),
        allow_skip_workouts=_parse_bool(raw.get("allow_skip_workouts"), d.allow_skip_workouts),
        allow_intensity_increase=_parse_bool(
            raw.get("allow_intensity_increase"), d.allow_intensity_increase
        ),
        respect_program_goals=_parse_bool(raw.get("respect_program_goals"), d.respect_program_goals),
    )
