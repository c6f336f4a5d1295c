"""RPE guidance: shift a base RPE by the analysis' intensity adjustment.

Reference:
    Helms et al. (2016). Application of the repetitions in reserve-based
    rating of perceived exertion scale for resistance training. Strength
    Cond J 38(4):42-49.
"""

from __future__ import annotations

import math

from autoregulation_engine.models.analysis import ProgramAwareAnalysis, RPEGuidance
from autoregulation_engine.models.enums import MAX_RPE, MIN_RPE, RPE_SCALE


def clamp_rpe(value: float) -> float:
    return max(float(MIN_RPE), min(float(MAX_RPE), value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Rounds to 6 decimals first so float noise (e.g. 45 * 0.7 =
    31.499999999999996) does not flip the result.
    """
    return int(math.floor(round(value, 6) + 0.5))


def describe_rpe(rpe: float) -> tuple[str, str]:
    """Look up (description, guidance) for the nearest whole RPE."""
    key = int(clamp_rpe(round_half_up(rpe)))
    return RPE_SCALE[key]


def rpe_guidance(base_rpe: float, analysis: ProgramAwareAnalysis) -> RPEGuidance:
    """Adjust a target RPE for today's readiness.

    Args:
        base_rpe: Programmed RPE (1-10).
        analysis: Program-aware analysis supplying ``intensity_adjustment``.

    Returns:
        RPEGuidance with the clamped RPE, its table description and notes
        explaining the adjustment.
    """
    adjustment = analysis.intensity_adjustment
    adjusted = clamp_rpe(base_rpe + adjustment)
    description, guidance = describe_rpe(adjusted)

    notes: list[str] = []
    if adjustment < 0:
        notes.append(f"RPE lowered by {abs(adjustment):g} to support recovery")
    elif adjustment > 0:
        notes.append(f"RPE raised by {adjustment:g} to exploit high readiness")
    else:
        notes.append("Train at the programmed RPE")

    if analysis.autoregulation_triggers:
        trigger_names = ", ".join(t.name for t in analysis.autoregulation_triggers)
        notes.append(f"Triggered by: {trigger_names}")

    return RPEGuidance(
        base_rpe=base_rpe,
        adjusted_rpe=adjusted,
        description=description,
        guidance=guidance,
        notes=tuple(notes),
    )
