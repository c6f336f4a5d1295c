"""Recovery rule: moderate recovery during peaking phases.

Intensification and realization weeks already load the athlete close to
their limit, so a middling recovery score (50-65) trims half an RPE point.
"""

from __future__ import annotations

from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.enums import (
    LOW_RECOVERY_THRESHOLD,
    MODERATE_RECOVERY_PEAK_PHASE_ADJ,
    MODERATE_RECOVERY_THRESHOLD,
    MesocyclePhase,
)
from autoregulation_engine.rules.base import AutoregulationRule, RuleContext

_PEAK_PHASES = frozenset({MesocyclePhase.INTENSIFICATION, MesocyclePhase.REALIZATION})


class ModerateRecoveryPeakPhaseRule(AutoregulationRule):
    rule_id = "moderate_recovery_peak_phase"
    version = "1.0.0"
    order = 30

    def evaluate(
        self, context: RuleContext, running: ProgramAwareAnalysis
    ) -> ProgramAwareAnalysis | None:
        recovery = context.metrics.recovery
        if not LOW_RECOVERY_THRESHOLD <= recovery < MODERATE_RECOVERY_THRESHOLD:
            return None
        if context.phase not in _PEAK_PHASES:
            return None

        return self.with_note(
            running,
            f"Moderate recovery ({recovery:.0f}%) during {context.phase.name.lower()}: "
            f"RPE targets lowered by 0.5.",
            intensity_adjustment=running.intensity_adjustment + MODERATE_RECOVERY_PEAK_PHASE_ADJ,
        )
