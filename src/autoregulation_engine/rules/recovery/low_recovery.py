"""Recovery rule: low recovery (33-49)."""

from __future__ import annotations

from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.enums import (
    CRITICAL_RECOVERY_THRESHOLD,
    LOW_RECOVERY_INTENSITY_ADJ,
    LOW_RECOVERY_THRESHOLD,
    AutoregulationTrigger,
    VolumeRecommendation,
)
from autoregulation_engine.rules.base import AutoregulationRule, RuleContext


class LowRecoveryRule(AutoregulationRule):
    """Reduces volume and drops intensity one RPE point on low recovery."""

    rule_id = "low_recovery"
    version = "1.0.0"
    order = 20

    def evaluate(
        self, context: RuleContext, running: ProgramAwareAnalysis
    ) -> ProgramAwareAnalysis | None:
        recovery = context.metrics.recovery
        if not CRITICAL_RECOVERY_THRESHOLD <= recovery < LOW_RECOVERY_THRESHOLD:
            return None

        return self.with_note(
            running,
            f"Low recovery ({recovery:.0f}%): volume reduced, RPE targets lowered by 1.",
            AutoregulationTrigger.LOW_RECOVERY,
            volume_recommendation=VolumeRecommendation.DECREASE,
            intensity_adjustment=LOW_RECOVERY_INTENSITY_ADJ,
        )
