"""Recovery rule: good recovery (66+).

Accumulation is the phase where extra volume pays off, so a very high
recovery score (>80) there earns a volume increase; otherwise the plan is
held as written.
"""

from __future__ import annotations

from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.enums import (
    HIGH_RECOVERY_VOLUME_THRESHOLD,
    MODERATE_RECOVERY_THRESHOLD,
    MesocyclePhase,
    VolumeRecommendation,
)
from autoregulation_engine.rules.base import AutoregulationRule, RuleContext


class HighRecoveryRule(AutoregulationRule):
    rule_id = "high_recovery"
    version = "1.0.0"
    order = 40

    def evaluate(
        self, context: RuleContext, running: ProgramAwareAnalysis
    ) -> ProgramAwareAnalysis | None:
        recovery = context.metrics.recovery
        if recovery < MODERATE_RECOVERY_THRESHOLD:
            return None

        if (
            context.phase == MesocyclePhase.ACCUMULATION
            and recovery > HIGH_RECOVERY_VOLUME_THRESHOLD
        ):
            return self.with_note(
                running,
                f"High recovery ({recovery:.0f}%) in accumulation: volume can increase.",
                volume_recommendation=VolumeRecommendation.INCREASE,
            )

        return self.with_note(
            running,
            f"Good recovery ({recovery:.0f}%): maintain planned volume.",
            volume_recommendation=VolumeRecommendation.MAINTAIN,
        )
