"""Recovery rule: critically low recovery.

Below a recovery score of 33 the athlete is in the red zone: cut volume,
drop intensity by two RPE points, recommend a rest day and steer exercise
selection toward low-demand variations.

Reference:
    Israetel, Hoffmann & Smith, Scientific Principles of Hypertrophy
    Training (RP): training above MRV when recovery is compromised.
"""

from __future__ import annotations

from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.enums import (
    CRITICAL_RECOVERY_INTENSITY_ADJ,
    CRITICAL_RECOVERY_SUBSTITUTIONS,
    CRITICAL_RECOVERY_THRESHOLD,
    AutoregulationTrigger,
    VolumeRecommendation,
)
from autoregulation_engine.rules.base import AutoregulationRule, RuleContext


class CriticalRecoveryRule(AutoregulationRule):
    """Recommends rest and reduced load when recovery is critically low."""

    rule_id = "critical_recovery"
    version = "1.0.0"
    order = 10

    def evaluate(
        self, context: RuleContext, running: ProgramAwareAnalysis
    ) -> ProgramAwareAnalysis | None:
        recovery = context.metrics.recovery
        if recovery >= CRITICAL_RECOVERY_THRESHOLD:
            return None

        return self.with_note(
            running,
            f"Critical recovery ({recovery:.0f}%) below {CRITICAL_RECOVERY_THRESHOLD}%: "
            f"rest day recommended, volume and intensity reduced.",
            AutoregulationTrigger.CRITICAL_RECOVERY,
            volume_recommendation=VolumeRecommendation.DECREASE,
            intensity_adjustment=CRITICAL_RECOVERY_INTENSITY_ADJ,
            rest_day_recommendation=True,
            exercise_substitutions=running.exercise_substitutions + CRITICAL_RECOVERY_SUBSTITUTIONS,
        )
