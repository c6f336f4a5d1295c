"""Load rule: high accumulated strain.

A strain score above 18 (on the 0-21 scale) blocks any volume increase and
pushes the intensity adjustment to at most -2.
"""

from __future__ import annotations

from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.enums import (
    COMPOUND_RULE_CEILING,
    HIGH_STRAIN_INTENSITY_STEP,
    HIGH_STRAIN_THRESHOLD,
    AutoregulationTrigger,
    VolumeRecommendation,
)
from autoregulation_engine.rules.base import AutoregulationRule, RuleContext


class HighStrainRule(AutoregulationRule):
    rule_id = "high_strain"
    version = "1.0.0"
    order = 50

    def evaluate(
        self, context: RuleContext, running: ProgramAwareAnalysis
    ) -> ProgramAwareAnalysis | None:
        strain = context.metrics.strain
        if strain <= HIGH_STRAIN_THRESHOLD:
            return None

        volume = running.volume_recommendation
        if volume == VolumeRecommendation.INCREASE:
            volume = VolumeRecommendation.MAINTAIN

        return self.with_note(
            running,
            f"High strain ({strain:.1f}) above {HIGH_STRAIN_THRESHOLD}: "
            f"no volume increase, intensity reduced.",
            AutoregulationTrigger.HIGH_STRAIN,
            volume_recommendation=volume,
            intensity_adjustment=min(
                running.intensity_adjustment + HIGH_STRAIN_INTENSITY_STEP,
                COMPOUND_RULE_CEILING,
            ),
        )
