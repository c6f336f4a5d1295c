"""Periodization rule: scheduled deload.

A deload week reduces volume and intensity regardless of how good the
readiness numbers look.
"""

from __future__ import annotations

from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.enums import (
    COMPOUND_RULE_CEILING,
    DELOAD_INTENSITY_STEP,
    MesocyclePhase,
    VolumeRecommendation,
)
from autoregulation_engine.rules.base import AutoregulationRule, RuleContext


class DeloadPhaseRule(AutoregulationRule):
    rule_id = "deload_phase"
    version = "1.0.0"
    order = 70

    def evaluate(
        self, context: RuleContext, running: ProgramAwareAnalysis
    ) -> ProgramAwareAnalysis | None:
        if context.phase != MesocyclePhase.DELOAD:
            return None

        return self.with_note(
            running,
            f"Deload week (week {context.current_week}): volume and intensity reduced.",
            volume_recommendation=VolumeRecommendation.DECREASE,
            intensity_adjustment=min(
                running.intensity_adjustment + DELOAD_INTENSITY_STEP,
                COMPOUND_RULE_CEILING,
            ),
        )
