"""Sleep rule: poor sleep efficiency.

Reference:
    Fullagar et al. (2015). Sleep and athletic performance. Sports Med
    45(2):161-186.
"""

from __future__ import annotations

from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.enums import (
    COMPOUND_RULE_CEILING,
    POOR_SLEEP_EFFICIENCY_THRESHOLD,
    POOR_SLEEP_INTENSITY_STEP,
    AutoregulationTrigger,
)
from autoregulation_engine.rules.base import AutoregulationRule, RuleContext


class PoorSleepRule(AutoregulationRule):
    rule_id = "poor_sleep"
    version = "1.0.0"
    order = 60

    def evaluate(
        self, context: RuleContext, running: ProgramAwareAnalysis
    ) -> ProgramAwareAnalysis | None:
        efficiency = context.metrics.sleep_quality
        if efficiency >= POOR_SLEEP_EFFICIENCY_THRESHOLD:
            return None

        return self.with_note(
            running,
            f"Poor sleep efficiency ({efficiency:.0f}%): intensity reduced.",
            AutoregulationTrigger.POOR_SLEEP,
            intensity_adjustment=min(
                running.intensity_adjustment + POOR_SLEEP_INTENSITY_STEP,
                COMPOUND_RULE_CEILING,
            ),
        )
