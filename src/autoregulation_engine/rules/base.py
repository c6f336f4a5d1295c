"""Abstract base class for program-aware autoregulation rules."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass

from autoregulation_engine.models.analysis import ProgramAwareAnalysis
from autoregulation_engine.models.biometrics import DailyMetrics
from autoregulation_engine.models.enums import AutoregulationTrigger, MesocyclePhase
from autoregulation_engine.models.program import ProgramGoal
from autoregulation_engine.models.settings import AutoregulationConfig


@dataclass(frozen=True)
class RuleContext:
    """Inputs every rule may read: today's metrics and the program position."""

    metrics: DailyMetrics
    goal: ProgramGoal
    current_week: int
    phase: MesocyclePhase
    config: AutoregulationConfig


class AutoregulationRule(ABC):
    """Base class for all program-aware autoregulation rules.

    Rules are discovered automatically by the RuleRegistry and applied by
    the AutoregulationEngine in ascending ``order``. They compound: each
    rule receives the analysis produced so far and returns an updated copy,
    or None when it does not apply.

    Subclasses must define:
        rule_id: unique identifier (e.g. "critical_recovery")
        version: semantic version string
        order: evaluation position (lower runs first)
        evaluate(): the rule's decision logic
    """

    rule_id: str
    version: str
    order: int

    @abstractmethod
    def evaluate(
        self, context: RuleContext, running: ProgramAwareAnalysis
    ) -> ProgramAwareAnalysis | None:
        """Apply this rule on top of the running analysis.

        Returns a new ProgramAwareAnalysis if the rule fired, or None.
        """
        ...

    @staticmethod
    def with_note(
        analysis: ProgramAwareAnalysis,
        note: str,
        trigger: AutoregulationTrigger | None = None,
        **changes: object,
    ) -> ProgramAwareAnalysis:
        """Copy ``analysis`` with ``changes`` applied and a note (and trigger) appended."""
        triggers = analysis.autoregulation_triggers
        if trigger is not None and trigger not in triggers:
            triggers = triggers + (trigger,)
        return dataclasses.replace(
            analysis,
            notes=analysis.notes + (note,),
            autoregulation_triggers=triggers,
            **changes,
        )
