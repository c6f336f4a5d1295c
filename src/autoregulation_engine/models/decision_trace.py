"""Decision trace: audit trail of how the engine reached its analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto

from autoregulation_engine.models.analysis import ProgramAwareAnalysis


class RuleStatus(IntEnum):
    """Whether a rule fired or was skipped."""

    FIRED = auto()
    SKIPPED = auto()


@dataclass(frozen=True)
class RuleResult:
    """Record of a single rule's evaluation during an engine call."""

    rule_id: str
    status: RuleStatus
    explanation: str = ""


@dataclass(frozen=True)
class DecisionTrace:
    """Complete audit trail for a single program-aware analysis.

    Records every rule's outcome in evaluation order so adjustments are
    explainable.
    """

    rule_results: tuple[RuleResult, ...] = field(default_factory=tuple)
    final_analysis: ProgramAwareAnalysis | None = None

    @property
    def fired_rule_ids(self) -> tuple[str, ...]:
        return tuple(r.rule_id for r in self.rule_results if r.status == RuleStatus.FIRED)
