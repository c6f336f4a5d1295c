"""AutoregulationEngine: the orchestrator that adjusts today's workout."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from datetime import date
from typing import TYPE_CHECKING, Any

from autoregulation_engine.adjustment.classifier import should_adjust_workout
from autoregulation_engine.adjustment.mutation import generate_adjusted_workout
from autoregulation_engine.adjustment.program_context import build_program_context
from autoregulation_engine.adjustment.substitution import (
    apply_exercise_adjustments,
    recommend_substitutions,
)
from autoregulation_engine.math.mesocycle import compute_current_week, resolve_phase
from autoregulation_engine.math.rpe import rpe_guidance
from autoregulation_engine.models.analysis import (
    AdjustmentDecision,
    ProgramAdjustment,
    ProgramAwareAnalysis,
    RPEGuidance,
    WorkoutAdjustment,
)
from autoregulation_engine.models.biometrics import (
    DailyMetrics,
    RecoveryRecord,
    SleepRecord,
    StrainRecord,
)
from autoregulation_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from autoregulation_engine.models.enums import (
    DAILY_FALLBACK_SLEEP_QUALITY,
    DAILY_FALLBACK_STRAIN,
    MAX_INTENSITY_ADJUSTMENT,
    MIN_INTENSITY_ADJUSTMENT,
    AdjustmentType,
)
from autoregulation_engine.models.program import GoalProgressSummary, ProgramContext, ProgramGoal
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.models.workout import WorkoutPrescription
from autoregulation_engine.performance.analyzer import ProgramPerformanceAnalyzer
from autoregulation_engine.registry import RuleRegistry
from autoregulation_engine.rules.base import RuleContext
from autoregulation_engine.settings import validate_settings

if TYPE_CHECKING:
    from biometric_sources.protocols import ExerciseCatalog

logger = logging.getLogger(__name__)

ConfigInput = AutoregulationConfig | Mapping[str, Any] | None

# Workouts replaced wholesale keep no exercises worth adjusting
_REPLACING_ADJUSTMENTS = frozenset({AdjustmentType.SKIP, AdjustmentType.TYPE})


class AutoregulationEngine:
    """Runs the program-aware rules and adjusts workouts for readiness.

    Usage:
        engine = AutoregulationEngine()
        analysis, trace = engine.analyze_with_trace(metrics, goal, current_week=5)
        adjustment = engine.analyze_and_adjust_todays_workout(
            workout, recovery, strain, sleep, today=date(2025, 3, 3)
        )
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        analyzer: ProgramPerformanceAnalyzer | None = None,
        catalog: ExerciseCatalog | None = None,
    ) -> None:
        self.registry = registry or RuleRegistry()
        self.analyzer = analyzer or ProgramPerformanceAnalyzer()
        self.catalog = catalog

        # Auto-discover rules if using default registry
        if registry is None:
            self.registry.discover_rules()

    def analyze_program_aware(
        self,
        metrics: DailyMetrics,
        goal: ProgramGoal,
        current_week: int,
        config: ConfigInput = None,
    ) -> ProgramAwareAnalysis:
        """Phase-aware readiness analysis for one program week.

        See analyze_with_trace() for arguments.
        """
        analysis, _ = self.analyze_with_trace(metrics, goal, current_week, config)
        return analysis

    def analyze_with_trace(
        self,
        metrics: DailyMetrics,
        goal: ProgramGoal,
        current_week: int,
        config: ConfigInput = None,
    ) -> tuple[ProgramAwareAnalysis, DecisionTrace]:
        """Evaluate every rule in order, compounding on a running analysis.

        Args:
            metrics: Today's readiness snapshot.
            goal: The program goal; its periodization decides the phase.
            current_week: 1-indexed program week.
            config: Settings, validated before any rule runs.

        Returns:
            A tuple of (ProgramAwareAnalysis, DecisionTrace).

        Raises:
            ValueError: If current_week < 1 or the mesocycle length is < 1.
        """
        config = validate_settings(config)
        phase = resolve_phase(current_week, goal)
        context = RuleContext(
            metrics=metrics,
            goal=goal,
            current_week=current_week,
            phase=phase,
            config=config,
        )

        running = ProgramAwareAnalysis(current_phase=phase)
        rule_results: list[RuleResult] = []

        for rule in self.registry.get_all_rules():
            updated = rule.evaluate(context, running)
            if updated is None:
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.SKIPPED,
                        explanation="Rule conditions not met.",
                    )
                )
                continue

            running = updated
            rule_results.append(
                RuleResult(
                    rule_id=rule.rule_id,
                    status=RuleStatus.FIRED,
                    explanation=updated.notes[-1] if updated.notes else "",
                )
            )

        analysis = dataclasses.replace(
            running,
            intensity_adjustment=max(
                MIN_INTENSITY_ADJUSTMENT,
                min(MAX_INTENSITY_ADJUSTMENT, running.intensity_adjustment),
            ),
        )
        trace = DecisionTrace(rule_results=tuple(rule_results), final_analysis=analysis)
        return analysis, trace

    def should_adjust_workout(
        self,
        metrics: DailyMetrics,
        workout: WorkoutPrescription,
        config: ConfigInput = None,
    ) -> AdjustmentDecision:
        return should_adjust_workout(metrics, workout, validate_settings(config))

    def generate_adjusted_workout(
        self,
        workout: WorkoutPrescription,
        metrics: DailyMetrics,
        decision: AdjustmentDecision,
        config: ConfigInput = None,
        analysis: ProgramAwareAnalysis | None = None,
        program_context: ProgramContext | None = None,
    ) -> WorkoutPrescription:
        return generate_adjusted_workout(
            workout,
            metrics,
            decision,
            validate_settings(config),
            analysis=analysis,
            program_context=program_context,
        )

    def analyze_and_adjust_todays_workout(
        self,
        workout: WorkoutPrescription | None,
        recovery: Sequence[RecoveryRecord],
        strain: Sequence[StrainRecord],
        sleep: Sequence[SleepRecord],
        today: date,
        config: ConfigInput = None,
        goal: ProgramGoal | None = None,
        current_week: int | None = None,
        summary: GoalProgressSummary | None = None,
    ) -> WorkoutAdjustment | None:
        """Decide whether today's workout needs adjusting and build the adjustment.

        Fails open: returns None when autoregulation is disabled, there is no
        workout, today's recovery record is missing, or the classification
        does not call for a change.

        Args:
            workout: Today's prescribed workout, if any.
            recovery: Recovery records, newest first.
            strain: Strain records, newest first.
            sleep: Sleep records, newest first.
            today: Injected "today"; records are matched on this date.
            config: Settings, validated here.
            goal: Optional program goal. Enables the program-aware analysis
                and per-exercise adjustments.
            current_week: Program week; derived from ``goal.start_date`` and
                ``today`` when omitted.
            summary: Optional goal progress summary for pacing context.

        Returns:
            A WorkoutAdjustment, or None.
        """
        config = validate_settings(config)
        if not config.enabled or workout is None:
            return None

        todays_recovery = next((r for r in recovery if r.date == today), None)
        if todays_recovery is None:
            logger.info("No recovery data for %s, leaving workout unchanged", today.isoformat())
            return None

        todays_strain = next((s for s in strain if s.date == today), None)
        todays_sleep = next((s for s in sleep if s.date == today), None)
        metrics = DailyMetrics(
            recovery=todays_recovery.score,
            strain=todays_strain.score if todays_strain else DAILY_FALLBACK_STRAIN,
            hrv=todays_recovery.hrv_ms,
            sleep_quality=todays_sleep.efficiency if todays_sleep else DAILY_FALLBACK_SLEEP_QUALITY,
        )

        decision = should_adjust_workout(metrics, workout, config)
        if not decision.should_adjust:
            logger.debug(
                "No adjustment for %s (confidence %.2f)", workout.title, decision.confidence
            )
            return None

        analysis = None
        if goal is not None:
            week = current_week or compute_current_week(goal.start_date, today)
            analysis = self.analyze_program_aware(metrics, goal, week, config)

        adjusted = generate_adjusted_workout(
            workout,
            metrics,
            decision,
            config,
            analysis=analysis,
            program_context=build_program_context(goal, summary),
        )

        if (
            analysis is not None
            and adjusted.exercises
            and decision.adjustment_type not in _REPLACING_ADJUSTMENTS
        ):
            substitutions = recommend_substitutions(adjusted.exercises, metrics.recovery, self.catalog)
            adjusted = apply_exercise_adjustments(
                adjusted,
                analysis.volume_multiplier,
                analysis.intensity_adjustment,
                substitutions,
            )

        logger.info(
            "Adjusted %s: %s (%s, confidence %.2f)",
            workout.title,
            decision.reason,
            decision.adjustment_type.name,
            decision.confidence,
        )
        return WorkoutAdjustment(
            original_workout=workout,
            adjusted_workout=adjusted,
            adjustment_reason=decision.reason,
            adjustment_type=decision.adjustment_type,
            confidence_score=decision.confidence,
            metrics=metrics,
        )

    def analyze_weekly_program_performance(
        self,
        program_id: str,
        recovery: Sequence[RecoveryRecord],
        strain: Sequence[StrainRecord],
        sleep: Sequence[SleepRecord],
        as_of: date,
        config: ConfigInput = None,
        goal: ProgramGoal | None = None,
        summary: GoalProgressSummary | None = None,
        planned_workouts: Sequence[WorkoutPrescription] = (),
    ) -> ProgramAdjustment | None:
        return self.analyzer.analyze_weekly(
            program_id,
            recovery,
            strain,
            sleep,
            as_of,
            validate_settings(config),
            goal=goal,
            summary=summary,
            planned_workouts=planned_workouts,
        )

    def rpe_guidance(self, base_rpe: float, analysis: ProgramAwareAnalysis) -> RPEGuidance:
        return rpe_guidance(base_rpe, analysis)
