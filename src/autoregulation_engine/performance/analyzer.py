"""Weekly program performance analysis.

Looks at trailing 7-day averages instead of a single day, flags
overreaching, undertraining, poor sleep and elevated stress, and turns the
flags into a program-level adjustment. When the week's planned workouts are
supplied, each affected workout gets its own WorkoutAdjustment.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

import pandas as pd

from autoregulation_engine.adjustment.mutation import generate_adjusted_workout
from autoregulation_engine.adjustment.program_context import build_program_context
from autoregulation_engine.models.analysis import (
    AdjustmentDecision,
    ProgramAdjustment,
    ProgramProgress,
    WeeklyAverages,
    WorkoutAdjustment,
)
from autoregulation_engine.models.biometrics import (
    DailyMetrics,
    RecoveryRecord,
    SleepRecord,
    StrainRecord,
)
from autoregulation_engine.models.enums import (
    AGGRESSIVENESS_FACTORS,
    BASE_CONFIDENCE,
    DEFAULT_METRICS_WINDOW_DAYS,
    DEFAULT_PROGRESS_TOTAL_WEEKS,
    DEFAULT_PROGRESS_WEEK,
    FALLBACK_STRAIN_SCORE,
    OVERREACHING_RECOVERY,
    OVERREACHING_STRAIN,
    TYPE_SWAP_RECOVERY_THRESHOLD,
    UNDERTRAINING_RECOVERY,
    UNDERTRAINING_STRAIN,
    WEEKLY_FALLBACK_SLEEP_EFFICIENCY,
    WEEKLY_FLAG_CONFIDENCE,
    WEEKLY_POOR_SLEEP,
    AdjustmentType,
    IntensityLevel,
    PaceVsPlan,
    WeeklyAdjustmentType,
)
from autoregulation_engine.models.program import GoalProgressSummary, ProgramContext, ProgramGoal
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.models.workout import WorkoutPrescription
from autoregulation_engine.settings import validate_settings

logger = logging.getLogger(__name__)


def weekly_averages(
    recovery: Sequence[RecoveryRecord],
    strain: Sequence[StrainRecord],
    sleep: Sequence[SleepRecord],
    window: int = DEFAULT_METRICS_WINDOW_DAYS,
) -> WeeklyAverages:
    """Mean recovery, strain, HRV and sleep efficiency over the newest ``window`` records.

    Missing sleep efficiencies count as 75%. With no strain records the
    strain average is the neutral 10; with no sleep records it is 75%.

    Raises:
        ValueError: If there are no recovery records or window < 1.
    """
    if window < 1:
        raise ValueError(f"Averaging window must be at least 1 day, got {window}")
    if not recovery:
        raise ValueError("Weekly averages need at least one recovery record")

    rec = pd.DataFrame(
        {"score": [r.score for r in recovery[:window]], "hrv": [r.hrv_ms for r in recovery[:window]]},
        dtype="float64",
    )
    strain_scores = pd.Series([s.score for s in strain[:window]], dtype="float64")
    sleep_eff = pd.Series([s.efficiency for s in sleep[:window]], dtype="float64")
    sleep_eff = sleep_eff.fillna(WEEKLY_FALLBACK_SLEEP_EFFICIENCY)

    return WeeklyAverages(
        recovery=float(rec["score"].mean()),
        strain=float(strain_scores.mean()) if not strain_scores.empty else FALLBACK_STRAIN_SCORE,
        hrv=float(rec["hrv"].mean()),
        sleep_quality=(
            float(sleep_eff.mean()) if not sleep_eff.empty else WEEKLY_FALLBACK_SLEEP_EFFICIENCY
        ),
    )


def evaluate_weekly_flags(
    averages: WeeklyAverages,
    context: ProgramContext | None,
    config: AutoregulationConfig,
) -> tuple[tuple[str, ...], WeeklyAdjustmentType | None]:
    """Flag weekly patterns; the last flag raised decides the adjustment type.

    The type is None when no flag is raised.
    """
    flags: list[str] = []
    adjustment_type: WeeklyAdjustmentType | None = None

    if averages.recovery < OVERREACHING_RECOVERY and averages.strain > OVERREACHING_STRAIN:
        flags.append("Signs of overreaching detected")
        adjustment_type = WeeklyAdjustmentType.INCREASE_RECOVERY

    if (
        context is not None
        and context.is_ahead_of_schedule
        and averages.recovery > UNDERTRAINING_RECOVERY
        and averages.strain < UNDERTRAINING_STRAIN
    ):
        flags.append("Potential for increased training load")
        adjustment_type = WeeklyAdjustmentType.INCREASE_LOAD

    if averages.sleep_quality < WEEKLY_POOR_SLEEP:
        flags.append("Consistently poor sleep quality")
        adjustment_type = WeeklyAdjustmentType.MODIFY_SCHEDULE

    if averages.hrv < config.hrv_threshold:
        flags.append("Elevated stress levels")
        adjustment_type = WeeklyAdjustmentType.INCREASE_RECOVERY

    return tuple(flags), adjustment_type


def _workout_adjustment_type(
    weekly_type: WeeklyAdjustmentType,
    workout: WorkoutPrescription,
    averages: WeeklyAverages,
    config: AutoregulationConfig,
) -> AdjustmentType | None:
    """Which single-workout adjustment a weekly type implies for ``workout``, if any."""
    level = workout.intensity
    if weekly_type == WeeklyAdjustmentType.INCREASE_RECOVERY:
        if level < IntensityLevel.MEDIUM_HIGH:
            return None
        if averages.recovery < TYPE_SWAP_RECOVERY_THRESHOLD:
            return AdjustmentType.TYPE
        return AdjustmentType.INTENSITY
    if weekly_type == WeeklyAdjustmentType.MODIFY_SCHEDULE:
        return AdjustmentType.DURATION if level > IntensityLevel.LOW else None
    # INCREASE_LOAD
    if level <= IntensityLevel.LOW and config.allow_intensity_increase:
        return AdjustmentType.DURATION
    return None


def _changes_workout(original: WorkoutPrescription, adjusted: WorkoutPrescription) -> bool:
    return (
        adjusted.intensity != original.intensity
        or adjusted.duration != original.duration
        or adjusted.type != original.type
    )


class ProgramPerformanceAnalyzer:
    """Program-level counterpart of the daily workout adjustment.

    Usage:
        analyzer = ProgramPerformanceAnalyzer()
        adjustment = analyzer.analyze_weekly("prog-1", recovery, strain, sleep, today, config)
    """

    def analyze_weekly(
        self,
        program_id: str,
        recovery: Sequence[RecoveryRecord],
        strain: Sequence[StrainRecord],
        sleep: Sequence[SleepRecord],
        as_of: date,
        config: AutoregulationConfig | None = None,
        goal: ProgramGoal | None = None,
        summary: GoalProgressSummary | None = None,
        planned_workouts: Sequence[WorkoutPrescription] = (),
    ) -> ProgramAdjustment | None:
        """Analyse the trailing week and suggest a program-level adjustment.

        Args:
            program_id: Program being analysed.
            recovery: Recovery records, newest first.
            strain: Strain records, newest first.
            sleep: Sleep records, newest first.
            as_of: Injected "today"; becomes the adjustment date.
            config: Autoregulation settings (validated here).
            goal: Optional goal for pacing context.
            summary: Optional progress summary for that goal.
            planned_workouts: Optional upcoming workouts to adjust individually.

        Returns:
            A ProgramAdjustment, or None when autoregulation is disabled,
            there is no recovery data, or no flag was raised.
        """
        config = validate_settings(config)
        if not config.enabled:
            return None
        if not recovery:
            logger.info("No recovery data for program %s, skipping weekly analysis", program_id)
            return None

        averages = weekly_averages(recovery, strain, sleep)
        context = build_program_context(goal, summary)
        flags, weekly_type = evaluate_weekly_flags(averages, context, config)
        if weekly_type is None:
            return None

        reason = ", ".join(flags)
        logger.info("Program %s flagged: %s (%s)", program_id, reason, weekly_type.name)

        return ProgramAdjustment(
            program_id=program_id,
            adjustment_date=as_of,
            adjustment_type=weekly_type,
            overall_reason=reason,
            flags=flags,
            averages=averages,
            progress=self._progress(summary),
            adjustments=self._workout_adjustments(
                planned_workouts, averages, weekly_type, flags, config, context
            ),
        )

    @staticmethod
    def _progress(summary: GoalProgressSummary | None) -> ProgramProgress:
        if summary is None:
            return ProgramProgress(
                current_week=DEFAULT_PROGRESS_WEEK,
                total_weeks=DEFAULT_PROGRESS_TOTAL_WEEKS,
                goal_progress=0.0,
                pace_vs_plan=PaceVsPlan.ON_TRACK,
            )
        return ProgramProgress(
            current_week=summary.weeks_elapsed,
            total_weeks=summary.total_weeks,
            goal_progress=summary.percent_complete,
            pace_vs_plan=summary.pace_vs_plan,
        )

    @staticmethod
    def _workout_adjustments(
        planned_workouts: Sequence[WorkoutPrescription],
        averages: WeeklyAverages,
        weekly_type: WeeklyAdjustmentType,
        flags: tuple[str, ...],
        config: AutoregulationConfig,
        context: ProgramContext | None,
    ) -> tuple[WorkoutAdjustment, ...]:
        metrics = DailyMetrics(
            recovery=averages.recovery,
            strain=averages.strain,
            hrv=averages.hrv,
            sleep_quality=averages.sleep_quality,
        )
        confidence = min(
            1.0,
            (BASE_CONFIDENCE + WEEKLY_FLAG_CONFIDENCE * len(flags))
            * AGGRESSIVENESS_FACTORS[config.aggressiveness],
        )

        adjustments: list[WorkoutAdjustment] = []
        for workout in planned_workouts:
            adjustment_type = _workout_adjustment_type(weekly_type, workout, averages, config)
            if adjustment_type is None:
                continue
            decision = AdjustmentDecision(
                should_adjust=True,
                adjustment_type=adjustment_type,
                confidence=confidence,
                reasons=flags,
            )
            adjusted = generate_adjusted_workout(
                workout,
                metrics,
                decision,
                config,
                program_context=context,
                allow_longer=weekly_type == WeeklyAdjustmentType.INCREASE_LOAD,
            )
            if not _changes_workout(workout, adjusted):
                logger.debug("Weekly %s leaves %r unchanged", weekly_type.name, workout.title)
                continue
            adjustments.append(
                WorkoutAdjustment(
                    original_workout=workout,
                    adjusted_workout=adjusted,
                    adjustment_reason=decision.reason,
                    adjustment_type=adjustment_type,
                    confidence_score=confidence,
                    metrics=metrics,
                )
            )
        return tuple(adjustments)
