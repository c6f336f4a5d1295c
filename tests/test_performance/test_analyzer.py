"""Tests for the weekly program performance analysis."""

from __future__ import annotations

import pytest

from autoregulation_engine.models.analysis import WeeklyAverages
from autoregulation_engine.models.enums import (
    AdjustmentType,
    IntensityLevel,
    PaceVsPlan,
    WeeklyAdjustmentType,
    WorkoutType,
)
from autoregulation_engine.models.program import GoalProgressSummary
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.performance.analyzer import (
    ProgramPerformanceAnalyzer,
    evaluate_weekly_flags,
    weekly_averages,
)


class TestWeeklyAverages:
    def test_means(self, make_history) -> None:
        recovery, strain, sleep = make_history([40] * 7, [14] * 7, [65] * 7)
        averages = weekly_averages(recovery, strain, sleep)
        assert averages == WeeklyAverages(recovery=40.0, strain=14.0, hrv=55.0, sleep_quality=65.0)

    def test_only_newest_window_used(self, make_history) -> None:
        recovery, strain, sleep = make_history([30] * 7 + [90] * 3)
        assert weekly_averages(recovery, strain, sleep).recovery == pytest.approx(30.0)

    def test_missing_strain_and_sleep_fall_back(self, make_history) -> None:
        recovery, strain, sleep = make_history([60, 70])
        averages = weekly_averages(recovery, strain, sleep)
        assert averages.strain == 10.0
        assert averages.sleep_quality == 75.0
        assert averages.recovery == pytest.approx(65.0)

    def test_no_recovery_raises(self) -> None:
        with pytest.raises(ValueError):
            weekly_averages((), (), ())

    def test_zero_window_raises(self, make_history) -> None:
        recovery, strain, sleep = make_history([60])
        with pytest.raises(ValueError):
            weekly_averages(recovery, strain, sleep, window=0)


class TestEvaluateWeeklyFlags:
    def test_overreaching(self, default_config) -> None:
        averages = WeeklyAverages(recovery=45, strain=14, hrv=55, sleep_quality=85)
        flags, weekly_type = evaluate_weekly_flags(averages, None, default_config)
        assert flags == ("Signs of overreaching detected",)
        assert weekly_type == WeeklyAdjustmentType.INCREASE_RECOVERY

    def test_last_flag_decides_type(self, default_config) -> None:
        averages = WeeklyAverages(recovery=45, strain=14, hrv=55, sleep_quality=60)
        flags, weekly_type = evaluate_weekly_flags(averages, None, default_config)
        assert flags == ("Signs of overreaching detected", "Consistently poor sleep quality")
        assert weekly_type == WeeklyAdjustmentType.MODIFY_SCHEDULE

    def test_elevated_stress(self, default_config) -> None:
        averages = WeeklyAverages(recovery=70, strain=10, hrv=30, sleep_quality=85)
        flags, weekly_type = evaluate_weekly_flags(averages, None, default_config)
        assert flags == ("Elevated stress levels",)
        assert weekly_type == WeeklyAdjustmentType.INCREASE_RECOVERY

    def test_undertraining_needs_ahead_context(self, default_config) -> None:
        averages = WeeklyAverages(recovery=85, strain=5, hrv=55, sleep_quality=85)
        flags, weekly_type = evaluate_weekly_flags(averages, None, default_config)
        assert flags == ()
        assert weekly_type is None


class TestProgramPerformanceAnalyzer:
    def setup_method(self) -> None:
        self.analyzer = ProgramPerformanceAnalyzer()

    def test_quiet_week_returns_none(self, make_history, today) -> None:
        recovery, strain, sleep = make_history([70] * 7, [10] * 7, [85] * 7)
        assert self.analyzer.analyze_weekly("prog-1", recovery, strain, sleep, today) is None

    def test_disabled_returns_none(self, make_history, today) -> None:
        recovery, strain, sleep = make_history([40] * 7, [14] * 7)
        config = AutoregulationConfig(enabled=False)
        assert self.analyzer.analyze_weekly("prog-1", recovery, strain, sleep, today, config) is None

    def test_no_recovery_returns_none(self, today) -> None:
        assert self.analyzer.analyze_weekly("prog-1", (), (), (), today) is None

    def test_default_progress(self, make_history, today) -> None:
        recovery, strain, sleep = make_history([45] * 7, [14] * 7, [85] * 7)
        result = self.analyzer.analyze_weekly("prog-1", recovery, strain, sleep, today)
        assert result.program_id == "prog-1"
        assert result.adjustment_date == today
        assert result.overall_reason == "Signs of overreaching detected"
        assert result.progress.current_week == 1
        assert result.progress.total_weeks == 12
        assert result.progress.goal_progress == 0.0
        assert result.progress.pace_vs_plan == PaceVsPlan.ON_TRACK
        assert result.adjustments == ()

    def test_overreaching_swaps_hard_sessions(self, make_history, make_workout, today) -> None:
        recovery, strain, sleep = make_history([40] * 7, [14] * 7, [85] * 7)
        hard = make_workout()
        easy = make_workout(intensity=IntensityLevel.MEDIUM)
        result = self.analyzer.analyze_weekly(
            "prog-1", recovery, strain, sleep, today, planned_workouts=(hard, easy)
        )
        assert len(result.adjustments) == 1
        adjustment = result.adjustments[0]
        assert adjustment.adjustment_type == AdjustmentType.TYPE
        assert adjustment.adjusted_workout.type == WorkoutType.RECOVERY
        assert adjustment.confidence_score == pytest.approx(0.65)

    def test_undertraining_extends_easy_sessions(
        self, make_history, make_workout, strength_goal, today
    ) -> None:
        recovery, strain, sleep = make_history([85] * 7, [5] * 7, [85] * 7)
        summary = GoalProgressSummary("goal-strength", 90.0, 8, 12, PaceVsPlan.AHEAD)
        easy = make_workout(intensity=IntensityLevel.LOW)
        result = self.analyzer.analyze_weekly(
            "prog-1",
            recovery,
            strain,
            sleep,
            today,
            goal=strength_goal,
            summary=summary,
            planned_workouts=(easy, make_workout()),
        )
        assert result.adjustment_type == WeeklyAdjustmentType.INCREASE_LOAD
        assert result.progress.goal_progress == 90.0
        assert result.progress.current_week == 8
        assert len(result.adjustments) == 1
        assert result.adjustments[0].adjusted_workout.duration == "72 minutes"

    def test_poor_sleep_shortens_sessions(self, make_history, make_workout, today) -> None:
        recovery, strain, sleep = make_history([45] * 7, [10] * 7, [60] * 7)
        result = self.analyzer.analyze_weekly(
            "prog-1", recovery, strain, sleep, today, planned_workouts=(make_workout(),)
        )
        assert result.adjustment_type == WeeklyAdjustmentType.MODIFY_SCHEDULE
        assert result.adjustments[0].adjustment_type == AdjustmentType.DURATION
        assert result.adjustments[0].adjusted_workout.duration == "42 minutes"

    def test_poor_sleep_never_lengthens_sessions(self, make_history, make_workout, today) -> None:
        recovery, strain, sleep = make_history([85] * 7, [10] * 7, [60] * 7, hrv=60.0)
        workout = make_workout(intensity=IntensityLevel.MEDIUM)
        result = self.analyzer.analyze_weekly(
            "prog-1", recovery, strain, sleep, today, planned_workouts=(workout,)
        )
        assert result.flags == ("Consistently poor sleep quality",)
        assert result.adjustment_type == WeeklyAdjustmentType.MODIFY_SCHEDULE
        assert result.adjustments == ()

    def test_unchanged_duration_is_not_reported(self, make_history, make_workout, today) -> None:
        recovery, strain, sleep = make_history([70] * 7, [10] * 7, [60] * 7)
        result = self.analyzer.analyze_weekly(
            "prog-1", recovery, strain, sleep, today, planned_workouts=(make_workout(),)
        )
        assert result.adjustment_type == WeeklyAdjustmentType.MODIFY_SCHEDULE
        assert result.adjustments == ()

    def test_cancelling_intensity_steps_are_not_reported(
        self, make_history, make_workout, today
    ) -> None:
        # low HRV steps down, great sleep steps back up
        recovery, strain, sleep = make_history([70] * 7, [10] * 7, [95] * 7, hrv=30.0)
        result = self.analyzer.analyze_weekly(
            "prog-1", recovery, strain, sleep, today, planned_workouts=(make_workout(),)
        )
        assert result.flags == ("Elevated stress levels",)
        assert result.adjustment_type == WeeklyAdjustmentType.INCREASE_RECOVERY
        assert result.adjustments == ()
