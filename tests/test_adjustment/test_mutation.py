"""Tests for workout mutation: intensity ladder, durations and canned sessions."""

from __future__ import annotations

import pytest

from autoregulation_engine.adjustment.mutation import (
    COOL_DOWN_NOTE,
    adjust_intensity,
    extend_duration_for_recovery,
    generate_adjusted_workout,
    intensity_step,
    parse_duration,
    scale_duration,
)
from autoregulation_engine.adjustment.program_context import build_program_context
from autoregulation_engine.models.analysis import AdjustmentDecision
from autoregulation_engine.models.enums import (
    AdjustmentType,
    IntensityLevel,
    MesocyclePhase,
    PaceVsPlan,
    VolumeRecommendation,
    WorkoutType,
)
from autoregulation_engine.models.program import GoalProgressSummary
from autoregulation_engine.models.settings import AutoregulationConfig


def _decision(adjustment_type: AdjustmentType, reason: str = "test reason") -> AdjustmentDecision:
    return AdjustmentDecision(True, adjustment_type, 0.7, (reason,))


class TestIntensityLadder:
    def test_peak_recovery_steps_two(self, make_metrics, default_config) -> None:
        assert intensity_step(make_metrics(recovery=97), default_config) == 2

    def test_excellent_recovery_steps_one(self, make_metrics, default_config) -> None:
        assert intensity_step(make_metrics(recovery=90), default_config) == 1

    def test_very_low_recovery_steps_down_three(self, make_metrics, default_config) -> None:
        assert intensity_step(make_metrics(recovery=35), default_config) == -3

    def test_no_increase_when_disallowed(self, make_metrics) -> None:
        config = AutoregulationConfig(allow_intensity_increase=False)
        metrics = make_metrics(recovery=97, hrv=70, sleep_quality=95)
        assert intensity_step(metrics, config) == 0

    def test_hrv_step_up_gated_but_sleep_step_down_kept(self, make_metrics) -> None:
        config = AutoregulationConfig(allow_intensity_increase=False)
        metrics = make_metrics(recovery=70, hrv=70, sleep_quality=60)
        assert intensity_step(metrics, config) == -1

    def test_clamps_at_high(self, make_metrics, default_config) -> None:
        metrics = make_metrics(recovery=97, hrv=70, sleep_quality=95)
        assert adjust_intensity(IntensityLevel.HIGH, metrics, default_config) == IntensityLevel.HIGH

    def test_clamps_at_very_low(self, make_metrics, default_config) -> None:
        metrics = make_metrics(recovery=10, hrv=20, sleep_quality=50)
        assert adjust_intensity(IntensityLevel.LOW, metrics, default_config) == IntensityLevel.VERY_LOW

    def test_upgrade_low_to_medium(self, make_metrics, default_config) -> None:
        metrics = make_metrics(recovery=90, strain=5, sleep_quality=95)
        assert adjust_intensity(IntensityLevel.LOW, metrics, default_config) == IntensityLevel.MEDIUM


class TestDurations:
    @pytest.mark.parametrize(
        "text, expected",
        [("45", (45, 45)), ("45 minutes", (45, 45)), ("30-45 minutes", (30, 45)), ("1 minute", (1, 1))],
    )
    def test_parse(self, text: str, expected: tuple[int, int]) -> None:
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["Full day rest", "1 hour", "", "about 30 minutes"])
    def test_parse_rejects_free_text(self, text: str) -> None:
        assert parse_duration(text) is None

    def test_low_recovery_shortens_range(self, make_metrics, default_config) -> None:
        assert scale_duration("30-45 minutes", make_metrics(recovery=40), default_config) == "21-32 minutes"

    def test_high_recovery_lengthens(self, make_metrics, default_config) -> None:
        assert scale_duration("60", make_metrics(recovery=85), default_config) == "72 minutes"

    def test_cap_keeps_high_recovery_from_lengthening(self, make_metrics, default_config) -> None:
        metrics = make_metrics(recovery=85)
        assert scale_duration("60 minutes", metrics, default_config, allow_longer=False) == "60 minutes"

    def test_cap_still_shortens(self, make_metrics, default_config) -> None:
        metrics = make_metrics(recovery=40)
        assert scale_duration("60 minutes", metrics, default_config, allow_longer=False) == "42 minutes"

    def test_high_strain_shortens(self, make_metrics, default_config) -> None:
        assert scale_duration("60 minutes", make_metrics(strain=19), default_config) == "48 minutes"

    def test_factors_compound(self, make_metrics, default_config) -> None:
        metrics = make_metrics(recovery=40, strain=19)
        assert scale_duration("30-45 minutes", metrics, default_config) == "17-25 minutes"

    def test_unparseable_passes_through(self, make_metrics, default_config) -> None:
        assert scale_duration("1 hour", make_metrics(recovery=40), default_config) == "1 hour"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("30-45 minutes", "45-60 minutes"),
            ("45 minutes", "60 minutes"),
            ("a while", "a while + recovery time"),
        ],
    )
    def test_extend_for_recovery(self, text: str, expected: str) -> None:
        assert extend_duration_for_recovery(text) == expected


class TestGenerateAdjustedWorkout:
    def test_intensity_rewrites_level_and_description(
        self, make_metrics, make_workout, default_config
    ) -> None:
        adjusted = generate_adjusted_workout(
            make_workout(), make_metrics(recovery=55), _decision(AdjustmentType.INTENSITY), default_config
        )
        assert adjusted.intensity == IntensityLevel.MEDIUM_HIGH
        assert adjusted.description == "Heavy squats and medium-high accessory work"

    def test_type_swaps_to_recovery_session(self, make_metrics, make_workout, default_config) -> None:
        adjusted = generate_adjusted_workout(
            make_workout(), make_metrics(recovery=40), _decision(AdjustmentType.TYPE), default_config
        )
        assert adjusted.title == "Recovery Session (Monday)"
        assert adjusted.type == WorkoutType.RECOVERY
        assert adjusted.intensity == IntensityLevel.LOW
        assert adjusted.duration == "20-30 minutes"

    def test_type_keeps_workout_when_recovery_adequate(
        self, make_metrics, make_workout, default_config
    ) -> None:
        workout = make_workout()
        adjusted = generate_adjusted_workout(
            workout, make_metrics(recovery=60), _decision(AdjustmentType.TYPE), default_config
        )
        assert adjusted.title == workout.title
        assert adjusted.intensity == workout.intensity
        assert adjusted.adjusted_for_recovery == "test reason"

    def test_skip_becomes_rest_day(self, make_metrics, make_workout, default_config) -> None:
        adjusted = generate_adjusted_workout(
            make_workout(), make_metrics(recovery=20), _decision(AdjustmentType.SKIP), default_config
        )
        assert adjusted.title == "Rest Day (Monday)"
        assert adjusted.intensity == IntensityLevel.VERY_LOW
        assert adjusted.duration == "Full day rest"

    def test_add_recovery_extends_duration(self, make_metrics, make_workout, default_config) -> None:
        adjusted = generate_adjusted_workout(
            make_workout(), make_metrics(strain=19), _decision(AdjustmentType.ADD_RECOVERY), default_config
        )
        assert adjusted.duration == "75 minutes"
        assert adjusted.description.endswith(COOL_DOWN_NOTE)

    def test_duration_adjustment(self, make_metrics, make_workout, default_config) -> None:
        workout = make_workout(duration="30-45 minutes", description="Tempo run, 30-45 minutes")
        adjusted = generate_adjusted_workout(
            workout, make_metrics(recovery=40), _decision(AdjustmentType.DURATION), default_config
        )
        assert adjusted.duration == "21-32 minutes"
        assert adjusted.description == "Tempo run, 21-32 minutes"

    def test_original_untouched(self, make_metrics, make_workout, default_config) -> None:
        workout = make_workout()
        generate_adjusted_workout(
            workout, make_metrics(recovery=20), _decision(AdjustmentType.SKIP), default_config
        )
        assert workout.title == "Lower Body Strength"
        assert workout.adjusted_for_recovery is None
        assert workout.adjustment_notes == ()

    def test_notes_order_with_analysis(
        self, make_metrics, make_workout, default_config, fresh_analysis
    ) -> None:
        analysis = fresh_analysis(
            MesocyclePhase.INTENSIFICATION,
            volume_recommendation=VolumeRecommendation.DECREASE,
            exercise_substitutions=("Use machines",),
            notes=("Low recovery note",),
        )
        adjusted = generate_adjusted_workout(
            make_workout(),
            make_metrics(recovery=55),
            _decision(AdjustmentType.INTENSITY, "Low recovery"),
            default_config,
            analysis=analysis,
        )
        assert adjusted.adjustment_notes == (
            "Auto-adjusted: Low recovery",
            "Volume change: -20%",
            "Substitution: Use machines",
            "Phase: Intensification",
            "Low recovery note",
        )


class TestProgramContextSentence:
    def _context(self, goal, percent: float, pace: PaceVsPlan):
        summary = GoalProgressSummary(goal.id, percent, weeks_elapsed=8, total_weeks=12, pace_vs_plan=pace)
        return build_program_context(goal, summary)

    def test_behind_with_good_recovery(
        self, make_metrics, make_workout, default_config, strength_goal
    ) -> None:
        context = self._context(strength_goal, 40.0, PaceVsPlan.BEHIND)
        adjusted = generate_adjusted_workout(
            make_workout(),
            make_metrics(recovery=75),
            _decision(AdjustmentType.ADD_RECOVERY),
            default_config,
            program_context=context,
        )
        assert adjusted.description.endswith(
            " Note: You're 27% behind on your Strength goal - good recovery allows for focused effort."
        )

    def test_ahead_on_intensity_change(
        self, make_metrics, make_workout, default_config, strength_goal
    ) -> None:
        context = self._context(strength_goal, 90.0, PaceVsPlan.AHEAD)
        adjusted = generate_adjusted_workout(
            make_workout(),
            make_metrics(recovery=55),
            _decision(AdjustmentType.INTENSITY),
            default_config,
            program_context=context,
        )
        assert "23% ahead of schedule on your Strength goal" in adjusted.description

    def test_skip_while_behind(self, make_metrics, make_workout, default_config, strength_goal) -> None:
        context = self._context(strength_goal, 40.0, PaceVsPlan.BEHIND)
        adjusted = generate_adjusted_workout(
            make_workout(),
            make_metrics(recovery=20),
            _decision(AdjustmentType.SKIP),
            default_config,
            program_context=context,
        )
        assert adjusted.description.endswith(
            " Note: Despite being behind on your Strength goal,"
            " recovery is prioritized for long-term success."
        )

    def test_ignored_when_goals_not_respected(self, make_metrics, make_workout, strength_goal) -> None:
        config = AutoregulationConfig(respect_program_goals=False)
        context = self._context(strength_goal, 40.0, PaceVsPlan.BEHIND)
        adjusted = generate_adjusted_workout(
            make_workout(),
            make_metrics(recovery=75),
            _decision(AdjustmentType.ADD_RECOVERY),
            config,
            program_context=context,
        )
        assert "Note:" not in adjusted.description

    def test_on_track_adds_nothing(self, make_metrics, make_workout, default_config, strength_goal) -> None:
        context = self._context(strength_goal, 66.0, PaceVsPlan.ON_TRACK)
        adjusted = generate_adjusted_workout(
            make_workout(),
            make_metrics(recovery=55),
            _decision(AdjustmentType.INTENSITY),
            default_config,
            program_context=context,
        )
        assert "Note:" not in adjusted.description
