"""Tests for the enhanced volume-multiplier autoregulation model."""

from __future__ import annotations

from datetime import date

import pytest

from autoregulation_engine.adjustment.enhanced import perform_enhanced_autoregulation
from autoregulation_engine.models.biometrics import RecoveryMetrics
from autoregulation_engine.models.enums import GoalType, TimeframeUnit
from autoregulation_engine.models.program import ProgramGoal, Timeframe


def _metrics(
    recovery: float = 65.0,
    recovery_trend: float = 0.0,
    strain_trend: float = 0.0,
    sleep_quality: float = 85.0,
    sleep_hours: float = 7.5,
) -> RecoveryMetrics:
    return RecoveryMetrics(
        recovery=recovery,
        recovery_trend=recovery_trend,
        strain=10.0,
        strain_trend=strain_trend,
        sleep_quality=sleep_quality,
        sleep_duration_hours=sleep_hours,
        hrv_trend=0.0,
        resting_hr_trend=0.0,
    )


@pytest.fixture
def endurance_goal() -> ProgramGoal:
    return ProgramGoal("goal-endurance", GoalType.ENDURANCE, Timeframe(16, TimeframeUnit.WEEKS), date(2025, 1, 6))


class TestEnhancedAutoregulation:
    def test_neutral_day(self, strength_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(_metrics(), strength_goal, make_workout(), 2)
        assert result.should_adjust is False
        assert result.volume_multiplier == 1.0
        assert result.intensity_adjustment == 0.0
        assert result.recovery_guidance == "Moderate recovery. Ensure adequate sleep and nutrition."

    def test_very_low_recovery(self, strength_goal, make_workout) -> None:
        workout = make_workout(with_exercises=True)
        result = perform_enhanced_autoregulation(_metrics(recovery=25), strength_goal, workout, 2)
        assert result.volume_multiplier == pytest.approx(0.5)
        assert result.intensity_adjustment == -2.0
        assert result.rest_day_recommended is True
        assert len(result.exercise_substitutions) == 4
        assert result.next_day_recommendations == ("Consider complete rest or light mobility work",)
        assert result.recovery_guidance.startswith("Focus on sleep, hydration")

    def test_short_sleep(self, strength_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(
            _metrics(recovery=70, sleep_hours=5.0), strength_goal, make_workout(), 2
        )
        assert result.volume_multiplier == pytest.approx(0.8)
        assert result.intensity_adjustment == -1.0
        assert result.reasoning == ("Insufficient sleep (5.0h) - reducing intensity",)

    def test_poor_sleep_quality(self, strength_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(
            _metrics(sleep_quality=65), strength_goal, make_workout(), 2
        )
        assert result.volume_multiplier == pytest.approx(0.9)

    def test_rising_strain_trend(self, strength_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(
            _metrics(strain_trend=4.0), strength_goal, make_workout(), 2
        )
        assert result.volume_multiplier == pytest.approx(0.8)
        assert "Monitor recovery closely over next few days" in result.next_day_recommendations

    def test_declining_trend_deloads_late_in_block(self, strength_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(
            _metrics(recovery_trend=-15.0), strength_goal, make_workout(), 5
        )
        assert result.deload_recommended is True
        assert result.volume_multiplier == pytest.approx(0.6)
        assert "Consider implementing a deload week" in result.next_day_recommendations

    def test_declining_trend_early_in_block(self, strength_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(
            _metrics(recovery_trend=-15.0), strength_goal, make_workout(), 2
        )
        assert result.deload_recommended is False
        assert result.volume_multiplier == pytest.approx(0.6)

    def test_high_recovery(self, strength_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(_metrics(recovery=85), strength_goal, make_workout(), 2)
        assert result.volume_multiplier == pytest.approx(1.1)
        assert result.recovery_guidance == "Good recovery state. Maintain current recovery practices."

    def test_strength_goal_needs_cns_readiness(self, strength_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(_metrics(recovery=55), strength_goal, make_workout(), 2)
        assert result.intensity_adjustment == -1.0

    def test_endurance_goal_needs_sleep(self, endurance_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(
            _metrics(recovery=75, sleep_hours=6.5), endurance_goal, make_workout(), 2
        )
        assert result.volume_multiplier == pytest.approx(0.85)

    def test_intensity_clamped(self, strength_goal, make_workout) -> None:
        result = perform_enhanced_autoregulation(
            _metrics(recovery=20, sleep_hours=4.0), strength_goal, make_workout(), 2
        )
        assert result.intensity_adjustment == -2.0
        assert result.volume_multiplier > 0
