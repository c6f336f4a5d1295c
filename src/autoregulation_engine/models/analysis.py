"""Engine outputs: analyses, decisions and adjustments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from autoregulation_engine.models.biometrics import DailyMetrics
from autoregulation_engine.models.enums import (
    VOLUME_MULTIPLIERS,
    AdjustmentType,
    AutoregulationTrigger,
    MesocyclePhase,
    PaceVsPlan,
    VolumeRecommendation,
    WeeklyAdjustmentType,
)
from autoregulation_engine.models.workout import WorkoutPrescription


@dataclass(frozen=True)
class ProgramAwareAnalysis:
    """Phase-aware readiness analysis produced by the rule engine.

    Rules build this up incrementally; each rule returns a new instance.
    """

    current_phase: MesocyclePhase
    volume_recommendation: VolumeRecommendation = VolumeRecommendation.MAINTAIN
    intensity_adjustment: float = 0.0  # RPE points, -2..+2
    exercise_substitutions: tuple[str, ...] = field(default_factory=tuple)
    rest_day_recommendation: bool = False
    notes: tuple[str, ...] = field(default_factory=tuple)
    autoregulation_triggers: tuple[AutoregulationTrigger, ...] = field(default_factory=tuple)

    @property
    def volume_multiplier(self) -> float:
        return VOLUME_MULTIPLIERS[self.volume_recommendation]

    @property
    def volume_change_pct(self) -> int:
        return round((self.volume_multiplier - 1.0) * 100)


@dataclass(frozen=True)
class AdjustmentDecision:
    """Outcome of classifying whether today's workout needs adjusting."""

    should_adjust: bool
    adjustment_type: AdjustmentType
    confidence: float
    reasons: tuple[str, ...] = field(default_factory=tuple)

    @property
    def reason(self) -> str:
        return ", ".join(self.reasons)


@dataclass(frozen=True)
class WorkoutAdjustment:
    """An original workout, its adjusted copy, and why it changed."""

    original_workout: WorkoutPrescription
    adjusted_workout: WorkoutPrescription
    adjustment_reason: str
    adjustment_type: AdjustmentType
    confidence_score: float
    metrics: DailyMetrics


@dataclass(frozen=True)
class ExerciseSubstitution:
    original_exercise_id: str
    recommended_exercise_id: str
    reason: str


@dataclass(frozen=True)
class EnhancedAutoregulationResult:
    """Volume-multiplier style autoregulation for a workout template."""

    should_adjust: bool
    volume_multiplier: float
    intensity_adjustment: float
    exercise_substitutions: tuple[ExerciseSubstitution, ...]
    rest_day_recommended: bool
    deload_recommended: bool
    reasoning: tuple[str, ...]
    recovery_guidance: str
    next_day_recommendations: tuple[str, ...]


@dataclass(frozen=True)
class ProgramProgress:
    current_week: int
    total_weeks: int
    goal_progress: float
    pace_vs_plan: PaceVsPlan


@dataclass(frozen=True)
class WeeklyAverages:
    """Trailing-window means used by the weekly program analysis."""

    recovery: float
    strain: float
    hrv: float
    sleep_quality: float


@dataclass(frozen=True)
class ProgramAdjustment:
    """Program-level result of the weekly performance analysis."""

    program_id: str
    adjustment_date: date
    adjustment_type: WeeklyAdjustmentType
    overall_reason: str
    flags: tuple[str, ...]
    averages: WeeklyAverages
    progress: ProgramProgress
    adjustments: tuple[WorkoutAdjustment, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RPEGuidance:
    base_rpe: float
    adjusted_rpe: float
    description: str
    guidance: str
    notes: tuple[str, ...] = field(default_factory=tuple)
