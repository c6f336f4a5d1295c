"""Data models for the autoregulation engine."""

from autoregulation_engine.models.analysis import (
    AdjustmentDecision,
    EnhancedAutoregulationResult,
    ExerciseSubstitution,
    ProgramAdjustment,
    ProgramAwareAnalysis,
    ProgramProgress,
    RPEGuidance,
    WeeklyAverages,
    WorkoutAdjustment,
)
from autoregulation_engine.models.biometrics import (
    DailyMetrics,
    RecoveryMetrics,
    RecoveryRecord,
    SleepRecord,
    StrainRecord,
)
from autoregulation_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from autoregulation_engine.models.enums import (
    AdjustmentType,
    Aggressiveness,
    AutoregulationTrigger,
    GoalType,
    IntensityLevel,
    MesocyclePhase,
    MovementPattern,
    PaceVsPlan,
    TimeframeUnit,
    VolumeRecommendation,
    WeeklyAdjustmentType,
    WorkoutType,
)
from autoregulation_engine.models.program import (
    GoalProgressSummary,
    PeriodizationConfig,
    PhaseDistribution,
    ProgramContext,
    ProgramGoal,
    Timeframe,
)
from autoregulation_engine.models.settings import AutoregulationConfig
from autoregulation_engine.models.workout import ProgramExercise, WorkoutPrescription

__all__ = [
    "AdjustmentDecision",
    "AdjustmentType",
    "Aggressiveness",
    "AutoregulationConfig",
    "AutoregulationTrigger",
    "DailyMetrics",
    "DecisionTrace",
    "EnhancedAutoregulationResult",
    "ExerciseSubstitution",
    "GoalProgressSummary",
    "GoalType",
    "IntensityLevel",
    "MesocyclePhase",
    "MovementPattern",
    "PaceVsPlan",
    "PeriodizationConfig",
    "PhaseDistribution",
    "ProgramAdjustment",
    "ProgramAwareAnalysis",
    "ProgramContext",
    "ProgramExercise",
    "ProgramGoal",
    "ProgramProgress",
    "RPEGuidance",
    "RecoveryMetrics",
    "RecoveryRecord",
    "RuleResult",
    "RuleStatus",
    "SleepRecord",
    "StrainRecord",
    "Timeframe",
    "TimeframeUnit",
    "VolumeRecommendation",
    "WeeklyAdjustmentType",
    "WeeklyAverages",
    "WorkoutAdjustment",
    "WorkoutPrescription",
    "WorkoutType",
]
