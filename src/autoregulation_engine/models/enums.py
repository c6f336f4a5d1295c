"""Enumerations and constants for the autoregulation engine.

Thresholds are grouped by the component that consumes them and cite their
source where one exists.
"""

from enum import IntEnum, auto


class GoalType(IntEnum):
    """Program goal categories."""

    MUSCLE_GAIN = auto()
    STRENGTH = auto()
    FAT_LOSS = auto()
    ENDURANCE = auto()
    GENERAL_HEALTH = auto()


class TimeframeUnit(IntEnum):
    WEEKS = auto()
    MONTHS = auto()


class MesocyclePhase(IntEnum):
    """Mesocycle phases in cycle order.

    Follows the block periodization model: accumulation → intensification →
    realization, closed by a deload before the next block repeats.
    """

    ACCUMULATION = auto()
    INTENSIFICATION = auto()
    REALIZATION = auto()
    DELOAD = auto()


class IntensityLevel(IntEnum):
    """Ordered intensity ladder for a prescribed workout."""

    VERY_LOW = 0
    LOW = 1
    MEDIUM_LOW = 2
    MEDIUM = 3
    MEDIUM_HIGH = 4
    HIGH = 5

    @property
    def label(self) -> str:
        return _INTENSITY_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "IntensityLevel":
        """Parse a display label ("Medium-High") or a member name ("medium_high")."""
        normalized = label.strip().lower().replace("-", " ").replace("_", " ")
        for level, text in _INTENSITY_LABELS.items():
            if text.lower().replace("-", " ") == normalized:
                return level
        raise ValueError(f"Unknown intensity level: {label!r}")


_INTENSITY_LABELS: dict[IntensityLevel, str] = {
    IntensityLevel.VERY_LOW: "Very Low",
    IntensityLevel.LOW: "Low",
    IntensityLevel.MEDIUM_LOW: "Medium-Low",
    IntensityLevel.MEDIUM: "Medium",
    IntensityLevel.MEDIUM_HIGH: "Medium-High",
    IntensityLevel.HIGH: "High",
}


class WorkoutType(IntEnum):
    CARDIO = auto()
    STRENGTH = auto()
    RECOVERY = auto()
    OTHER = auto()


class MovementPattern(IntEnum):
    """Fundamental movement patterns used to group exercises."""

    SQUAT = auto()
    HINGE = auto()
    PUSH = auto()
    PULL = auto()
    CARRY = auto()
    LUNGE = auto()
    ROTATE = auto()


class VolumeRecommendation(IntEnum):
    DECREASE = auto()
    MAINTAIN = auto()
    INCREASE = auto()


class AutoregulationTrigger(IntEnum):
    """Readiness conditions that fired during program-aware analysis."""

    CRITICAL_RECOVERY = auto()
    LOW_RECOVERY = auto()
    HIGH_STRAIN = auto()
    POOR_SLEEP = auto()


class Aggressiveness(IntEnum):
    """How readily a low-confidence signal turns into an adjustment."""

    CONSERVATIVE = auto()
    MODERATE = auto()
    AGGRESSIVE = auto()


class AdjustmentType(IntEnum):
    """Kind of mutation applied to a single workout."""

    INTENSITY = auto()
    DURATION = auto()
    TYPE = auto()
    SKIP = auto()
    ADD_RECOVERY = auto()


class WeeklyAdjustmentType(IntEnum):
    """Program-level adjustment suggested by the weekly analysis."""

    INCREASE_RECOVERY = auto()
    MODIFY_SCHEDULE = auto()
    INCREASE_LOAD = auto()


class PaceVsPlan(IntEnum):
    AHEAD = auto()
    ON_TRACK = auto()
    BEHIND = auto()


# ---------------------------------------------------------------------------
# Recovery metrics: neutral fallbacks when today's record is missing
# ---------------------------------------------------------------------------
DEFAULT_METRICS_WINDOW_DAYS = 7
FALLBACK_RECOVERY_SCORE = 50.0
FALLBACK_STRAIN_SCORE = 10.0
FALLBACK_SLEEP_EFFICIENCY = 85.0
FALLBACK_SLEEP_DURATION_HOURS = 7.5

# Daily-adjustment fallbacks when only strain/sleep are missing
DAILY_FALLBACK_STRAIN = 0.0
DAILY_FALLBACK_SLEEP_QUALITY = 75.0

# ---------------------------------------------------------------------------
# Mesocycle fallback split (fraction of total program weeks)
# ---------------------------------------------------------------------------
FALLBACK_ACCUMULATION_END = 0.50
FALLBACK_INTENSIFICATION_END = 0.75
FALLBACK_REALIZATION_END = 0.95

WEEKS_PER_MONTH = 4

# ---------------------------------------------------------------------------
# Program-aware rule thresholds (recovery score, 0-100)
# Israetel, Hoffmann & Smith, Scientific Principles of Hypertrophy Training (RP)
# ---------------------------------------------------------------------------
CRITICAL_RECOVERY_THRESHOLD = 33
LOW_RECOVERY_THRESHOLD = 50
MODERATE_RECOVERY_THRESHOLD = 66
HIGH_RECOVERY_VOLUME_THRESHOLD = 80
HIGH_STRAIN_THRESHOLD = 18
POOR_SLEEP_EFFICIENCY_THRESHOLD = 70

CRITICAL_RECOVERY_INTENSITY_ADJ = -2.0
LOW_RECOVERY_INTENSITY_ADJ = -1.0
MODERATE_RECOVERY_PEAK_PHASE_ADJ = -0.5
HIGH_STRAIN_INTENSITY_STEP = -1.0
POOR_SLEEP_INTENSITY_STEP = -0.5
DELOAD_INTENSITY_STEP = -1.0

# Rules 5-7 never leave the running adjustment above this floor
COMPOUND_RULE_CEILING = -2.0

MIN_INTENSITY_ADJUSTMENT = -2.0
MAX_INTENSITY_ADJUSTMENT = 2.0

CRITICAL_RECOVERY_SUBSTITUTIONS = (
    "Favor isolation movements over heavy compound lifts",
    "Choose low-impact alternatives for plyometric or running work",
    "Use machine-based variations to reduce stabilizer demand",
)

# Volume change expressed by each recommendation (DEFAULT_AUTOREGULATION:
# low_recovery -20%; high recovery allows +10%)
VOLUME_MULTIPLIERS: dict[VolumeRecommendation, float] = {
    VolumeRecommendation.DECREASE: 0.8,
    VolumeRecommendation.MAINTAIN: 1.0,
    VolumeRecommendation.INCREASE: 1.1,
}

# ---------------------------------------------------------------------------
# Workout classification (confidence scoring)
# ---------------------------------------------------------------------------
BASE_CONFIDENCE = 0.5
MIN_CONFIDENCE_TO_ADJUST = 0.4

VERY_LOW_RECOVERY_THRESHOLD = 40
INTENSE_WORKOUT_RECOVERY_THRESHOLD = 60
EXCELLENT_RECOVERY_THRESHOLD = 85
PEAK_RECOVERY_THRESHOLD = 95

VERY_LOW_RECOVERY_CONFIDENCE = 0.3
LOW_RECOVERY_HIGH_INTENSITY_CONFIDENCE = 0.2
EXCELLENT_RECOVERY_CONFIDENCE = 0.2
LOW_HRV_CONFIDENCE = 0.15
POOR_SLEEP_CONFIDENCE = 0.15
HIGH_STRAIN_CONFIDENCE = 0.2

AGGRESSIVENESS_FACTORS: dict[Aggressiveness, float] = {
    Aggressiveness.CONSERVATIVE: 0.7,
    Aggressiveness.MODERATE: 1.0,
    Aggressiveness.AGGRESSIVE: 1.3,
}

# ---------------------------------------------------------------------------
# Workout mutation
# ---------------------------------------------------------------------------
HIGH_HRV_FACTOR = 1.5
GREAT_SLEEP_QUALITY = 90

DURATION_LOW_RECOVERY_THRESHOLD = 50
DURATION_HIGH_RECOVERY_THRESHOLD = 80
DURATION_LOW_RECOVERY_FACTOR = 0.7
DURATION_HIGH_RECOVERY_FACTOR = 1.2
DURATION_HIGH_STRAIN_FACTOR = 0.8
RECOVERY_EXTENSION_MIN = 15

TYPE_SWAP_RECOVERY_THRESHOLD = 50
RECOVERY_SESSION_DURATION = "20-30 minutes"
REST_DAY_DURATION = "Full day rest"

PROGRAM_CONTEXT_GOOD_RECOVERY = 70

# ---------------------------------------------------------------------------
# Per-exercise substitution and template adjustment
# ---------------------------------------------------------------------------
LIGHT_VARIANT_RECOVERY_THRESHOLD = 40
ISOLATION_VARIANT_RECOVERY_THRESHOLD = 35
LIGHT_VARIANT_SUFFIX = "_light"
ISOLATION_VARIANT_SUFFIX = "_isolation"

DELOAD_TREND_THRESHOLD = -10.0
DELOAD_MIN_WEEK = 3

# Working-set RPE bounds, Zourdos et al. (2016), J Strength Cond Res 30(1):267-275
MIN_WORKING_SET_RPE = 6
MAX_WORKING_SET_RPE = 10

# ---------------------------------------------------------------------------
# Enhanced autoregulation (volume multiplier model)
# ---------------------------------------------------------------------------
ENHANCED_VERY_LOW_RECOVERY = 30
ENHANCED_LOW_RECOVERY = 50
ENHANCED_HIGH_RECOVERY = 80
ENHANCED_GOOD_RECOVERY = 70
SHORT_SLEEP_HOURS = 6.0
ENDURANCE_MIN_SLEEP_HOURS = 7.0
STRAIN_TREND_THRESHOLD = 3.0
STRENGTH_CNS_RECOVERY_THRESHOLD = 60

# ---------------------------------------------------------------------------
# Weekly program analysis
# ---------------------------------------------------------------------------
OVERREACHING_RECOVERY = 55
OVERREACHING_STRAIN = 12
UNDERTRAINING_RECOVERY = 80
UNDERTRAINING_STRAIN = 8
WEEKLY_POOR_SLEEP = 70
WEEKLY_FALLBACK_SLEEP_EFFICIENCY = 75.0
WEEKLY_FLAG_CONFIDENCE = 0.15

DEFAULT_PROGRESS_WEEK = 1
DEFAULT_PROGRESS_TOTAL_WEEKS = 12

# Goal pace tolerance in fractions of one week's planned progress
PACE_TOLERANCE_WEEKS = 0.5

# ---------------------------------------------------------------------------
# RPE scale, Helms et al. (2016), Strength Cond J 38(4):42-49
# ---------------------------------------------------------------------------
MIN_RPE = 1
MAX_RPE = 10

RPE_SCALE: dict[int, tuple[str, str]] = {
    1: ("Very Easy", "Could do many more reps"),
    2: ("Easy", "Could do many more reps"),
    3: ("Moderate", "Could do several more reps"),
    4: ("Somewhat Hard", "Could do several more reps"),
    5: ("Hard", "Could do 4-6 more reps"),
    6: ("Hard+", "Could do 3-4 more reps"),
    7: ("Very Hard", "Could do 2-3 more reps"),
    8: ("Very Hard+", "Could do 1-2 more reps"),
    9: ("Extremely Hard", "Could do 1 more rep"),
    10: ("Maximum", "Could not do any more reps"),
}

# ---------------------------------------------------------------------------
# Settings bounds (validate_settings)
# ---------------------------------------------------------------------------
MIN_RECOVERY_BOUNDS = (0.0, 100.0)
MAX_STRAIN_BOUNDS = (0.0, 20.0)
SLEEP_QUALITY_BOUNDS = (0.0, 100.0)
HRV_THRESHOLD_BOUNDS = (10.0, 100.0)
