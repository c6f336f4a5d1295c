"""Workout classification, mutation and per-exercise substitution."""

from autoregulation_engine.adjustment.classifier import should_adjust_workout
from autoregulation_engine.adjustment.enhanced import perform_enhanced_autoregulation
from autoregulation_engine.adjustment.mutation import generate_adjusted_workout
from autoregulation_engine.adjustment.program_context import (
    build_program_context,
    compute_goal_summary,
)
from autoregulation_engine.adjustment.substitution import (
    apply_exercise_adjustments,
    is_deload_recommended,
    recommend_substitutions,
)

__all__ = [
    "apply_exercise_adjustments",
    "build_program_context",
    "compute_goal_summary",
    "generate_adjusted_workout",
    "is_deload_recommended",
    "perform_enhanced_autoregulation",
    "recommend_substitutions",
    "should_adjust_workout",
]
