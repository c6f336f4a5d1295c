"""Workout prescription: the unit the engine adjusts."""

from __future__ import annotations

from dataclasses import dataclass, field

from autoregulation_engine.models.enums import (
    IntensityLevel,
    MovementPattern,
    WorkoutType,
)


@dataclass(frozen=True)
class ProgramExercise:
    """One exercise slot inside a prescribed workout."""

    exercise_id: str
    movement_pattern: MovementPattern
    sets: int = 3
    reps: str = "8-12"
    target_rpe: float = 7.0
    autoregulation_guidelines: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WorkoutPrescription:
    """A prescribed workout for one day of the program.

    Treated as immutable: every adjustment returns a new instance.
    """

    day: str
    title: str
    description: str
    intensity: IntensityLevel
    duration: str
    type: WorkoutType = WorkoutType.OTHER
    exercises: tuple[ProgramExercise, ...] = field(default_factory=tuple)
    program_id: str = ""
    adjusted_for_recovery: str | None = None
    adjustment_notes: tuple[str, ...] = field(default_factory=tuple)
