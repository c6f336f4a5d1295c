"""Collaborator protocols, in-memory sources and snapshot mapping for the engine."""

from biometric_sources.exceptions import (
    BiometricSourceError,
    RecordNotFoundError,
    SnapshotFormatError,
)
from biometric_sources.in_memory import (
    InMemoryBiometricSource,
    InMemoryExerciseCatalog,
    InMemoryProgramStore,
)
from biometric_sources.protocols import (
    BiometricDataSource,
    ExerciseCatalog,
    ExerciseDefinition,
    ProgramStore,
)
from biometric_sources.snapshot import Snapshot, parse_snapshot

__all__ = [
    "BiometricDataSource",
    "BiometricSourceError",
    "ExerciseCatalog",
    "ExerciseDefinition",
    "InMemoryBiometricSource",
    "InMemoryExerciseCatalog",
    "InMemoryProgramStore",
    "ProgramStore",
    "RecordNotFoundError",
    "Snapshot",
    "SnapshotFormatError",
    "parse_snapshot",
]
