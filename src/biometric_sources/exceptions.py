"""Custom exception hierarchy for biometric and program data sources."""

from __future__ import annotations


class BiometricSourceError(Exception):
    """Base exception for all biometric_sources errors."""


class SnapshotFormatError(BiometricSourceError):
    """A snapshot section is present but malformed (bad date, unknown enum, missing field)."""

    def __init__(self, message: str, section: str | None = None) -> None:
        super().__init__(message)
        self.section = section


class RecordNotFoundError(BiometricSourceError):
    """A requested goal or record does not exist in the store."""
