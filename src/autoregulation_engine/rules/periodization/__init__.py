"""Mesocycle-phase rules."""
