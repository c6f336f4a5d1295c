"""Autoregulated training-adjustment engine."""

from autoregulation_engine.engine import AutoregulationEngine

__all__ = ["AutoregulationEngine"]
