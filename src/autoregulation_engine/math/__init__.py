"""Readiness and periodization math."""
