"""Recovery-score rules."""
