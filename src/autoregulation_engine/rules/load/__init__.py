"""Training-load rules."""
