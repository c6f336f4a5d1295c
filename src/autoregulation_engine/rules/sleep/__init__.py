"""Sleep rules."""
