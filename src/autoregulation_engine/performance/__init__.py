"""Weekly program-level performance analysis."""
