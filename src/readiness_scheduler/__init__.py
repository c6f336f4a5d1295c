"""Daily readiness check: run the engine on a biometric snapshot, once or on a schedule."""
