"""Program-aware autoregulation rules, discovered by the RuleRegistry."""
