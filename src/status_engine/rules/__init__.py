"""Status rules, discovered automatically by the RuleRegistry."""
