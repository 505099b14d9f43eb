"""Weekly status engine: week keys, aggregation, rules and recommendations."""
