"""Pure weekly aggregation and trend helpers."""
