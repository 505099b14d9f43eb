"""Progress rules."""
