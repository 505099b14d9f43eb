"""Skip rules."""
