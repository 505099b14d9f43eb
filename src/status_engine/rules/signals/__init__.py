"""Subjective signal rules."""
