"""Environment-variable-based configuration for the status engine."""

from __future__ import annotations

import os

# IANA zone whose local calendar defines week boundaries (Monday 00:00)
WEEK_TIMEZONE: str = os.environ.get("WEEK_TIMEZONE", "UTC")
