"""Worsen-only severity merging.

Every status rule states "if I apply, the week is at least this severe".
The final status is the merge of all such implications starting from
GREEN. Merge is max over the Severity ordering, so it is commutative and
associative and adding a verdict can never lower the result.
"""

from __future__ import annotations

from functools import reduce
from typing import Iterable

from status_engine.models.enums import Severity


def merge(a: Severity, b: Severity) -> Severity:
    """Return the more severe of *a* and *b*."""
    return a if a >= b else b


def merge_all(
    severities: Iterable[Severity], start: Severity = Severity.GREEN
) -> Severity:
    """Fold *severities* into one status, beginning at *start*."""
    return reduce(merge, severities, start)
