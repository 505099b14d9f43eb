"""Enumerations and threshold constants for the weekly status engine.

Every cutoff used by the status rules and the recommendation synthesizer
lives here so the two sets can be compared side by side.
"""

from enum import Enum, IntEnum


class Severity(IntEnum):
    """Traffic-light weekly status — higher value = more severe.

    The integer ordering is the merge order: combining two verdicts keeps
    the larger one.
    """

    GREEN = 0
    YELLOW = 1
    RED = 2

    @property
    def label(self) -> str:
        """Wire value, e.g. ``"yellow"``."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "Severity":
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"Unknown severity label: {label!r}") from None


class RuleGroup(IntEnum):
    """Rule families in evaluation (and trace) order."""

    PROGRESS = 0
    SKIPS = 1
    SKIP_REASONS = 2
    SIGNALS = 3


class WorkoutStatus(str, Enum):
    """Lifecycle state of a scheduled workout."""

    PLANNED = "planned"
    COMPLETED = "completed"
    MODIFIED = "modified"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    """Why an athlete skipped a workout."""

    INJURY = "injury"
    SICK = "sick"
    FATIGUE = "fatigue"
    TIME = "time"
    OTHER = "other"


class Sport(str, Enum):
    """Workout discipline (informational only)."""

    RUN = "run"
    BIKE = "bike"
    STRENGTH = "strength"
    REST = "rest"


class PainArea(str, Enum):
    """Body area reported in a check-in pain report."""

    KNEE = "knee"
    ANKLE = "ankle"
    CALF = "calf"
    HAMSTRING = "hamstring"
    QUAD = "quad"
    HIP = "hip"
    BACK = "back"
    FOOT = "foot"
    OTHER = "other"


class Feeling(str, Enum):
    """Overall post-workout feeling."""

    GOOD = "good"
    OK = "ok"
    HEAVY = "heavy"


class IntensityHint(str, Enum):
    """Actual intensity relative to the planned one."""

    LOWER = "lower"
    SAME = "same"
    HIGHER = "higher"


class RecommendationAction(str, Enum):
    """Coaching action for the coming days."""

    REST = "rest"
    REDUCE = "reduce"
    CONTINUE = "continue"


DONE_STATUSES = frozenset({WorkoutStatus.COMPLETED, WorkoutStatus.MODIFIED})

# ---------------------------------------------------------------------------
# Check-in scales
# ---------------------------------------------------------------------------
RPE_MIN = 1
RPE_MAX = 10
FATIGUE_MIN = 0
FATIGUE_MAX = 5
SLEEP_MIN = 0
SLEEP_MAX = 5
PAIN_INTENSITY_MIN = 1
PAIN_INTENSITY_MAX = 10

# Weekly signals are reported with one decimal place
SIGNAL_DECIMALS = 1

# ---------------------------------------------------------------------------
# Status classifier thresholds
# ---------------------------------------------------------------------------
PROGRESS_RED_BELOW_PCT = 50.0
PROGRESS_YELLOW_BELOW_PCT = 80.0

SKIPS_RED_AT = 2
SKIPS_YELLOW_AT = 1

FATIGUE_SKIPS_RED_AT = 2
FATIGUE_SKIPS_YELLOW_AT = 1
TIME_SKIPS_YELLOW_AT = 2

AVG_RPE_RED = 8.0
AVG_RPE_YELLOW = 6.5
AVG_FATIGUE_RED = 4.0
AVG_FATIGUE_YELLOW = 3.0
MAX_PAIN_RED = 7.0
MAX_PAIN_YELLOW = 5.0

# ---------------------------------------------------------------------------
# Recommendation thresholds
# ---------------------------------------------------------------------------
# Stress cutoffs intentionally differ from the classifier's signal bands.
PAIN_CRITICAL = 6.0
STRESS_AVG_RPE = 7.5
STRESS_AVG_FATIGUE = 3.5

LOW_PROGRESS_TRIGGER_PCT = 80.0
MANY_SKIPS_TRIGGER_AT = 2
TIME_SKIPS_TRIGGER_AT = 2
OTHER_SKIPS_TRIGGER_AT = 2
