"""
Level state machine for vocabulary reviews.

Three coarse mastery levels drive the review interval:

- Level 1: new or struggling, reviewed again after 1 day
- Level 2: consolidating, reached from Level 1 after a correct answer (3 days)
- Level 3: mastered, reached from Level 2 (7 days) and re-scheduled every
  14 days while answers stay correct

Any incorrect answer drops the item back to Level 1 with a 1-day interval.
Pure functions only; callers own persistence and logging.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum


class ProgressLevel(IntEnum):
    """Mastery level of a vocabulary item."""

    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3


# Level reached and interval in days after a correct answer, keyed by current level
CORRECT_TRANSITIONS: dict[ProgressLevel, tuple[ProgressLevel, int]] = {
    ProgressLevel.LEVEL_1: (ProgressLevel.LEVEL_2, 3),
    ProgressLevel.LEVEL_2: (ProgressLevel.LEVEL_3, 7),
    ProgressLevel.LEVEL_3: (ProgressLevel.LEVEL_3, 14),
}

RESET_LEVEL = ProgressLevel.LEVEL_1
RESET_INTERVAL_DAYS = 1
INITIAL_INTERVAL_DAYS = 1


@dataclass(frozen=True)
class LevelTransition:
    """Outcome of applying one review to a level."""

    level: ProgressLevel
    interval_days: int
    normalized: bool = False  # True when the input level was out of range

    def due_at(self, now: datetime) -> datetime:
        return now + timedelta(days=self.interval_days)


def is_valid_level(value: object) -> bool:
    """Whether ``value`` is one of the defined levels."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    try:
        ProgressLevel(value)
    except ValueError:
        return False
    return True


def next_transition(level: int, correct: bool) -> LevelTransition:
    """
    Compute the next level and review interval.

    Args:
        level: Current level (1-3). Anything else is treated as corrupted.
        correct: Whether the review answer was correct

    Returns:
        LevelTransition; ``normalized`` is set when ``level`` was out of range
        and the result was forced to Level 1 / 1 day.
    """
    if not is_valid_level(level):
        return LevelTransition(RESET_LEVEL, RESET_INTERVAL_DAYS, normalized=True)

    if not correct:
        return LevelTransition(RESET_LEVEL, RESET_INTERVAL_DAYS)

    new_level, interval_days = CORRECT_TRANSITIONS[ProgressLevel(level)]
    return LevelTransition(new_level, interval_days)


def initial_due_at(now: datetime) -> datetime:
    """Due date of a freshly created item."""
    return now + timedelta(days=INITIAL_INTERVAL_DAYS)


def end_of_day(ts: datetime) -> datetime:
    """Last representable instant of the calendar day of ``ts`` (same tz)."""
    return ts.replace(hour=23, minute=59, second=59, microsecond=999999)
