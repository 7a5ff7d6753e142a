"""Spaced-repetition scheduling."""

from vocabkeep.learning_engine.srs.levels import (
    LevelTransition,
    ProgressLevel,
    end_of_day,
    initial_due_at,
    next_transition,
)
from vocabkeep.learning_engine.srs.service import DueItem, OutcomeResult, SchedulingEngine

__all__ = [
    "DueItem",
    "LevelTransition",
    "OutcomeResult",
    "ProgressLevel",
    "SchedulingEngine",
    "end_of_day",
    "initial_due_at",
    "next_transition",
]
