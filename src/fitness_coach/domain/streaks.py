"""Domain models for streaks."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class StreakSnapshot:
    """Current and longest run of completed days."""

    current_streak: int
    longest_streak: int


@dataclass(frozen=True)
class DayCompletion:
    """Number of goals completed on a day."""

    day: date
    completed_goals: int
