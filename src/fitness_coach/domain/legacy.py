"""Legacy storage shapes that predate the unified daily log."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class LegacyChecklist:
    """Single-day checklist snapshot written by the old checklist widget."""

    day: date
    protein: bool = False
    steps: bool = False
    water: bool = False
    workout: bool = False


@dataclass(frozen=True)
class LegacyStreakDay:
    """Completed goal count for one day in the old streak cache."""

    day: date
    completed_goals: int


@dataclass(frozen=True)
class LegacyStreakCache:
    """Streak cache written by the old calendar widget."""

    days: list[LegacyStreakDay] = field(default_factory=list)
    current_streak: int = 0
    longest_streak: int = 0
