"""Domain models for daily goal logs."""

from dataclasses import dataclass
from datetime import date, datetime

GOALS = ("protein", "steps", "water", "workout")


@dataclass(frozen=True)
class DailyLogEntry:
    """Goal completion record for a single calendar day."""

    day: date
    protein: bool = False
    steps: bool = False
    water: bool = False
    workout: bool = False
    water_glasses: int | None = None
    notes: str | None = None
    updated_at: datetime | None = None

    @property
    def completed_goals(self) -> int:
        """Return how many of the four goals were met."""
        return sum(1 for goal in GOALS if getattr(self, goal))

    @property
    def is_perfect(self) -> bool:
        """Return True when every goal was met."""
        return self.completed_goals == len(GOALS)


@dataclass(frozen=True)
class DailyLogStats:
    """Completion counts and rates over a recent window."""

    total_days: int
    protein_days: int
    steps_days: int
    water_days: int
    workout_days: int
    perfect_days: int
    protein_rate: int
    steps_rate: int
    water_rate: int
    workout_rate: int
    perfect_rate: int
