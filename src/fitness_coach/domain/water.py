"""Domain model for daily water intake."""

import math
from dataclasses import dataclass
from datetime import date

GLASS_SIZE_ML = 250
DAILY_GOAL_ML = 2500
MAX_GLASSES = math.ceil(3000 / GLASS_SIZE_ML)


@dataclass(frozen=True)
class WaterIntake:
    """Glasses of water drunk on one day."""

    day: date
    glasses: int = 0

    @property
    def ml(self) -> int:
        return self.glasses * GLASS_SIZE_ML

    @property
    def goal_met(self) -> bool:
        """Return True once the daily volume goal is reached."""
        return self.ml >= DAILY_GOAL_ML

    @property
    def progress_percent(self) -> int:
        return math.floor(min(self.ml / DAILY_GOAL_ML, 1) * 100 + 0.5)
