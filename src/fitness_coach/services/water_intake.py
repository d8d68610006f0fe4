"""Water intake tracking for today."""

import logging
from dataclasses import dataclass

from fitness_coach.domain.water import MAX_GLASSES, WaterIntake
from fitness_coach.services.goals import GoalService
from fitness_coach.services.legacy import LegacyStateStore

_logger = logging.getLogger(__name__)


@dataclass
class WaterIntakeService:
    """Counts today's glasses of water and derives the water goal from them.

    The count is kept in today's daily log entry and in the water widget
    state. The widget state from an earlier day reads as zero glasses.
    """

    goal_service: GoalService
    legacy_state: LegacyStateStore

    def today_intake(self) -> WaterIntake:
        """Return today's intake, starting from zero on a new day."""
        daily_log_service = self.goal_service.daily_log_service
        today = daily_log_service.today()
        entry = daily_log_service.get_today()
        if entry is not None and entry.water_glasses is not None:
            return WaterIntake(day=today, glasses=entry.water_glasses)
        saved = self.legacy_state.read_water_intake()
        if saved is not None and saved.day == today:
            return saved
        return WaterIntake(day=today)

    def add_glass(self) -> WaterIntake:
        """Record one more glass, up to the daily maximum."""
        current = self.today_intake()
        if current.glasses >= MAX_GLASSES:
            return current
        return self._save(WaterIntake(day=current.day, glasses=current.glasses + 1))

    def remove_glass(self) -> WaterIntake:
        """Take back one glass, never going below zero."""
        current = self.today_intake()
        if current.glasses <= 0:
            return current
        return self._save(WaterIntake(day=current.day, glasses=current.glasses - 1))

    def set_glasses(self, glasses: int) -> WaterIntake:
        """Set today's glass count, clamped to the supported range."""
        today = self.goal_service.daily_log_service.today()
        clamped = min(max(glasses, 0), MAX_GLASSES)
        return self._save(WaterIntake(day=today, glasses=clamped))

    def _save(self, intake: WaterIntake) -> WaterIntake:
        self.legacy_state.write_water_intake(intake)
        self.goal_service.update_goal(
            "water", intake.goal_met, water_glasses=intake.glasses
        )
        _logger.info(
            "Water intake updated: glasses=%s goal_met=%s",
            intake.glasses,
            intake.goal_met,
        )
        return intake
