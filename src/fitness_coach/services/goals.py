"""Goal updates that keep the legacy checklist in step with the daily log."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from fitness_coach.domain.daily_logs import GOALS, DailyLogEntry
from fitness_coach.services.daily_logs import DailyLogService
from fitness_coach.services.legacy import LegacyStateStore

_logger = logging.getLogger(__name__)


@dataclass
class GoalService:
    """Writes goal flags to the daily log and mirrors them to the checklist."""

    daily_log_service: DailyLogService
    legacy_state: LegacyStateStore

    def update_goal(
        self, goal: str, value: bool, *, water_glasses: int | None = None
    ) -> DailyLogEntry:
        """Set one goal on today's entry."""
        entry = self.daily_log_service.update_goal(
            goal, value, water_glasses=water_glasses
        )
        self._mirror(entry, (goal,))
        return entry

    def upsert(self, day: date, **changes: object) -> DailyLogEntry:
        """Merge fields into the entry for a date."""
        entry = self.daily_log_service.upsert(day, **changes)
        self._mirror(entry, [goal for goal in GOALS if goal in changes])
        return entry

    def _mirror(self, entry: DailyLogEntry, goals: Sequence[str]) -> None:
        flags = {goal: getattr(entry, goal) for goal in goals}
        if self.legacy_state.mirror_goals(entry.day, flags):
            _logger.debug("Checklist updated: day=%s goals=%s", entry.day, list(flags))
