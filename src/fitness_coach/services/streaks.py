"""Streak statistics over the daily log."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta

from fitness_coach.domain.legacy import LegacyStreakCache, LegacyStreakDay
from fitness_coach.domain.streaks import DayCompletion, StreakSnapshot
from fitness_coach.services.daily_logs import DailyLogService
from fitness_coach.services.legacy import LegacyStateStore

STREAK_WINDOW_DAYS = 35
COMPLETED_GOALS_THRESHOLD = 3

_logger = logging.getLogger(__name__)


def calculate_streaks(
    goal_counts: Mapping[date, int],
    today: date,
    window_days: int = STREAK_WINDOW_DAYS,
    completed_threshold: int = COMPLETED_GOALS_THRESHOLD,
) -> StreakSnapshot:
    """Return current and longest streaks within a lookback window.

    Walks back one day at a time from today. Today not being completed yet
    does not break the run. The first gap after a run ends the current
    streak; gaps before any run only reset the counter used for the longest
    streak.
    """
    current = 0
    longest = 0
    running = 0
    broken = False
    for offset in range(window_days):
        day = today - timedelta(days=offset)
        if goal_counts.get(day, 0) >= completed_threshold:
            running += 1
            if not broken:
                current = running
            continue
        if offset == 0:
            continue
        longest = max(longest, running)
        if current > 0:
            break
        broken = True
        running = 0
    longest = max(longest, running)
    return StreakSnapshot(current_streak=current, longest_streak=longest)


@dataclass
class StreakService:
    """Computes streaks from the daily log and keeps the legacy cache current."""

    daily_log_service: DailyLogService
    legacy_state: LegacyStateStore
    window_days: int = STREAK_WINDOW_DAYS
    completed_threshold: int = COMPLETED_GOALS_THRESHOLD

    def goal_counts(self) -> dict[date, int]:
        """Return completed goal counts by day.

        Days missing from the daily log fall back to the legacy streak cache.
        """
        counts: dict[date, int] = {}
        cache = self.legacy_state.read_streak_cache()
        if cache is not None:
            for cached_day in cache.days:
                counts[cached_day.day] = cached_day.completed_goals
        for entry in self.daily_log_service.get_all():
            counts[entry.day] = entry.completed_goals
        return counts

    def compute(self) -> StreakSnapshot:
        """Return the streak snapshot without persisting it."""
        return calculate_streaks(
            self.goal_counts(),
            self.daily_log_service.today(),
            window_days=self.window_days,
            completed_threshold=self.completed_threshold,
        )

    def refresh(self) -> StreakSnapshot:
        """Recompute streaks and rewrite the legacy streak cache."""
        counts = self.goal_counts()
        today = self.daily_log_service.today()
        snapshot = calculate_streaks(
            counts,
            today,
            window_days=self.window_days,
            completed_threshold=self.completed_threshold,
        )
        cache = self.legacy_state.read_streak_cache()
        if cache is not None and cache.longest_streak > snapshot.longest_streak:
            snapshot = StreakSnapshot(
                current_streak=snapshot.current_streak,
                longest_streak=cache.longest_streak,
            )
        recent_days = sorted((day for day in counts if day <= today), reverse=True)
        recent_days = recent_days[: self.window_days]
        self.legacy_state.write_streak_cache(
            LegacyStreakCache(
                days=[
                    LegacyStreakDay(day=day, completed_goals=counts[day])
                    for day in recent_days
                ],
                current_streak=snapshot.current_streak,
                longest_streak=snapshot.longest_streak,
            )
        )
        _logger.info(
            "Streaks refreshed: current=%s longest=%s",
            snapshot.current_streak,
            snapshot.longest_streak,
        )
        return snapshot

    def history(self, days: int = STREAK_WINDOW_DAYS) -> list[DayCompletion]:
        """Return completed goal counts for the last N days, oldest first."""
        counts = self.goal_counts()
        today = self.daily_log_service.today()
        start = today - timedelta(days=days - 1)
        window = [start + timedelta(days=offset) for offset in range(days)]
        return [
            DayCompletion(day=day, completed_goals=counts.get(day, 0))
            for day in window
        ]
