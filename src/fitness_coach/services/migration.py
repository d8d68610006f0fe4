"""Backfill of the daily log from legacy storage shapes."""

import logging
from collections.abc import Set
from dataclasses import dataclass
from datetime import date

from fitness_coach.domain.daily_logs import GOALS, DailyLogEntry
from fitness_coach.domain.legacy import LegacyChecklist, LegacyStreakCache
from fitness_coach.services.daily_logs import DailyLogService
from fitness_coach.services.legacy import LegacyStateStore

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationReport:
    """Entries created by a migration run."""

    from_checklist: int
    from_streak_cache: int


def entries_from_checklist(
    checklist: LegacyChecklist, existing_dates: Set[date]
) -> list[DailyLogEntry]:
    """Return a daily log entry for the checklist day if it is not logged yet."""
    if checklist.day in existing_dates:
        return []
    return [
        DailyLogEntry(
            day=checklist.day,
            protein=checklist.protein,
            steps=checklist.steps,
            water=checklist.water,
            workout=checklist.workout,
        )
    ]


def entries_from_streak_cache(
    cache: LegacyStreakCache, existing_dates: Set[date]
) -> list[DailyLogEntry]:
    """Return synthesized entries for streak cache days that are not logged yet.

    The cache only kept how many goals were met, not which ones. A count of N
    marks the first N goals in protein, steps, water, workout order, so the
    result is an approximation of what the user actually did.
    """
    seen = set(existing_dates)
    entries = []
    for cached_day in cache.days:
        if cached_day.completed_goals <= 0 or cached_day.day in seen:
            continue
        seen.add(cached_day.day)
        flags = {
            goal: cached_day.completed_goals >= position
            for position, goal in enumerate(GOALS, start=1)
        }
        entries.append(DailyLogEntry(day=cached_day.day, **flags))
    return entries


@dataclass
class MigrationService:
    """Copies legacy checklist and streak cache data into the daily log.

    Only dates without a daily log entry are written. Legacy data is left in
    place, so running the migration again is a no-op.
    """

    daily_log_service: DailyLogService
    legacy_state: LegacyStateStore

    def run(self) -> MigrationReport:
        """Backfill the daily log and return what was created."""
        existing = {entry.day for entry in self.daily_log_service.get_all()}

        from_checklist: list[DailyLogEntry] = []
        checklist = self.legacy_state.read_checklist()
        if checklist is not None:
            from_checklist = entries_from_checklist(checklist, existing)
            self._insert(from_checklist)
            existing.update(entry.day for entry in from_checklist)

        from_cache: list[DailyLogEntry] = []
        cache = self.legacy_state.read_streak_cache()
        if cache is not None:
            from_cache = entries_from_streak_cache(cache, existing)
            self._insert(from_cache)

        report = MigrationReport(
            from_checklist=len(from_checklist), from_streak_cache=len(from_cache)
        )
        if from_checklist or from_cache:
            _logger.info(
                "Migrated legacy data: checklist=%s streak_cache=%s",
                report.from_checklist,
                report.from_streak_cache,
            )
        return report

    def _insert(self, entries: list[DailyLogEntry]) -> None:
        for entry in entries:
            self.daily_log_service.upsert(
                entry.day,
                **{goal: getattr(entry, goal) for goal in GOALS},
            )
