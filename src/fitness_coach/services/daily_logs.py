"""Daily goal log service."""

import dataclasses
import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from fitness_coach.codec import decode_daily_logs, encode_daily_logs
from fitness_coach.domain.daily_logs import GOALS, DailyLogEntry, DailyLogStats
from fitness_coach.services.store import DAILY_LOGS_KEY, KeyValueStore

MAX_LOGS = 365

_UPDATABLE_FIELDS = frozenset({*GOALS, "water_glasses", "notes"})

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DailyLogService:
    """Reads and writes the unified daily log collection.

    Every public operation is a full read-modify-write of the stored
    collection. Two callers writing at the same time will lose one of the
    updates; the store is meant for a single interactive session.
    """

    store: KeyValueStore
    max_logs: int = MAX_LOGS
    timezone_name: str = "UTC"
    clock: Callable[[], datetime] = field(default=_utc_now)

    def today(self) -> date:
        """Return the current date in the configured timezone."""
        return self.clock().astimezone(ZoneInfo(self.timezone_name)).date()

    def get_all(self) -> list[DailyLogEntry]:
        """Return the full retained history in stored order."""
        return self._load()

    def get_by_date(self, day: date) -> DailyLogEntry | None:
        """Return the entry for a date, if one exists."""
        return next((entry for entry in self._load() if entry.day == day), None)

    def get_today(self) -> DailyLogEntry | None:
        """Return today's entry, if one exists."""
        return self.get_by_date(self.today())

    def upsert(self, day: date, **changes: object) -> DailyLogEntry:
        """Merge the given fields into the entry for a date, creating it if needed."""
        _validate_changes(changes)
        entries = self._load()
        now = self.clock()
        for index, existing in enumerate(entries):
            if existing.day != day:
                continue
            updated = dataclasses.replace(
                existing,
                **changes,
                updated_at=_next_timestamp(existing.updated_at, now),
            )
            entries[index] = updated
            self._save(entries)
            return updated

        created = DailyLogEntry(day=day, updated_at=now, **changes)
        entries.insert(0, created)
        if len(entries) > self.max_logs:
            _logger.info(
                "Trimming daily logs: dropped=%s", len(entries) - self.max_logs
            )
            del entries[self.max_logs :]
        self._save(entries)
        return created

    def update_goal(
        self, goal: str, value: bool, *, water_glasses: int | None = None
    ) -> DailyLogEntry:
        """Set one goal flag on today's entry, keeping the other flags."""
        if goal not in GOALS:
            raise ValueError(f"Unknown goal: {goal}")
        changes: dict[str, object] = {goal: value}
        if water_glasses is not None:
            changes["water_glasses"] = water_glasses
        return self.upsert(self.today(), **changes)

    def get_range(self, start: date, end: date) -> list[DailyLogEntry]:
        """Return entries dated between start and end, inclusive."""
        return [entry for entry in self._load() if start <= entry.day <= end]

    def get_recent(self, days: int) -> list[DailyLogEntry]:
        """Return entries from the last N days, newest first."""
        cutoff = self.today() - timedelta(days=days)
        recent = [entry for entry in self._load() if entry.day >= cutoff]
        return sorted(recent, key=lambda entry: entry.day, reverse=True)

    def get_stats(self, days: int = 30) -> DailyLogStats:
        """Return completion counts and rates over the last N days."""
        logs = self.get_recent(days)
        total = len(logs)
        counts = {goal: sum(1 for log in logs if getattr(log, goal)) for goal in GOALS}
        perfect = sum(1 for log in logs if log.is_perfect)
        return DailyLogStats(
            total_days=total,
            protein_days=counts["protein"],
            steps_days=counts["steps"],
            water_days=counts["water"],
            workout_days=counts["workout"],
            perfect_days=perfect,
            protein_rate=_rate(counts["protein"], total),
            steps_rate=_rate(counts["steps"], total),
            water_rate=_rate(counts["water"], total),
            workout_rate=_rate(counts["workout"], total),
            perfect_rate=_rate(perfect, total),
        )

    def export_all(self) -> list[DailyLogEntry]:
        """Return the full history for backups."""
        return self._load()

    def import_entries(
        self, entries: Iterable[DailyLogEntry], merge: bool = True
    ) -> int:
        """Import entries from a backup and return how many were added.

        In merge mode only dates missing from the store are added, so importing
        the same backup twice changes nothing the second time. Otherwise the
        store is replaced by the incoming entries.
        """
        incoming = _dedupe(entries)
        if not merge:
            kept = incoming[: self.max_logs]
            self._save(kept)
            _logger.info("Replaced daily logs: count=%s", len(kept))
            return len(kept)

        existing = self._load()
        known = {entry.day for entry in existing}
        added = [entry for entry in incoming if entry.day not in known]
        if not added:
            return 0
        merged = sorted(existing + added, key=lambda entry: entry.day, reverse=True)
        self._save(merged[: self.max_logs])
        _logger.info("Merged daily logs: added=%s", len(added))
        return len(added)

    def clear(self) -> None:
        """Remove every stored entry."""
        self.store.remove(DAILY_LOGS_KEY)

    def _load(self) -> list[DailyLogEntry]:
        decoded = decode_daily_logs(self.store.read(DAILY_LOGS_KEY))
        if not decoded.ok:
            _logger.warning("Ignoring corrupt daily logs: %s", decoded.error)
        return decoded.value

    def _save(self, entries: list[DailyLogEntry]) -> None:
        self.store.write(DAILY_LOGS_KEY, encode_daily_logs(entries))


def _validate_changes(changes: dict[str, object]) -> None:
    unknown = set(changes) - _UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown daily log fields: {', '.join(sorted(unknown))}")
    for goal in GOALS:
        if goal in changes and not isinstance(changes[goal], bool):
            raise ValueError(f"{goal} must be a boolean")
    glasses = changes.get("water_glasses")
    if isinstance(glasses, int) and glasses < 0:
        raise ValueError("water_glasses must be non-negative")


def _next_timestamp(previous: datetime | None, now: datetime) -> datetime:
    if previous is not None and previous.tzinfo is None:
        previous = previous.replace(tzinfo=UTC)
    if previous is None or now >= previous:
        return now
    return previous


def _rate(count: int, total: int) -> int:
    if not total:
        return 0
    return math.floor(count / total * 100 + 0.5)


def _dedupe(entries: Iterable[DailyLogEntry]) -> list[DailyLogEntry]:
    seen: set[date] = set()
    unique = []
    for entry in entries:
        if entry.day in seen:
            continue
        seen.add(entry.day)
        unique.append(entry)
    return unique
