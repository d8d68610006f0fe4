"""Body measurement history."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from fitness_coach.codec import decode_metrics, encode_metrics
from fitness_coach.domain.metrics import MetricEntry, MetricPoint
from fitness_coach.services.store import PROGRESS_METRICS_KEY, KeyValueStore

CHART_POINTS = 8

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MetricsService:
    """Stores waist, weight and photo check-ins, newest date first."""

    store: KeyValueStore
    timezone_name: str = "UTC"
    clock: Callable[[], datetime] = field(default=_utc_now)

    def list_entries(self) -> list[MetricEntry]:
        """Return every check-in, newest date first."""
        return self._load()

    def add(
        self,
        day: date | None = None,
        *,
        waist: float | None = None,
        weight: float | None = None,
        photos_taken: bool = False,
    ) -> MetricEntry:
        """Record a check-in.

        Raises ValueError when nothing was measured and no photos were taken,
        or when a measurement is not positive.
        """
        if waist is None and weight is None and not photos_taken:
            raise ValueError("Provide waist, weight or photos_taken")
        for name, value in (("waist", waist), ("weight", weight)):
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive")
        now = self.clock()
        entries = self._load()
        entry = MetricEntry(
            id=_next_id(now, entries),
            day=day or now.astimezone(ZoneInfo(self.timezone_name)).date(),
            waist=waist,
            weight=weight,
            photos_taken=photos_taken,
        )
        self._save([entry, *entries])
        _logger.info("Metric entry added: id=%s day=%s", entry.id, entry.day)
        return entry

    def delete(self, entry_id: int) -> bool:
        """Remove a check-in by id and report whether it existed."""
        entries = self._load()
        kept = [entry for entry in entries if entry.id != entry_id]
        if len(kept) == len(entries):
            return False
        self._save(kept)
        return True

    def chart_series(self, limit: int = CHART_POINTS) -> list[MetricPoint]:
        """Return the latest measured check-ins, oldest first."""
        measured = [entry for entry in self._load() if entry.has_measurement]
        measured.sort(key=lambda entry: entry.day)
        return [
            MetricPoint(day=entry.day, waist=entry.waist, weight=entry.weight)
            for entry in measured[-limit:]
        ]

    def import_entries(self, entries: Iterable[MetricEntry], merge: bool = True) -> int:
        """Import check-ins from a backup and return how many were added.

        Merging skips ids already stored. Replacing drops the stored history.
        """
        incoming = list(entries)
        if not merge:
            self._save(incoming)
            return len(incoming)
        existing = self._load()
        known = {entry.id for entry in existing}
        added = [entry for entry in incoming if entry.id not in known]
        if added:
            self._save(existing + added)
        return len(added)

    def _load(self) -> list[MetricEntry]:
        decoded = decode_metrics(self.store.read(PROGRESS_METRICS_KEY))
        if not decoded.ok:
            _logger.warning("Ignoring corrupt metrics: %s", decoded.error)
        return decoded.value

    def _save(self, entries: list[MetricEntry]) -> None:
        ordered = sorted(entries, key=lambda entry: entry.day, reverse=True)
        self.store.write(PROGRESS_METRICS_KEY, encode_metrics(ordered))


def _next_id(now: datetime, entries: list[MetricEntry]) -> int:
    # Millisecond timestamps, bumped past any id already in use.
    candidate = int(now.timestamp() * 1000)
    highest = max((entry.id for entry in entries), default=0)
    return max(candidate, highest + 1)
