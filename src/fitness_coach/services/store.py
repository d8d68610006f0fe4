"""Key-value storage abstractions."""

from dataclasses import dataclass
from typing import Protocol

DAILY_LOGS_KEY = "fitness_daily_logs"
CHECKLIST_KEY = "fitness_daily_checklist"
STREAK_CACHE_KEY = "fitness_streak_data"
WATER_INTAKE_KEY = "fitness_water_intake"
WORKOUT_BADGES_KEY = "fitness_workout_badges"
PROGRESS_METRICS_KEY = "fitness_progress_metrics"


class KeyValueStore(Protocol):
    """Durable text storage addressed by namespace key."""

    def read(self, key: str) -> str | None:
        """Return the raw payload stored under a key, if any."""

    def write(self, key: str, raw: str) -> None:
        """Replace the payload stored under a key."""

    def remove(self, key: str) -> None:
        """Delete the payload stored under a key."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store for tests and throwaway sessions."""

    _values: dict[str, str]

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def read(self, key: str) -> str | None:
        """Return the stored payload."""
        return self._values.get(key)

    def write(self, key: str, raw: str) -> None:
        """Store a payload."""
        self._values[key] = raw

    def remove(self, key: str) -> None:
        """Drop a payload if present."""
        self._values.pop(key, None)
