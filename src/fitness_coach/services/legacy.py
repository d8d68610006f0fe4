"""Access to storage namespaces that predate the unified daily log."""

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from pydantic import JsonValue

from fitness_coach.codec import (
    decode_checklist,
    decode_json,
    decode_streak_cache,
    decode_water_intake,
    encode_checklist,
    encode_json,
    encode_streak_cache,
    encode_water_intake,
)
from fitness_coach.domain.daily_logs import GOALS
from fitness_coach.domain.legacy import LegacyChecklist, LegacyStreakCache
from fitness_coach.domain.water import WaterIntake
from fitness_coach.services.store import (
    CHECKLIST_KEY,
    STREAK_CACHE_KEY,
    WATER_INTAKE_KEY,
    KeyValueStore,
)

_logger = logging.getLogger(__name__)


@dataclass
class LegacyStateStore:
    """Typed access to legacy checklist, streak cache and widget payloads."""

    store: KeyValueStore

    def read_checklist(self) -> LegacyChecklist | None:
        """Return the stored checklist snapshot, if readable."""
        decoded = decode_checklist(self.store.read(CHECKLIST_KEY))
        if not decoded.ok:
            _logger.warning("Ignoring corrupt checklist: %s", decoded.error)
        return decoded.value

    def write_checklist(self, checklist: LegacyChecklist) -> None:
        """Replace the checklist snapshot."""
        self.store.write(CHECKLIST_KEY, encode_checklist(checklist))

    def mirror_goals(self, day: date, flags: Mapping[str, bool]) -> bool:
        """Copy goal flags onto the checklist snapshot when it belongs to day.

        The checklist only ever describes a single day, so a snapshot for any
        other day (or no snapshot at all) is left alone. Returns True when the
        snapshot was rewritten.
        """
        checklist = self.read_checklist()
        if checklist is None or checklist.day != day:
            return False
        changes = {goal: value for goal, value in flags.items() if goal in GOALS}
        if not changes:
            return False
        self.write_checklist(dataclasses.replace(checklist, **changes))
        return True

    def read_streak_cache(self) -> LegacyStreakCache | None:
        """Return the stored streak cache, if readable."""
        decoded = decode_streak_cache(self.store.read(STREAK_CACHE_KEY))
        if not decoded.ok:
            _logger.warning("Ignoring corrupt streak cache: %s", decoded.error)
        return decoded.value

    def write_streak_cache(self, cache: LegacyStreakCache) -> None:
        """Replace the streak cache."""
        self.store.write(STREAK_CACHE_KEY, encode_streak_cache(cache))

    def read_water_intake(self) -> WaterIntake | None:
        """Return the last saved water intake, if readable."""
        decoded = decode_water_intake(self.store.read(WATER_INTAKE_KEY))
        if not decoded.ok:
            _logger.warning("Ignoring corrupt water intake: %s", decoded.error)
        return decoded.value

    def write_water_intake(self, intake: WaterIntake) -> None:
        self.store.write(WATER_INTAKE_KEY, encode_water_intake(intake))

    def read_widget_state(self, key: str) -> JsonValue:
        """Return opaque widget state stored under a key."""
        decoded = decode_json(self.store.read(key))
        if not decoded.ok:
            _logger.warning(
                "Ignoring corrupt widget state key=%s: %s", key, decoded.error
            )
        return decoded.value

    def write_widget_state(self, key: str, value: JsonValue) -> None:
        """Replace opaque widget state stored under a key."""
        self.store.write(key, encode_json(value))
