"""JSON codecs for persisted and exported payloads.

Stored payloads keep the camelCase keys written by the original browser
widgets so existing data keeps loading. Decoding never raises: a payload
that fails to parse comes back as an empty value with ``error`` set, which
lets callers tell "nothing stored yet" apart from "stored data is corrupt".
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Generic, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from fitness_coach.domain.daily_logs import DailyLogEntry
from fitness_coach.domain.legacy import (
    LegacyChecklist,
    LegacyStreakCache,
    LegacyStreakDay,
)
from fitness_coach.domain.metrics import MetricEntry
from fitness_coach.domain.water import WaterIntake

BACKUP_VERSION = 1

T = TypeVar("T")


@dataclass(frozen=True)
class Decoded(Generic[T]):
    """Outcome of decoding a stored payload."""

    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the payload was absent or parsed cleanly."""
        return self.error is None


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DailyLogRecord(_CamelModel):
    """Serialized daily log entry."""

    day: date = Field(alias="date")
    protein: bool = False
    steps: bool = False
    water: bool = False
    workout: bool = False
    water_glasses: int | None = Field(default=None, alias="waterGlasses", ge=0)
    notes: str | None = None
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_entry(cls, entry: DailyLogEntry) -> "DailyLogRecord":
        """Build a record from a domain entry."""
        return cls(
            day=entry.day,
            protein=entry.protein,
            steps=entry.steps,
            water=entry.water,
            workout=entry.workout,
            water_glasses=entry.water_glasses,
            notes=entry.notes,
            updated_at=entry.updated_at,
        )

    def to_entry(self) -> DailyLogEntry:
        """Return the domain entry for this record."""
        return DailyLogEntry(
            day=self.day,
            protein=self.protein,
            steps=self.steps,
            water=self.water,
            workout=self.workout,
            water_glasses=self.water_glasses,
            notes=self.notes,
            updated_at=self.updated_at,
        )


class LegacyChecklistRecord(_CamelModel):
    """Serialized single-day checklist."""

    day: date = Field(alias="date")
    protein: bool = False
    steps: bool = False
    water: bool = False
    workout: bool = False

    @classmethod
    def from_checklist(cls, checklist: LegacyChecklist) -> "LegacyChecklistRecord":
        """Build a record from a domain checklist."""
        return cls(
            day=checklist.day,
            protein=checklist.protein,
            steps=checklist.steps,
            water=checklist.water,
            workout=checklist.workout,
        )

    def to_checklist(self) -> LegacyChecklist:
        """Return the domain checklist for this record."""
        return LegacyChecklist(
            day=self.day,
            protein=self.protein,
            steps=self.steps,
            water=self.water,
            workout=self.workout,
        )


class LegacyStreakDayRecord(_CamelModel):
    """Serialized streak cache day."""

    day: date = Field(alias="date")
    completed_goals: int = Field(
        validation_alias=AliasChoices(
            "completedGoals", "completedGoalCount", "completed_goals"
        ),
        serialization_alias="completedGoals",
        ge=0,
        le=4,
    )


class LegacyStreakCacheRecord(_CamelModel):
    """Serialized streak cache."""

    days: list[LegacyStreakDayRecord] = Field(default_factory=list)
    current_streak: int = Field(default=0, alias="currentStreak", ge=0)
    longest_streak: int = Field(default=0, alias="longestStreak", ge=0)

    @classmethod
    def from_cache(cls, cache: LegacyStreakCache) -> "LegacyStreakCacheRecord":
        """Build a record from a domain streak cache."""
        return cls(
            days=[
                LegacyStreakDayRecord(day=day.day, completed_goals=day.completed_goals)
                for day in cache.days
            ],
            current_streak=cache.current_streak,
            longest_streak=cache.longest_streak,
        )

    def to_cache(self) -> LegacyStreakCache:
        """Return the domain streak cache for this record."""
        return LegacyStreakCache(
            days=[
                LegacyStreakDay(day=day.day, completed_goals=day.completed_goals)
                for day in self.days
            ],
            current_streak=self.current_streak,
            longest_streak=self.longest_streak,
        )


class WaterIntakeRecord(_CamelModel):
    """Serialized water intake for one day."""

    day: date = Field(alias="date")
    glasses: int = Field(default=0, ge=0)

    def to_intake(self) -> WaterIntake:
        """Return the domain intake for this record."""
        return WaterIntake(day=self.day, glasses=self.glasses)


class MetricRecord(_CamelModel):
    """Serialized body measurement check-in.

    Older payloads store waist and weight as form strings, with an empty
    string for a field left blank.
    """

    id: int
    day: date = Field(alias="date")
    waist: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    photos_taken: bool = Field(default=False, alias="photosTaken")

    @field_validator("waist", "weight", mode="before")
    @classmethod
    def _blank_as_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_entry(cls, entry: MetricEntry) -> "MetricRecord":
        """Build a record from a domain entry."""
        return cls(
            id=entry.id,
            day=entry.day,
            waist=entry.waist,
            weight=entry.weight,
            photos_taken=entry.photos_taken,
        )

    def to_entry(self) -> MetricEntry:
        """Return the domain entry for this record."""
        return MetricEntry(
            id=self.id,
            day=self.day,
            waist=self.waist,
            weight=self.weight,
            photos_taken=self.photos_taken,
        )


class BackupDocument(_CamelModel):
    """Backup file contents."""

    version: int = BACKUP_VERSION
    exported_at: datetime | None = Field(default=None, alias="exportedAt")
    daily_logs: list[DailyLogRecord] | None = Field(default=None, alias="dailyLogs")
    checklist: LegacyChecklistRecord | None = None
    progress_metrics: list[MetricRecord] | None = Field(
        default=None, alias="progressMetrics"
    )
    workout_badges: JsonValue = Field(default=None, alias="workoutBadges")
    water_intake: JsonValue = Field(default=None, alias="waterIntake")


_DAILY_LOGS = TypeAdapter(list[DailyLogRecord])
_METRICS = TypeAdapter(list[MetricRecord])
_JSON_VALUE = TypeAdapter(JsonValue)


def decode_daily_logs(raw: str | None) -> Decoded[list[DailyLogEntry]]:
    """Decode the unified daily log collection."""
    if raw is None:
        return Decoded([])
    try:
        records = _DAILY_LOGS.validate_json(raw)
    except ValidationError as exc:
        return Decoded([], error=_describe(exc))
    return Decoded([record.to_entry() for record in records])


def encode_daily_logs(entries: list[DailyLogEntry]) -> str:
    """Encode the unified daily log collection."""
    records = [DailyLogRecord.from_entry(entry) for entry in entries]
    return _DAILY_LOGS.dump_json(records, by_alias=True, exclude_none=True).decode()


def decode_checklist(raw: str | None) -> Decoded[LegacyChecklist | None]:
    """Decode the legacy checklist snapshot."""
    if raw is None:
        return Decoded(None)
    try:
        record = LegacyChecklistRecord.model_validate_json(raw)
    except ValidationError as exc:
        return Decoded(None, error=_describe(exc))
    return Decoded(record.to_checklist())


def encode_checklist(checklist: LegacyChecklist) -> str:
    """Encode the legacy checklist snapshot."""
    return LegacyChecklistRecord.from_checklist(checklist).model_dump_json(
        by_alias=True
    )


def decode_streak_cache(raw: str | None) -> Decoded[LegacyStreakCache | None]:
    """Decode the legacy streak cache."""
    if raw is None:
        return Decoded(None)
    try:
        record = LegacyStreakCacheRecord.model_validate_json(raw)
    except ValidationError as exc:
        return Decoded(None, error=_describe(exc))
    return Decoded(record.to_cache())


def encode_streak_cache(cache: LegacyStreakCache) -> str:
    """Encode the legacy streak cache."""
    return LegacyStreakCacheRecord.from_cache(cache).model_dump_json(by_alias=True)


def decode_water_intake(raw: str | None) -> Decoded[WaterIntake | None]:
    """Decode the water intake widget state."""
    if raw is None:
        return Decoded(None)
    try:
        record = WaterIntakeRecord.model_validate_json(raw)
    except ValidationError as exc:
        return Decoded(None, error=_describe(exc))
    return Decoded(record.to_intake())


def encode_water_intake(intake: WaterIntake) -> str:
    """Encode the water intake widget state."""
    record = WaterIntakeRecord(day=intake.day, glasses=intake.glasses)
    return record.model_dump_json(by_alias=True)


def decode_metrics(raw: str | None) -> Decoded[list[MetricEntry]]:
    """Decode the body measurement history."""
    if raw is None:
        return Decoded([])
    try:
        records = _METRICS.validate_json(raw)
    except ValidationError as exc:
        return Decoded([], error=_describe(exc))
    return Decoded([record.to_entry() for record in records])


def encode_metrics(entries: list[MetricEntry]) -> str:
    """Encode the body measurement history."""
    records = [MetricRecord.from_entry(entry) for entry in entries]
    return _METRICS.dump_json(records, by_alias=True, exclude_none=True).decode()


def decode_json(raw: str | None) -> Decoded[JsonValue]:
    """Decode an opaque JSON payload such as widget state."""
    if raw is None:
        return Decoded(None)
    try:
        value = _JSON_VALUE.validate_json(raw)
    except ValidationError as exc:
        return Decoded(None, error=_describe(exc))
    return Decoded(value)


def encode_json(value: JsonValue) -> str:
    """Encode an opaque JSON payload."""
    return _JSON_VALUE.dump_json(value).decode()


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    return f"{exc.error_count()} error(s), first: {first.get('msg', 'invalid')}"
