"""Shared test fixtures."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

import pytest

from fitness_coach.config import Settings
from fitness_coach.containers import AppContainer, build_container
from fitness_coach.domain.daily_logs import DailyLogEntry
from fitness_coach.services.daily_logs import DailyLogService
from fitness_coach.services.goals import GoalService
from fitness_coach.services.legacy import LegacyStateStore
from fitness_coach.services.metrics import MetricsService
from fitness_coach.services.store import InMemoryKeyValueStore

TODAY = date(2026, 10, 16)


@dataclass
class FakeClock:
    """Controllable clock for date-dependent services."""

    now: datetime

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def days_ago(offset: int) -> date:
    return TODAY - timedelta(days=offset)


def entry(day: date, completed: int = 0, **overrides: object) -> DailyLogEntry:
    """Build an entry with the first N goals met."""
    flags = {
        "protein": completed >= 1,
        "steps": completed >= 2,
        "water": completed >= 3,
        "workout": completed >= 4,
    }
    flags.update(overrides)
    return DailyLogEntry(day=day, **flags)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 16, 12, 0, tzinfo=UTC))


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def daily_log_service(
    store: InMemoryKeyValueStore, clock: FakeClock
) -> DailyLogService:
    return DailyLogService(store=store, clock=clock)


@pytest.fixture
def legacy_state(store: InMemoryKeyValueStore) -> LegacyStateStore:
    return LegacyStateStore(store)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory")


@pytest.fixture
def container(
    settings: Settings, store: InMemoryKeyValueStore, clock: FakeClock
) -> AppContainer:
    app_container = build_container(settings, store=store)
    app_container.daily_log_service.clock = clock
    app_container.backup_service.clock = clock
    app_container.metrics_service.clock = clock
    return app_container


@pytest.fixture
def goal_service(
    daily_log_service: DailyLogService, legacy_state: LegacyStateStore
) -> GoalService:
    return GoalService(daily_log_service, legacy_state)


@pytest.fixture
def metrics_service(store: InMemoryKeyValueStore, clock: FakeClock) -> MetricsService:
    return MetricsService(store=store, clock=clock)
