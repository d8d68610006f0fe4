"""Dependency container wiring for the application."""

from dataclasses import dataclass

from fitness_coach.adapters.file_store import FileKeyValueStore
from fitness_coach.config import Settings
from fitness_coach.services.backup import BackupService
from fitness_coach.services.daily_logs import DailyLogService
from fitness_coach.services.goals import GoalService
from fitness_coach.services.legacy import LegacyStateStore
from fitness_coach.services.metrics import MetricsService
from fitness_coach.services.migration import MigrationService
from fitness_coach.services.store import InMemoryKeyValueStore, KeyValueStore
from fitness_coach.services.streaks import StreakService
from fitness_coach.services.water_intake import WaterIntakeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    daily_log_service: DailyLogService
    legacy_state: LegacyStateStore
    goal_service: GoalService
    water_intake_service: WaterIntakeService
    metrics_service: MetricsService
    streak_service: StreakService
    migration_service: MigrationService
    backup_service: BackupService


def build_container(
    settings: Settings | None = None, store: KeyValueStore | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_store = store if store is not None else _build_store(resolved_settings)
    daily_log_service = DailyLogService(
        store=resolved_store,
        max_logs=resolved_settings.max_logs,
        timezone_name=resolved_settings.timezone,
    )
    legacy_state = LegacyStateStore(resolved_store)
    goal_service = GoalService(
        daily_log_service=daily_log_service,
        legacy_state=legacy_state,
    )
    water_intake_service = WaterIntakeService(
        goal_service=goal_service,
        legacy_state=legacy_state,
    )
    metrics_service = MetricsService(
        store=resolved_store,
        timezone_name=resolved_settings.timezone,
    )
    streak_service = StreakService(
        daily_log_service=daily_log_service,
        legacy_state=legacy_state,
        window_days=resolved_settings.streak_window_days,
        completed_threshold=resolved_settings.streak_completed_goals,
    )
    migration_service = MigrationService(
        daily_log_service=daily_log_service,
        legacy_state=legacy_state,
    )
    backup_service = BackupService(
        daily_log_service=daily_log_service,
        legacy_state=legacy_state,
        metrics_service=metrics_service,
    )
    return AppContainer(
        settings=resolved_settings,
        store=resolved_store,
        daily_log_service=daily_log_service,
        legacy_state=legacy_state,
        goal_service=goal_service,
        water_intake_service=water_intake_service,
        metrics_service=metrics_service,
        streak_service=streak_service,
        migration_service=migration_service,
        backup_service=backup_service,
    )


def _build_store(settings: Settings) -> KeyValueStore:
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    return FileKeyValueStore(settings.storage_dir)
