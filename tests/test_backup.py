"""Tests for backup export and import."""

import json

import pytest

from fitness_coach.domain.legacy import LegacyChecklist
from fitness_coach.services.backup import BackupImportError, BackupService
from fitness_coach.services.store import (
    DAILY_LOGS_KEY,
    PROGRESS_METRICS_KEY,
    WATER_INTAKE_KEY,
    WORKOUT_BADGES_KEY,
)
from tests.conftest import TODAY, days_ago


@pytest.fixture
def backup_service(
    daily_log_service, legacy_state, metrics_service, clock
) -> BackupService:
    return BackupService(daily_log_service, legacy_state, metrics_service, clock=clock)


def test_export_contains_logs_checklist_and_widget_state(
    backup_service, daily_log_service, legacy_state
) -> None:
    daily_log_service.upsert(TODAY, protein=True, water_glasses=6)
    legacy_state.write_checklist(LegacyChecklist(day=TODAY, protein=True))
    legacy_state.write_widget_state(
        WATER_INTAKE_KEY, {"date": "2026-10-16", "glasses": 6}
    )

    document = json.loads(backup_service.export_json())

    assert document["version"] == 1
    assert document["exportedAt"].startswith("2026-10-16T12:00:00")
    assert document["dailyLogs"][0]["date"] == "2026-10-16"
    assert document["dailyLogs"][0]["waterGlasses"] == 6
    assert document["checklist"]["protein"] is True
    assert document["waterIntake"]["glasses"] == 6
    assert "workoutBadges" not in document


def test_import_into_empty_store_restores_everything(
    backup_service, daily_log_service, legacy_state, store
) -> None:
    daily_log_service.upsert(days_ago(1), steps=True)
    legacy_state.write_widget_state(WORKOUT_BADGES_KEY, [{"weekStart": "2026-10-12"}])
    exported = backup_service.export_json()
    store.remove(DAILY_LOGS_KEY)
    store.remove(WORKOUT_BADGES_KEY)

    report = backup_service.import_json(exported)

    assert report.daily_logs_added == 1
    assert report.widget_state_restored == [WORKOUT_BADGES_KEY]
    assert daily_log_service.get_by_date(days_ago(1)).steps is True
    assert legacy_state.read_widget_state(WORKOUT_BADGES_KEY) == [
        {"weekStart": "2026-10-12"}
    ]


def test_import_same_backup_twice_changes_nothing(
    backup_service, daily_log_service
) -> None:
    daily_log_service.upsert(days_ago(2), protein=True)
    daily_log_service.upsert(days_ago(1), steps=True)
    exported = backup_service.export_json()
    before = daily_log_service.get_all()

    backup_service.import_json(exported)
    backup_service.import_json(exported)

    assert daily_log_service.get_all() == before


def test_partial_backup_imports(backup_service, daily_log_service) -> None:
    raw = json.dumps({"dailyLogs": [{"date": "2026-10-01", "workout": True}]})

    report = backup_service.import_json(raw)

    assert report.daily_logs_added == 1
    assert report.checklist_restored is False
    imported = daily_log_service.get_by_date(days_ago(15))
    assert imported.workout is True
    assert imported.protein is False


def test_unknown_fields_are_ignored(backup_service, daily_log_service) -> None:
    raw = json.dumps(
        {
            "version": 1,
            "theme": "dark",
            "dailyLogs": [{"date": "2026-10-02", "protein": True, "mood": "good"}],
        }
    )

    backup_service.import_json(raw)

    assert daily_log_service.get_by_date(days_ago(14)).protein is True


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        "[1, 2, 3]",
        json.dumps({"dailyLogs": [{"date": "yesterday"}]}),
        json.dumps(
            {
                "dailyLogs": [{"date": "2026-10-03"}],
                "checklist": {"protein": True},
            }
        ),
    ],
)
def test_malformed_backup_leaves_store_unchanged(
    backup_service, daily_log_service, store, raw
) -> None:
    daily_log_service.upsert(TODAY, protein=True)
    before = store.read(DAILY_LOGS_KEY)

    with pytest.raises(BackupImportError):
        backup_service.import_json(raw)

    assert store.read(DAILY_LOGS_KEY) == before


def test_replace_mode_overwrites_logs(backup_service, daily_log_service) -> None:
    daily_log_service.upsert(TODAY, protein=True)
    raw = json.dumps({"dailyLogs": [{"date": "2026-10-01", "steps": True}]})

    backup_service.import_json(raw, merge=False)

    assert [log.day for log in daily_log_service.get_all()] == [days_ago(15)]


def test_progress_metrics_round_trip_through_backup(
    backup_service, metrics_service, store
) -> None:
    metrics_service.add(days_ago(7), waist=90.5, photos_taken=True)
    exported = backup_service.export_json()
    store.remove(PROGRESS_METRICS_KEY)

    report = backup_service.import_json(exported)

    assert json.loads(exported)["progressMetrics"][0]["photosTaken"] is True
    assert report.metrics_added == 1
    [restored] = metrics_service.list_entries()
    assert restored.day == days_ago(7)
    assert restored.waist == 90.5


def test_backup_without_metrics_keeps_stored_metrics(
    backup_service, metrics_service
) -> None:
    metrics_service.add(TODAY, weight=80.0)

    report = backup_service.import_json(json.dumps({"dailyLogs": []}), merge=False)

    assert report.metrics_added == 0
    assert len(metrics_service.list_entries()) == 1
