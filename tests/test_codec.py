"""Tests for payload codecs."""

from datetime import date

from fitness_coach.codec import (
    decode_checklist,
    decode_daily_logs,
    decode_streak_cache,
    encode_daily_logs,
)
from fitness_coach.domain.daily_logs import DailyLogEntry


def test_absent_payload_is_empty_and_ok() -> None:
    decoded = decode_daily_logs(None)

    assert decoded.ok
    assert decoded.value == []


def test_corrupt_payload_is_empty_with_error() -> None:
    decoded = decode_daily_logs('[{"date": "2026-13-40"}]')

    assert not decoded.ok
    assert decoded.value == []
    assert decoded.error


def test_daily_logs_use_camel_case_keys() -> None:
    raw = encode_daily_logs(
        [DailyLogEntry(day=date(2026, 10, 16), water=True, water_glasses=10)]
    )

    assert '"waterGlasses":10' in raw
    assert '"date":"2026-10-16"' in raw
    assert "notes" not in raw


def test_decodes_browser_payload() -> None:
    raw = (
        '[{"date":"2026-10-15","protein":true,"steps":false,"water":true,'
        '"workout":false,"waterGlasses":8,"updatedAt":"2026-10-15T20:11:04.512Z"}]'
    )

    decoded = decode_daily_logs(raw)

    assert decoded.ok
    entry = decoded.value[0]
    assert entry.day == date(2026, 10, 15)
    assert entry.water_glasses == 8
    assert entry.completed_goals == 2
    assert entry.updated_at is not None


def test_negative_water_glasses_is_corrupt() -> None:
    decoded = decode_daily_logs('[{"date": "2026-10-15", "waterGlasses": -2}]')

    assert not decoded.ok


def test_streak_cache_accepts_both_count_keys() -> None:
    decoded = decode_streak_cache(
        '{"days": [{"date": "2026-10-14", "completedGoals": 2},'
        ' {"date": "2026-10-13", "completedGoalCount": 4}],'
        ' "currentStreak": 1, "longestStreak": 3}'
    )

    assert decoded.ok
    cache = decoded.value
    assert [day.completed_goals for day in cache.days] == [2, 4]
    assert cache.longest_streak == 3


def test_checklist_without_date_is_corrupt() -> None:
    decoded = decode_checklist('{"protein": true}')

    assert not decoded.ok
    assert decoded.value is None
