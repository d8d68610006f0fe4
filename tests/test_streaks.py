"""Tests for streak calculation."""

from fitness_coach.codec import encode_streak_cache
from fitness_coach.domain.legacy import LegacyStreakCache, LegacyStreakDay
from fitness_coach.services.store import STREAK_CACHE_KEY
from fitness_coach.services.streaks import StreakService, calculate_streaks
from tests.conftest import TODAY, days_ago


def _counts(*pairs: tuple[int, int]) -> dict:
    return {days_ago(offset): completed for offset, completed in pairs}


def test_empty_history_has_no_streaks() -> None:
    snapshot = calculate_streaks({}, TODAY)

    assert snapshot.current_streak == 0
    assert snapshot.longest_streak == 0


def test_current_streak_stops_at_first_gap() -> None:
    counts = _counts((0, 4), (1, 3), (2, 3), (3, 4), (4, 3), (5, 1), (6, 3))

    snapshot = calculate_streaks(counts, TODAY)

    assert snapshot.current_streak == 5
    assert snapshot.longest_streak >= 5


def test_unlogged_today_does_not_break_streak() -> None:
    counts = _counts(*((offset, 3) for offset in range(1, 7)))

    snapshot = calculate_streaks(counts, TODAY)

    assert snapshot.current_streak == 6
    assert snapshot.longest_streak == 6


def test_incomplete_today_does_not_break_streak() -> None:
    counts = _counts((0, 1), (1, 4), (2, 4))

    snapshot = calculate_streaks(counts, TODAY)

    assert snapshot.current_streak == 2


def test_gap_right_before_today() -> None:
    counts = _counts((0, 3), (2, 3), (3, 3))

    snapshot = calculate_streaks(counts, TODAY)

    assert snapshot.current_streak == 1
    assert snapshot.longest_streak == 1


def test_longest_streak_found_after_early_gap() -> None:
    counts = _counts((1, 2), (3, 3), (4, 3), (5, 3), (7, 3))

    snapshot = calculate_streaks(counts, TODAY)

    assert snapshot.current_streak == 0
    assert snapshot.longest_streak == 3


def test_full_window_is_one_streak() -> None:
    counts = _counts(*((offset, 4) for offset in range(60)))

    snapshot = calculate_streaks(counts, TODAY, window_days=35)

    assert snapshot.current_streak == 35
    assert snapshot.longest_streak == 35


def test_completed_threshold_is_configurable() -> None:
    counts = _counts((0, 2), (1, 2))

    assert calculate_streaks(counts, TODAY).current_streak == 0
    assert calculate_streaks(counts, TODAY, completed_threshold=2).current_streak == 2


def test_service_uses_daily_log(daily_log_service, legacy_state) -> None:
    for offset in range(3):
        daily_log_service.upsert(
            days_ago(offset), protein=True, steps=True, water=True
        )
    service = StreakService(daily_log_service, legacy_state)

    snapshot = service.compute()

    assert snapshot.current_streak == 3
    assert snapshot.longest_streak == 3


def test_service_fills_gaps_from_legacy_cache(
    store, daily_log_service, legacy_state
) -> None:
    daily_log_service.upsert(days_ago(0), protein=True, steps=True, water=True)
    daily_log_service.upsert(days_ago(1), protein=True)
    store.write(
        STREAK_CACHE_KEY,
        encode_streak_cache(
            LegacyStreakCache(
                days=[
                    LegacyStreakDay(day=days_ago(1), completed_goals=4),
                    LegacyStreakDay(day=days_ago(2), completed_goals=4),
                ]
            )
        ),
    )
    service = StreakService(daily_log_service, legacy_state)

    counts = service.goal_counts()

    assert counts[days_ago(1)] == 1
    assert counts[days_ago(2)] == 4
    assert service.compute().current_streak == 1


def test_refresh_writes_cache_and_keeps_best_streak(
    daily_log_service, legacy_state
) -> None:
    legacy_state.write_streak_cache(LegacyStreakCache(longest_streak=12))
    for offset in range(2):
        daily_log_service.upsert(
            days_ago(offset), protein=True, steps=True, water=True, workout=True
        )
    service = StreakService(daily_log_service, legacy_state)

    snapshot = service.refresh()

    assert snapshot.current_streak == 2
    assert snapshot.longest_streak == 12
    cache = legacy_state.read_streak_cache()
    assert cache is not None
    assert cache.current_streak == 2
    assert cache.longest_streak == 12
    assert [day.day for day in cache.days] == [days_ago(0), days_ago(1)]
    assert all(day.completed_goals == 4 for day in cache.days)


def test_history_returns_window_oldest_first(daily_log_service, legacy_state) -> None:
    daily_log_service.upsert(days_ago(1), protein=True, steps=True)
    service = StreakService(daily_log_service, legacy_state)

    history = service.history(7)

    assert len(history) == 7
    assert history[0].day == days_ago(6)
    assert history[-1].day == TODAY
    assert history[-2].completed_goals == 2
    assert history[-1].completed_goals == 0
