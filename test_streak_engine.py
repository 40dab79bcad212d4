"""
Test per-task streak engine
"""

from datetime import date

import pytest

from conftest import TODAY, days_ago
from nonzero.services.streak_engine import (
    DaySeries,
    TaskStreakEngine,
    comeback_days,
    current_streak,
    longest_streak,
    missed_days,
    recovery_ratio,
)


def engine(task):
    return TaskStreakEngine(task, TODAY)


def test_pushups_scenario(pushups):
    streaks = engine(pushups)
    assert streaks.comeback_count() == 2
    assert streaks.current_streak() == 1
    assert streaks.longest_streak() == 1
    assert comeback_days(streaks.series()) == [days_ago(5), days_ago(0)]


def test_task_without_entries(make_task):
    streaks = engine(make_task())
    assert streaks.current_streak() == 0
    assert streaks.longest_streak() == 0
    assert streaks.comeback_count() == 0
    assert streaks.recovery_ratio() == 0.0
    assert streaks.days_returned_after_miss() == 0
    assert streaks.total_non_zero_days() == 0


def test_current_streak_starts_yesterday_when_today_not_logged(make_task):
    task = make_task({3: 5, 2: 5, 1: 5})
    assert engine(task).current_streak() == 3


def test_logging_today_extends_the_streak(make_task):
    before = make_task({3: 5, 2: 5, 1: 5})
    after = make_task({3: 5, 2: 5, 1: 5, 0: 5})
    assert engine(after).current_streak() == engine(before).current_streak() + 1


def test_current_streak_zero_after_missed_yesterday(make_task):
    task = make_task({3: 5, 2: 5})
    assert engine(task).current_streak() == 0


def test_sub_minimum_entry_breaks_streak(make_task):
    task = make_task({2: 5, 1: 3, 0: 5}, minimum=5)
    streaks = engine(task)
    assert streaks.current_streak() == 1
    assert streaks.longest_streak() == 1


def test_longest_streak_finds_best_run(make_task):
    task = make_task({10: 5, 9: 5, 8: 5, 5: 5, 4: 5, 1: 5, 0: 5})
    streaks = engine(task)
    assert streaks.longest_streak() == 3
    assert streaks.current_streak() == 2


@pytest.mark.parametrize("values", [
    {},
    {0: 5},
    {1: 5, 0: 5},
    {6: 5, 5: 5, 4: 5, 3: 5, 1: 5, 0: 5},
    {9: 5, 8: 5, 2: 5, 1: 5},
    {4: 5, 3: 0, 2: 5, 1: 5, 0: 5},
])
def test_longest_never_below_current(make_task, values):
    streaks = engine(make_task(values))
    assert streaks.longest_streak() >= streaks.current_streak()


def test_explicit_zero_then_non_zero_is_a_comeback(make_task):
    task = make_task({2: 0, 1: 5})
    assert engine(task).comeback_count() == 1


def test_zero_entry_and_gap_rules_do_not_double_count(make_task):
    # non-zero, explicit zero, non-zero: one comeback, not two
    task = make_task({3: 5, 2: 0, 1: 5})
    assert engine(task).comeback_count() == 1


def test_first_non_zero_day_is_not_a_comeback(make_task):
    task = make_task({4: 5, 3: 5})
    assert engine(task).comeback_count() == 0


def test_days_returned_after_miss_counts_unlogged_start(pushups):
    # Created 10 days ago, first logged 9 days ago: returning on day 9
    # counts here but not as a comeback
    assert engine(pushups).days_returned_after_miss() == 3


def test_days_returned_after_miss_with_backfilled_entries(make_task):
    task = make_task({12: 5, 10: 5}, created_days_ago=5)
    assert engine(task).days_returned_after_miss() == 1


def test_recovery_ratio_over_logged_span(pushups):
    # Span day 9 .. today: 10 days, 3 non-zero, 7 missed, 2 comebacks
    assert engine(pushups).recovery_ratio() == pytest.approx(2 / 7)


def test_recovery_ratio_stops_at_last_entry(make_task):
    # Misses after the last entry are not part of the span
    task = make_task({6: 5, 5: 0, 4: 5})
    assert engine(task).recovery_ratio() == pytest.approx(1.0)


def test_recovery_ratio_zero_without_misses(make_task):
    task = make_task({2: 5, 1: 5, 0: 5})
    assert engine(task).recovery_ratio() == 0.0


def test_summary_is_idempotent(pushups):
    streaks = engine(pushups)
    assert streaks.summary() == streaks.summary()
    assert engine(pushups).summary() == streaks.summary()


def test_day_series_functions_directly():
    series = DaySeries.build(
        [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 5)],
        start=date(2024, 1, 1),
        end=date(2024, 1, 6),
    )
    assert current_streak(series) == 1
    assert longest_streak(series) == 2
    assert comeback_days(series) == [date(2024, 1, 5)]
    assert missed_days(series) == 3
    assert recovery_ratio(series) == pytest.approx(1 / 3)


def test_future_days_are_outside_the_window():
    series = DaySeries.build([date(2024, 1, 10)], start=date(2024, 1, 1), end=date(2024, 1, 5))
    assert missed_days(series) == 5
    assert comeback_days(series) == []
