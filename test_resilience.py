"""
Test resilience index
"""

import pytest

from conftest import TODAY, days_ago
from nonzero.services.resilience import (
    comeback_events,
    comeback_score,
    recency_weight,
    resilience_index,
)
from nonzero.services.streak_engine import TaskStreakEngine


def series_for(task):
    return TaskStreakEngine(task, TODAY).series()


def test_comeback_score_penalizes_longer_misses():
    assert comeback_score(1) == pytest.approx(1.0)
    assert comeback_score(2) == pytest.approx(1 / 1.5)
    assert comeback_score(3) == pytest.approx(0.5)
    assert comeback_score(5) > comeback_score(6)


def test_recency_weight_half_life():
    assert recency_weight(0) == pytest.approx(1.0)
    assert recency_weight(30) == pytest.approx(0.5)
    assert recency_weight(60) == pytest.approx(0.25)


def test_pushups_resilience(pushups):
    events = comeback_events(series_for(pushups))
    assert [e.day for e in events] == [days_ago(5), days_ago(0)]

    old, recent = events
    assert old.missed_days == 3
    assert old.score == pytest.approx(0.5)
    assert old.weight == pytest.approx(0.5 ** (5 / 30))
    assert recent.missed_days == 4
    assert recent.score == pytest.approx(0.4)
    assert recent.weight == pytest.approx(1.0)

    expected = (0.5 * 0.5 ** (5 / 30) + 0.4) / (0.5 ** (5 / 30) + 1.0)
    assert resilience_index(series_for(pushups)) == pytest.approx(expected)


def test_undefined_without_comebacks(make_task):
    assert resilience_index(series_for(make_task())) is None
    assert resilience_index(series_for(make_task({3: 5, 2: 5, 1: 5}))) is None


def test_single_comeback_scores_its_severity(make_task):
    task = make_task({2: 5, 1: 0, 0: 5})
    assert resilience_index(series_for(task)) == pytest.approx(1.0)


def test_recent_quick_comeback_outweighs_old_one(make_task):
    # Both tasks come back twice: once after 1 missed day, once after 3.
    # Task A's quick comeback is today, task B's was 68 days ago.
    task_a = make_task(
        {70: 5, **{d: 5 for d in range(66, 1, -1)}, 0: 5},
        created_days_ago=100,
    )
    task_b = make_task(
        {70: 5, **{d: 5 for d in range(68, 3, -1)}, 0: 5},
        created_days_ago=100,
    )
    events_a = comeback_events(series_for(task_a))
    events_b = comeback_events(series_for(task_b))
    assert sorted(e.missed_days for e in events_a) == [1, 3]
    assert sorted(e.missed_days for e in events_b) == [1, 3]

    assert resilience_index(series_for(task_a)) > resilience_index(series_for(task_b))


def test_result_in_unit_interval(make_task):
    task = make_task({20: 5, 12: 5, 11: 5, 3: 5, 0: 5}, created_days_ago=30)
    value = resilience_index(series_for(task))
    assert 0 < value <= 1


def test_unlogged_days_before_first_entry_are_not_a_missed_run(make_task):
    task = make_task({5: 10}, created_days_ago=20)
    engine = TaskStreakEngine(task, TODAY)

    assert resilience_index(engine.series()) is None
    # Walking from the creation day would see 15 missed days before day 5
    assert resilience_index(engine.lifetime_series()) == pytest.approx(1 / (1 + 14 * 0.5))
