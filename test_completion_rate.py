"""
Test completion rates and windowed averages
"""

import pytest

from conftest import TODAY, days_ago
from nonzero.services.completion_rate import (
    average_value,
    completion_rate,
    completion_rates,
    trailing_window,
    week_data,
)
from nonzero.utils.exceptions import PreconditionError


def test_three_of_seven_days(make_task):
    task = make_task({0: 5, 3: 5, 6: 5})
    assert completion_rate(task, 7, TODAY) == pytest.approx(3 / 7)


def test_window_bounds_are_inclusive(make_task):
    task = make_task({6: 5, 7: 5, 0: 5})
    window = trailing_window(TODAY, 7)
    assert window.start == days_ago(6)
    assert window.end == TODAY
    # Day 7 falls just outside the window
    assert completion_rate(task, 7, TODAY) == pytest.approx(2 / 7)


def test_sub_minimum_days_do_not_count(make_task):
    task = make_task({0: 4, 1: 5}, minimum=5)
    assert completion_rate(task, 7, TODAY) == pytest.approx(1 / 7)


def test_standard_windows(make_task):
    task = make_task({d: 5 for d in range(0, 30)}, created_days_ago=100)
    rates = completion_rates(task, TODAY)
    assert rates['7d'] == pytest.approx(1.0)
    assert rates['30d'] == pytest.approx(1.0)
    assert rates['90d'] == pytest.approx(30 / 90)


def test_average_value_counts_missing_days_as_zero(make_task):
    task = make_task({0: 10, 1: 4, 10: 100})
    assert average_value(task, 7, TODAY) == pytest.approx(2.0)


def test_average_value_without_entries_in_window(make_task):
    assert average_value(make_task({20: 50}), 7, TODAY) == 0.0
    assert average_value(make_task(), 30, TODAY) == 0.0


@pytest.mark.parametrize("days", [0, -7])
def test_non_positive_window_is_a_precondition_violation(make_task, days):
    task = make_task({0: 5})
    with pytest.raises(PreconditionError):
        completion_rate(task, days, TODAY)
    with pytest.raises(ValueError):
        average_value(task, days, TODAY)


def test_week_data(make_task):
    task = make_task({0: 8, 2: 3}, minimum=5)
    rows = week_data(task, TODAY)
    assert [row['date'] for row in rows] == [days_ago(d) for d in range(6, -1, -1)]
    assert rows[-1] == {'date': TODAY, 'value': 8, 'is_non_zero': True}
    assert rows[-3] == {'date': days_ago(2), 'value': 3, 'is_non_zero': False}
    assert rows[0]['value'] == 0.0
