"""
Completion rates and windowed averages over the trailing N days.

The window always ends on ``today`` and covers ``days`` calendar days:
``today - (days - 1)`` through ``today``.
"""

from typing import Dict, List

from nonzero.models import Task
from nonzero.utils.dates import DateRange, add_days, date_range, start_of_day
from nonzero.utils.exceptions import PreconditionError

STANDARD_WINDOWS = (7, 30, 90)


def trailing_window(today, days: int) -> DateRange:
    """Inclusive window of ``days`` days ending on ``today``."""
    if not isinstance(days, int) or days <= 0:
        raise PreconditionError(
            f"Window must be a positive number of days, got {days!r}",
            error_code="INVALID_WINDOW",
            details={"days": days}
        )
    end = start_of_day(today)
    return date_range(add_days(end, -(days - 1)), end)


def completion_rate(task: Task, days: int, today) -> float:
    """Fraction of the window's days on which the task was non-zero."""
    window = trailing_window(today, days)
    completed = sum(1 for day in window if task.is_completed_on(day))
    return completed / days


def average_value(task: Task, days: int, today) -> float:
    """Mean logged value per day over the window, unlogged days counting as 0."""
    window = trailing_window(today, days)
    values = [entry.value for entry in task.entries if entry.date in window]
    if not values:
        return 0.0
    return sum(values) / days


def completion_rates(task: Task, today) -> Dict[str, float]:
    """7/30/90-day completion rates keyed like ``'7d'``."""
    return {f"{days}d": completion_rate(task, days, today) for days in STANDARD_WINDOWS}


def week_data(task: Task, today) -> List[Dict]:
    """
    One row per day of the last week, oldest first.

    Returns:
        List of {date, value, is_non_zero}; unlogged days have value 0.0
    """
    rows = []
    for day in trailing_window(today, 7):
        entry = task.entry_for(day)
        rows.append({
            'date': day,
            'value': entry.value if entry else 0.0,
            'is_non_zero': entry is not None and task.is_non_zero(entry),
        })
    return rows
