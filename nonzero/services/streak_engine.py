"""
Streak Engine

Streak, comeback and recovery math over a series of non-zero days.

Every metric here works on a ``DaySeries``: the set of calendar days that
counted as non-zero plus the observation window ``start..end``. Inside the
window a day that is not in the set is a miss, whether it was logged below
the minimum or not logged at all. Per-task metrics and the aggregate Day
Score build their series differently and then share these functions.
"""

from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import FrozenSet, Iterable, List, Optional

from nonzero.models import Task
from nonzero.utils.dates import date_range, start_of_day

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class DaySeries:
    """Non-zero days observed between ``start`` and ``end`` (inclusive)."""
    non_zero_days: FrozenSet[date]
    start: date
    end: date

    @classmethod
    def build(cls, days: Iterable, start, end) -> "DaySeries":
        return cls(
            non_zero_days=frozenset(start_of_day(d) for d in days),
            start=start_of_day(start),
            end=start_of_day(end),
        )

    def is_non_zero(self, day: date) -> bool:
        return day in self.non_zero_days

    def in_window(self, day: date) -> bool:
        return self.start <= day <= self.end

    def ending_on(self, end) -> "DaySeries":
        """Same days, window closed at ``end``."""
        return replace(self, end=start_of_day(end))


def current_streak(series: DaySeries) -> int:
    """
    Consecutive non-zero days ending today.

    If today has not been logged as non-zero yet the count starts from
    yesterday, so an unfinished today does not zero out a running streak.
    """
    today = series.end
    day = today if series.is_non_zero(today) else today - ONE_DAY

    streak = 0
    while series.is_non_zero(day):
        streak += 1
        day -= ONE_DAY
    return streak


def longest_streak(series: DaySeries) -> int:
    """Longest run of consecutive non-zero days."""
    days = sorted(series.non_zero_days)
    if not days:
        return 0

    longest = 1
    current = 1
    for previous, day in zip(days, days[1:]):
        if (day - previous).days == 1:
            current += 1
        else:
            current = 1
        longest = max(longest, current)
    return longest


def comeback_days(series: DaySeries) -> List[date]:
    """
    Non-zero days whose previous day was a miss inside the window.

    A non-zero day right at the window start has no observed miss before
    it and is not a comeback.
    """
    comebacks = []
    for day in sorted(series.non_zero_days):
        previous = day - ONE_DAY
        if series.in_window(day) and previous >= series.start and not series.is_non_zero(previous):
            comebacks.append(day)
    return comebacks


def comeback_count(series: DaySeries) -> int:
    return len(comeback_days(series))


def missed_days(series: DaySeries) -> int:
    """Days inside the window that were not non-zero."""
    window = date_range(series.start, series.end)
    hits = sum(1 for day in series.non_zero_days if day in window)
    return len(window) - hits


def recovery_ratio(series: DaySeries) -> float:
    """Comebacks per missed day inside the window; 0.0 without misses."""
    misses = missed_days(series)
    if misses == 0:
        return 0.0
    return comeback_count(series) / misses


class TaskStreakEngine:
    """Streak metrics for a single task as of ``today``."""

    def __init__(self, task: Task, today):
        self.task = task
        self.today = start_of_day(today)
        self._non_zero = task.non_zero_days()

    def _series(self, start: Optional[date]) -> DaySeries:
        if start is None:
            start = self.today
        return DaySeries(non_zero_days=self._non_zero, start=start, end=self.today)

    def series(self) -> DaySeries:
        """Window opening at the first logged entry."""
        return self._series(self.task.first_entry_date())

    def lifetime_series(self) -> DaySeries:
        """Window opening at the creation day, or earlier if entries were backfilled."""
        first = self.task.first_entry_date()
        start = self.task.created_at if first is None else min(first, self.task.created_at)
        return self._series(start)

    def current_streak(self) -> int:
        return current_streak(self.series())

    def longest_streak(self) -> int:
        return longest_streak(self.series())

    def comeback_count(self) -> int:
        return comeback_count(self.series())

    def recovery_ratio(self) -> float:
        last = self.task.last_entry_date()
        if last is None:
            return 0.0
        return recovery_ratio(self.series().ending_on(last))

    def days_returned_after_miss(self) -> int:
        """Like ``comeback_count`` but also counts returning after an unlogged start."""
        return comeback_count(self.lifetime_series())

    def total_non_zero_days(self) -> int:
        return len(self._non_zero)

    def summary(self) -> dict:
        return {
            'current_streak': self.current_streak(),
            'longest_streak': self.longest_streak(),
            'comeback_count': self.comeback_count(),
            'recovery_ratio': round(self.recovery_ratio(), 4),
            'days_returned_after_miss': self.days_returned_after_miss(),
            'total_non_zero_days': self.total_non_zero_days(),
        }


def get_streak_engine(task: Task, today) -> TaskStreakEngine:
    """Get streak engine instance."""
    return TaskStreakEngine(task, today)
