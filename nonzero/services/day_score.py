"""
Day Score Aggregator

A day is a non-zero day for the user as a whole when enough of the active
tasks were non-zero on it. The resulting set of days is fed through the
same streak and resilience functions as a single task.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, FrozenSet, List, Optional

from nonzero.models import Task
from nonzero.services import streak_engine
from nonzero.services.completion_rate import trailing_window
from nonzero.services.resilience import resilience_index
from nonzero.services.streak_engine import DaySeries
from nonzero.utils.dates import start_of_day
from nonzero.utils.exceptions import PreconditionError
from nonzero.utils.logger import get_logger

logger = get_logger("day_score")

DEFAULT_DAY_SCORE_CRITERIA = 10


class DayScoreAggregator:
    """Day Score metrics for one snapshot of tasks and one criteria value."""

    def __init__(self, tasks: List[Task], criteria: int = DEFAULT_DAY_SCORE_CRITERIA, today=None):
        """
        Args:
            tasks: Task snapshot; archived tasks are ignored
            criteria: Percent (0-100) of tasks needed for a non-zero day
            today: Reference day; defaults to the system date
        """
        if not isinstance(criteria, int) or not 0 <= criteria <= 100:
            raise PreconditionError(
                f"day_score_criteria must be an integer between 0 and 100, got {criteria!r}",
                error_code="INVALID_CRITERIA",
                details={"criteria": criteria}
            )
        self.tasks = [task for task in tasks if not task.is_archived]
        self.criteria = criteria
        self.today = start_of_day(today if today is not None else date.today())
        self._non_zero_dates: Optional[FrozenSet[date]] = None

    @property
    def task_count(self) -> int:
        return len(self.tasks)

    def date_completion_counts(self) -> Dict[date, int]:
        """Number of tasks that were non-zero on each day."""
        counts: Dict[date, int] = defaultdict(int)
        for task in self.tasks:
            for entry in task.entries:
                if task.is_non_zero(entry):
                    counts[entry.date] += 1
        return dict(counts)

    def _percentage(self, count: int) -> int:
        if self.task_count == 0:
            return 0
        return count * 100 // self.task_count

    def non_zero_dates(self) -> FrozenSet[date]:
        """Days whose completion percentage reached the criteria."""
        if self._non_zero_dates is None:
            self._non_zero_dates = frozenset(
                day for day, count in self.date_completion_counts().items()
                if self._percentage(count) >= self.criteria
            )
            logger.debug(
                "Day score computed",
                tasks=self.task_count,
                criteria=self.criteria,
                non_zero_days=len(self._non_zero_dates),
            )
        return self._non_zero_dates

    def percentage_for(self, day=None) -> int:
        """Whole-number percent of active tasks that were non-zero on ``day``."""
        day = start_of_day(day if day is not None else self.today)
        count = sum(1 for task in self.tasks if task.is_completed_on(day))
        return self._percentage(count)

    def is_non_zero_day(self, day=None) -> bool:
        """Whether ``day`` is in the non-zero set; a day with no completions never is."""
        return start_of_day(day if day is not None else self.today) in self.non_zero_dates()

    def earliest_task_date(self) -> date:
        if not self.tasks:
            return self.today
        return min(task.created_at for task in self.tasks)

    def series(self) -> DaySeries:
        """Non-zero days from the earliest creation day through today; dates outside are dropped."""
        start = self.earliest_task_date()
        days = frozenset(day for day in self.non_zero_dates() if start <= day <= self.today)
        return DaySeries(non_zero_days=days, start=start, end=self.today)

    def current_streak(self) -> int:
        return streak_engine.current_streak(self.series())

    def longest_streak(self) -> int:
        return streak_engine.longest_streak(self.series())

    def total_non_zero_days(self) -> int:
        return len(self.series().non_zero_days)

    def comeback_count(self) -> int:
        return streak_engine.comeback_count(self.series())

    def days_returned_after_miss(self) -> int:
        # Every calendar day is observed for the aggregate, so this equals
        # the comeback count.
        return self.comeback_count()

    def recovery_ratio(self) -> float:
        return streak_engine.recovery_ratio(self.series())

    def resilience_index(self) -> Optional[float]:
        return resilience_index(self.series())

    def completion_rate(self, days: int) -> float:
        non_zero = self.non_zero_dates()
        window = trailing_window(self.today, days)
        return sum(1 for day in window if day in non_zero) / days

    def summary(self) -> dict:
        return {
            'criteria': self.criteria,
            'task_count': self.task_count,
            'today_percentage': self.percentage_for(),
            'is_non_zero_today': self.is_non_zero_day(),
            'current_streak': self.current_streak(),
            'longest_streak': self.longest_streak(),
            'total_non_zero_days': self.total_non_zero_days(),
            'comeback_count': self.comeback_count(),
            'days_returned_after_miss': self.days_returned_after_miss(),
            'recovery_ratio': round(self.recovery_ratio(), 4),
            'resilience_index': self.resilience_index(),
            'completion_7d': self.completion_rate(7),
            'completion_30d': self.completion_rate(30),
        }


def get_day_score_aggregator(tasks: List[Task], criteria: int = DEFAULT_DAY_SCORE_CRITERIA, today=None) -> DayScoreAggregator:
    """Get day score aggregator instance."""
    return DayScoreAggregator(tasks, criteria, today)
