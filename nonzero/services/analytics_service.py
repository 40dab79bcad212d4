"""
Analytics Service

Entry point for the presentation layer. Pulls a fresh snapshot from the
task provider on every call, reads the Day Score criteria from settings
and "today" from the clock, and returns plain values.
"""

from typing import Dict, List, Optional

from nonzero.models import Task
from nonzero.services.completion_rate import average_value, completion_rates, week_data
from nonzero.services.day_score import DayScoreAggregator
from nonzero.services.resilience import resilience_index
from nonzero.services.streak_engine import TaskStreakEngine
from nonzero.services.suggestions import get_suggestion
from nonzero.store import TaskProvider
from nonzero.utils.dates import SystemClock
from nonzero.utils.exceptions import TaskNotFoundError
from nonzero.utils.logger import get_logger
from nonzero.utils.validators import Settings

logger = get_logger("analytics")


class AnalyticsService:
    """Per-task and Day Score analytics over a task provider."""

    def __init__(self, provider: TaskProvider, settings: Optional[Settings] = None, clock=None):
        """
        Args:
            provider: Source of task snapshots
            settings: Holds ``day_score_criteria``; read on every call
            clock: Object with ``today()``; defaults to the system clock
        """
        self.provider = provider
        self.settings = settings or Settings()
        self.clock = clock or SystemClock()

    def _find_task(self, task_id: str) -> Task:
        for task in self.provider.fetch_tasks(include_archived=True):
            if task.id == task_id:
                return task
        raise TaskNotFoundError(
            f"Task not found: {task_id}",
            error_code="TASK_NOT_FOUND",
            details={"task_id": task_id}
        )

    def task_summary(self, task_id: str) -> Dict:
        """
        All per-task metrics.

        Returns:
            dict with streaks, comeback counts, recovery ratio, resilience
            index (None if never came back), completion rates, 7-day average
            and the current suggestion
        """
        return self._summarize(self._find_task(task_id), self.clock.today())

    def all_task_summaries(self) -> List[Dict]:
        """Summaries of every active task from one snapshot and one reference day."""
        tasks = self.provider.fetch_tasks()
        today = self.clock.today()
        return [self._summarize(task, today) for task in tasks]

    def _summarize(self, task: Task, today) -> Dict:
        engine = TaskStreakEngine(task, today)

        summary = {
            'task_id': task.id,
            'name': task.name,
            'task_type': task.task_type.value,
            **engine.summary(),
            'resilience_index': resilience_index(engine.series()),
            'completion_rates': completion_rates(task, today),
            'average_value_7d': average_value(task, 7, today),
            'week': week_data(task, today),
            'suggestion': get_suggestion(task, today),
        }
        logger.debug("Task summary computed", task_id=task.id, current_streak=summary['current_streak'])
        return summary

    def day_score(self) -> DayScoreAggregator:
        """Aggregator for the current snapshot and criteria."""
        return DayScoreAggregator(
            self.provider.fetch_tasks(include_archived=False),
            criteria=self.settings.day_score_criteria,
            today=self.clock.today(),
        )

    def day_score_summary(self) -> Dict:
        return self.day_score().summary()


def get_analytics_service(provider: TaskProvider, settings: Optional[Settings] = None, clock=None) -> AnalyticsService:
    """Get analytics service instance."""
    return AnalyticsService(provider, settings, clock)
