"""
Heatmap Generator

Calendar heatmap for one task: how strongly each recent day was done,
as data and as a Unicode block grid for terminal output.
"""

from datetime import date
from typing import Dict, List

from nonzero.models import Task, TaskType
from nonzero.services.completion_rate import trailing_window
from nonzero.utils.dates import start_of_day


class HeatmapGenerator:
    """Generates calendar heatmaps for a task."""

    # Unicode block characters for heatmap intensity
    INTENSITY_CHARS = {
        'none': '░░',      # 0
        'low': '▒▒',       # < 0.3
        'medium': '▓▓',    # < 0.7
        'high': '██',      # >= 0.7
    }

    # Intensity for a non-zero day of a task without a goal
    DEFAULT_NON_ZERO_INTENSITY = 0.7

    def __init__(self, task: Task, today=None):
        self.task = task
        self.today = start_of_day(today if today is not None else date.today())

    def intensity(self, day) -> float:
        """
        How fully the task was done on ``day``, 0.0 to 1.0.

        Boolean tasks are all or nothing. Tasks with a goal scale with
        progress toward it; other tasks show a fixed shade once non-zero.
        """
        entry = self.task.entry_for(day)
        if entry is None:
            return 0.0

        is_non_zero = self.task.is_non_zero(entry)
        if self.task.task_type is TaskType.BOOLEAN:
            return 1.0 if is_non_zero else 0.0
        elif self.task.task_type in (TaskType.COUNT, TaskType.TIME):
            goal = self.task.goal_value
            if goal is not None and goal > 0:
                return min(entry.value / goal, 1.0)
            return self.DEFAULT_NON_ZERO_INTENSITY if is_non_zero else 0.0
        raise ValueError(f"Unhandled task type: {self.task.task_type!r}")

    def generate_heatmap_data(self, days: int = 60) -> List[Dict]:
        """
        Per-day heatmap cells for the trailing window, oldest first.

        Returns:
            List of {date, intensity, is_non_zero}
        """
        return [
            {
                'date': day,
                'intensity': self.intensity(day),
                'is_non_zero': self.task.is_completed_on(day),
            }
            for day in trailing_window(self.today, days)
        ]

    def render(self, days: int = 60) -> str:
        """
        Heatmap grid with one row per week (Mon-Sun).

        Returns:
            Formatted heatmap string
        """
        cells = self.generate_heatmap_data(days)
        lines = [f"{self.task.name} ({cells[0]['date'].strftime('%b %d')} - {cells[-1]['date'].strftime('%b %d')})", ""]
        lines.append("      Mo Tu We Th Fr Sa Su")

        # Pad the first week so columns line up with weekdays
        row = ["  "] * cells[0]['date'].weekday()
        week_start = cells[0]['date']
        for cell in cells:
            if cell['date'].weekday() == 0 and row:
                lines.append(self._format_row(week_start, row))
                row = []
                week_start = cell['date']
            row.append(self._get_intensity_char(cell['intensity']))
        if row:
            lines.append(self._format_row(week_start, row))

        lines.append("")
        lines.append("Legend: ░░ None  ▒▒ Low  ▓▓ Med  ██ High")
        return "\n".join(lines)

    def _format_row(self, week_start: date, row: List[str]) -> str:
        return f"{week_start.strftime('%b %d')} " + " ".join(row)

    def _get_intensity_char(self, intensity: float) -> str:
        if intensity == 0:
            return self.INTENSITY_CHARS['none']
        elif intensity < 0.3:
            return self.INTENSITY_CHARS['low']
        elif intensity < 0.7:
            return self.INTENSITY_CHARS['medium']
        return self.INTENSITY_CHARS['high']


def get_heatmap_generator(task: Task, today=None) -> HeatmapGenerator:
    """Get heatmap generator instance."""
    return HeatmapGenerator(task, today)
