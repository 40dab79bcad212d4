"""Display formatting for analytics values."""

from typing import Optional

from nonzero.models import TaskType
from nonzero.utils.dates import days_between, start_of_day

NO_VALUE = "—"


def format_time(minutes: int) -> str:
    """90 -> '1h 30m', 45 -> '45m', 120 -> '2h'."""
    if minutes < 60:
        return f"{minutes}m"
    hours, remaining = divmod(minutes, 60)
    if remaining > 0:
        return f"{hours}h {remaining}m"
    return f"{hours}h"


def format_boolean(value: bool) -> str:
    return "Yes" if value else "No"


def format_percentage(value: float) -> str:
    """0.4286 -> '43%'."""
    return f"{value * 100:.0f}%"


def format_resilience(value: Optional[float]) -> str:
    """Resilience index as a percentage; undefined shows as a dash, never 0%."""
    if value is None:
        return NO_VALUE
    return format_percentage(value)


def format_decimal(value: float, places: int = 1) -> str:
    return f"{value:.{places}f}"


def format_streak(days: int) -> str:
    if days == 0:
        return "No streak"
    elif days == 1:
        return "1 day"
    return f"{days} days"


def format_value(value: float, task_type: TaskType, unit: Optional[str] = None) -> str:
    """Render a logged value the way its task type reads."""
    if task_type is TaskType.BOOLEAN:
        return format_boolean(value >= 1.0)
    elif task_type is TaskType.COUNT:
        count = str(int(value))
        if unit:
            return f"{count} {unit.lower()}"
        return count
    elif task_type is TaskType.TIME:
        return format_time(int(value))
    raise ValueError(f"Unhandled task type: {task_type!r}")


def relative_date(day, today) -> str:
    day = start_of_day(day)
    today = start_of_day(today)
    if day == today:
        return "Today"
    days_ago = days_between(day, today)
    if days_ago == 1 and day < today:
        return "Yesterday"
    if day < today and days_ago <= 7:
        return f"{days_ago} days ago"
    return day.strftime('%m/%d/%y')
