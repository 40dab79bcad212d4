"""
Comeback suggestions.

Short nudges shown next to a task that has not been done today, chosen by
how many days in a row it has been missed.
"""

from typing import Optional

from nonzero.models import Task, TaskType
from nonzero.utils.dates import add_days, start_of_day

MAX_LOOKBACK_DAYS = 30

_DAYS_WORDS = {3: "Three", 4: "Four", 5: "Five"}


def count_consecutive_missed_days(task: Task, ending_on, limit: int = MAX_LOOKBACK_DAYS) -> int:
    """
    Days missed in a row counting backwards from ``ending_on``.

    Stops at the first non-zero day, at the task's creation day or after
    ``limit`` days, whichever comes first.
    """
    count = 0
    day = start_of_day(ending_on)
    for _ in range(limit):
        if day < task.created_at:
            break
        if task.is_completed_on(day):
            break
        count += 1
        day = add_days(day, -1)
    return count


def _generic_message(missed_days: int) -> Optional[str]:
    if missed_days >= 6:
        return "You don't need perfect. Just one non-zero today."
    elif missed_days >= 3:
        return f"{_DAYS_WORDS[missed_days]} days paused. No worries. Just start small."
    elif missed_days == 2:
        return "Two quiet days. Let's move again."
    return None


def get_suggestion(task: Task, today) -> Optional[str]:
    """
    Message for ``task`` as of ``today``, or None when no nudge is needed.

    Nothing is suggested once today is non-zero, when yesterday was
    non-zero, or for a task with no missed days yet.
    """
    today = start_of_day(today)
    if task.is_completed_on(today):
        return None

    yesterday = add_days(today, -1)
    if task.is_completed_on(yesterday):
        return None

    missed = count_consecutive_missed_days(task, yesterday)
    if missed == 0:
        return None

    message = _generic_message(missed)
    if message is not None:
        return message

    # Exactly one missed day
    yesterday_entry = task.entry_for(yesterday)
    logged_something = yesterday_entry is not None and yesterday_entry.value > 0
    suggested = int(task.minimum_value)

    if task.task_type is TaskType.BOOLEAN:
        return "Yesterday was zero. Today doesn't have to be."
    elif task.task_type is TaskType.COUNT:
        if logged_something:
            return f"Almost there yesterday! Try {suggested} today?"
        return "Yesterday was zero. Today doesn't have to be."
    elif task.task_type is TaskType.TIME:
        if logged_something:
            return f"Almost there! Try {suggested}m today?"
        return "Yesterday was zero. Today doesn't have to be."
    raise ValueError(f"Unhandled task type: {task.task_type!r}")
