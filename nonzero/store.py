"""
In-memory task store.

Persistence lives outside this package; the store here keeps tasks and
entries in dictionaries and hands out frozen ``Task`` snapshots. Entries
are kept per task id, so deleting a task drops its entries with it.
"""

from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional, Protocol

from nonzero.models import Entry, Task, TaskType
from nonzero.utils.dates import SystemClock, start_of_day
from nonzero.utils.exceptions import DuplicateEntryError, TaskNotFoundError
from nonzero.utils.logger import get_logger
from nonzero.utils.validators import EntryCreate, TaskCreate, validate_request

logger = get_logger("store")


class TaskProvider(Protocol):
    """Anything that can hand the analytics code a snapshot of tasks."""

    def fetch_tasks(self, include_archived: bool = False) -> List[Task]:
        ...


class InMemoryTaskStore:
    """Dictionary-backed task store implementing ``TaskProvider``."""

    def __init__(self, clock=None):
        """
        Args:
            clock: Object with ``today()``; stamps tasks added without a creation day
        """
        self.clock = clock or SystemClock()
        self._tasks: Dict[str, Task] = {}
        self._entries: Dict[str, Dict[date, Entry]] = {}

    def add_task(self, data: Dict) -> Task:
        """
        Create a task from user-facing data.

        Args:
            data: Dict accepted by ``TaskCreate``

        Returns:
            The new task (without entries)
        """
        request = validate_request(data, TaskCreate)
        created_at = request.created_at if request.created_at is not None else self.clock.today()
        task = Task(
            name=request.name,
            task_type=TaskType(request.task_type),
            minimum_value=request.minimum_value,
            goal_value=request.goal_value,
            unit=request.unit,
            is_archived=request.is_archived,
            sort_order=request.sort_order,
            created_at=start_of_day(created_at),
        )
        self._tasks[task.id] = task
        self._entries[task.id] = {}
        logger.info("Task created", task_id=task.id, name=task.name, task_type=task.task_type.value)
        return task

    def delete_task(self, task_id: str) -> None:
        self._require(task_id)
        del self._tasks[task_id]
        removed = self._entries.pop(task_id, {})
        logger.info("Task deleted", task_id=task_id, entries_removed=len(removed))

    def archive_task(self, task_id: str, archived: bool = True) -> Task:
        task = self._require(task_id)
        updated = replace(task, is_archived=archived)
        self._tasks[task_id] = updated
        return updated

    def log_entry(self, data: Dict) -> Entry:
        """
        Log a value for a task on a day.

        Raises:
            TaskNotFoundError: Unknown task id
            DuplicateEntryError: The task already has an entry that day
        """
        request = validate_request(data, EntryCreate)
        self._require(request.task_id)
        day = start_of_day(request.day)
        entries = self._entries[request.task_id]
        if day in entries:
            raise DuplicateEntryError(
                f"Entry already exists for {day.isoformat()}",
                error_code="DUPLICATE_ENTRY",
                details={"task_id": request.task_id, "date": day.isoformat()}
            )
        entry = Entry(task_id=request.task_id, date=day, value=request.value, note=request.note)
        entries[day] = entry
        logger.debug("Entry logged", task_id=request.task_id, date=day.isoformat(), value=request.value)
        return entry

    def update_entry(self, task_id: str, day, value: float, note: Optional[str] = None) -> Entry:
        """Replace the value (and note) of an existing entry, keeping its id."""
        self._require(task_id)
        day = start_of_day(day)
        existing = self._entries[task_id].get(day)
        if existing is None:
            return self.log_entry({'task_id': task_id, 'day': day, 'value': value, 'note': note})
        validate_request({'task_id': task_id, 'day': day, 'value': value, 'note': note}, EntryCreate)
        entry = Entry(task_id=task_id, date=day, value=value, note=note,
                      id=existing.id, created_at=existing.created_at)
        self._entries[task_id][day] = entry
        return entry

    def delete_entry(self, task_id: str, day) -> None:
        self._require(task_id)
        self._entries[task_id].pop(start_of_day(day), None)

    def get_task(self, task_id: str) -> Task:
        """Snapshot of one task with its entries."""
        return self._snapshot(self._require(task_id))

    def fetch_tasks(self, include_archived: bool = False) -> List[Task]:
        """Snapshots of all tasks ordered by sort order, then creation day."""
        tasks = [
            self._snapshot(task) for task in self._tasks.values()
            if include_archived or not task.is_archived
        ]
        return sorted(tasks, key=lambda t: (t.sort_order, t.created_at))

    def _snapshot(self, task: Task) -> Task:
        return task.with_entries(self._entries[task.id].values())

    def _require(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(
                f"Task not found: {task_id}",
                error_code="TASK_NOT_FOUND",
                details={"task_id": task_id}
            )
        return task
