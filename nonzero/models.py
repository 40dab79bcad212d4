"""
Task and Entry domain model.

A Task owns its entries; an Entry only refers back to its task by id.
Both are frozen so a snapshot handed to the analytics code cannot change
underneath it.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from nonzero.utils.dates import start_of_day
from nonzero.utils.exceptions import DuplicateEntryError, ValidationError
from nonzero.utils.helpers import generate_id


class TaskType(Enum):
    """Kinds of habit a task can track."""
    BOOLEAN = "boolean"
    COUNT = "count"
    TIME = "time"

    @property
    def display_name(self) -> str:
        if self is TaskType.BOOLEAN:
            return "Yes/No"
        elif self is TaskType.COUNT:
            return "Count"
        elif self is TaskType.TIME:
            return "Duration"
        raise ValueError(f"Unhandled task type: {self!r}")


@dataclass(frozen=True)
class Entry:
    """One logged value for one task on one calendar day."""
    task_id: str
    date: date
    value: float
    note: Optional[str] = None
    id: str = field(default_factory=generate_id)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        object.__setattr__(self, 'date', start_of_day(self.date))
        if self.value < 0:
            raise ValidationError(
                "Entry value must not be negative",
                error_code="NEGATIVE_VALUE",
                details={"task_id": self.task_id, "value": self.value}
            )


@dataclass(frozen=True)
class Task:
    """A habit definition together with its entries."""
    name: str
    task_type: TaskType
    minimum_value: float
    goal_value: Optional[float] = None
    unit: Optional[str] = None
    id: str = field(default_factory=generate_id)
    created_at: date = field(default_factory=date.today)
    is_archived: bool = False
    sort_order: int = 0
    entries: Tuple[Entry, ...] = ()
    _by_day: Dict[date, Entry] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.minimum_value < 0:
            raise ValidationError(
                "minimum_value must be >= 0",
                error_code="NEGATIVE_MINIMUM",
                details={"task": self.name, "minimum_value": self.minimum_value}
            )
        object.__setattr__(self, 'task_type', TaskType(self.task_type))
        object.__setattr__(self, 'created_at', start_of_day(self.created_at))
        object.__setattr__(self, 'entries', tuple(self.entries))

        by_day: Dict[date, Entry] = {}
        for entry in self.entries:
            if entry.task_id != self.id:
                raise ValidationError(
                    "Entry belongs to a different task",
                    error_code="FOREIGN_ENTRY",
                    details={"task_id": self.id, "entry_task_id": entry.task_id}
                )
            if entry.date in by_day:
                raise DuplicateEntryError(
                    f"Task '{self.name}' already has an entry on {entry.date.isoformat()}",
                    error_code="DUPLICATE_ENTRY",
                    details={"task_id": self.id, "date": entry.date.isoformat()}
                )
            by_day[entry.date] = entry
        object.__setattr__(self, '_by_day', by_day)

    def meets_minimum(self, value: float) -> bool:
        return value >= self.minimum_value

    def is_non_zero(self, entry: Entry) -> bool:
        return self.meets_minimum(entry.value)

    def entry_for(self, day) -> Optional[Entry]:
        """Entry logged on that calendar day, if any."""
        return self._by_day.get(start_of_day(day))

    def is_completed_on(self, day) -> bool:
        entry = self.entry_for(day)
        return entry is not None and self.is_non_zero(entry)

    def sorted_entries(self) -> List[Entry]:
        return sorted(self.entries, key=lambda e: e.date)

    def non_zero_days(self) -> FrozenSet[date]:
        return frozenset(e.date for e in self.entries if self.is_non_zero(e))

    def total_non_zero_days(self) -> int:
        return len(self.non_zero_days())

    def first_entry_date(self) -> Optional[date]:
        return min(self._by_day) if self._by_day else None

    def last_entry_date(self) -> Optional[date]:
        return max(self._by_day) if self._by_day else None

    def with_entries(self, entries) -> "Task":
        """Copy of this task with a different set of entries."""
        return replace(self, entries=tuple(entries))
