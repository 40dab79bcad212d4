"""
Calendar helpers.

All analytics work on calendar days (``datetime.date``), never on raw
timestamps. Anything that carries a time component is normalized with
``start_of_day`` at the boundary.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Union

DateLike = Union[date, datetime]


def start_of_day(value: DateLike) -> date:
    """
    Normalize a timestamp to its local calendar day.

    Aware datetimes are converted to local time first so that an entry
    logged at 23:30 local time lands on that local day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def days_between(a: DateLike, b: DateLike) -> int:
    """Absolute number of calendar days separating two dates."""
    return abs((start_of_day(b) - start_of_day(a)).days)


def add_days(day: DateLike, n: int) -> date:
    """Step by whole calendar days."""
    return start_of_day(day) + timedelta(days=n)


class DateRange:
    """Inclusive ascending range of calendar days. Can be iterated repeatedly."""

    def __init__(self, start: DateLike, end: DateLike):
        self.start = start_of_day(start)
        self.end = start_of_day(end)

    def __iter__(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        return max((self.end - self.start).days + 1, 0)

    def __contains__(self, item) -> bool:
        if not isinstance(item, date):
            return False
        return self.start <= start_of_day(item) <= self.end

    def __repr__(self) -> str:
        return f"DateRange({self.start.isoformat()}, {self.end.isoformat()})"


def date_range(start: DateLike, end: DateLike) -> DateRange:
    """Inclusive range of days from ``start`` to ``end``; empty if start > end."""
    return DateRange(start, end)


class SystemClock:
    """Reference clock backed by the local system time."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Reference clock pinned to one day."""

    def __init__(self, day: DateLike):
        self.day = start_of_day(day)

    def today(self) -> date:
        return self.day

    def advance(self, days: int = 1) -> None:
        self.day = add_days(self.day, days)
