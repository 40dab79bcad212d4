"""Shared fixtures for the NonZero tests."""

from datetime import date, timedelta

import pytest

from nonzero.models import Entry, Task, TaskType
from nonzero.store import InMemoryTaskStore
from nonzero.utils.dates import FixedClock
from nonzero.utils.logger import setup_logging

TODAY = date(2024, 3, 15)


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


def build_task(values=None, minimum=5, task_type=TaskType.COUNT, created_days_ago=10,
               goal=None, name="Pushups", archived=False, unit=None) -> Task:
    """
    Task whose entries are given as {days_ago: value}.
    """
    task = Task(
        name=name,
        task_type=task_type,
        minimum_value=minimum,
        goal_value=goal,
        unit=unit,
        created_at=days_ago(created_days_ago),
        is_archived=archived,
    )
    entries = [
        Entry(task_id=task.id, date=days_ago(offset), value=value)
        for offset, value in (values or {}).items()
    ]
    return task.with_entries(entries)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def store(clock):
    return InMemoryTaskStore(clock)


@pytest.fixture
def make_task():
    return build_task


@pytest.fixture
def pushups(make_task):
    """Done 9 days ago, 5 days ago and today; created 10 days ago."""
    return make_task({9: 10, 5: 10, 0: 10})


@pytest.fixture(autouse=True)
def quiet_logging():
    setup_logging(log_level='WARNING')
    yield
    setup_logging(log_level='WARNING')
