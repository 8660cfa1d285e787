# tests/conftest.py

from __future__ import annotations

import pytest

from models import Priority, StudyPlan, StudyPlanSession, Task
from notify import Notifier
from store import TaskStore

from .fakes import FakeApiClient, RefreshCounter


@pytest.fixture()
def tasks() -> list[Task]:
    return [
        Task(name="Read Chapter 1", difficulty=2, status=Priority.PENDING,
             created_at="2026-10-01T10:00:00", due="2026-10-25T18:00:00"),
        Task(name="Lab report", difficulty=4, status=Priority.ONGOING,
             created_at="2026-10-02T10:00:00", due=None),
    ]


@pytest.fixture()
def api(tasks: list[Task]) -> FakeApiClient:
    return FakeApiClient(tasks=tasks)


@pytest.fixture()
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture()
def store(tasks: list[Task]) -> TaskStore:
    s = TaskStore()
    s.tasks_loaded(tasks)
    return s


@pytest.fixture()
def refresh() -> RefreshCounter:
    return RefreshCounter()


def make_session(name: str, start: str | None = None, end: str | None = None,
                 due: str | None = None, duration: float = 1.0, note: str | None = None) -> StudyPlanSession:
    return StudyPlanSession(
        task_name=name,
        priority_score=0.5,
        difficulty=3,
        status=Priority.PENDING,
        due=due,
        start_time=start,
        end_time=end,
        duration=duration,
        note=note,
    )


@pytest.fixture()
def plan() -> StudyPlan:
    return StudyPlan(
        schedule=[
            make_session("Calculus", start="2026-10-20T09:00:00", end="2026-10-20T10:00:00"),
            make_session("Physics", start="2026-10-20T14:30:00", end="2026-10-20T15:30:00"),
            make_session("Essay", due="2026-10-22T23:59:00", duration=1.5, note="truncated"),
            make_session("Reading", duration=1.5, note="overdue"),
        ],
        total_tasks=4,
        total_study_hours=5.0,
        available_hours_per_day=4.0,
        study_session_duration=1.0,
    )
