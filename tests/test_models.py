# tests/test_models.py

from __future__ import annotations

import pytest

from models import Priority, Stats, StudyPlan, Task, parse_status


def test_task_from_wire_dict() -> None:
    task = Task.from_dict({
        "task_name": "Read Chapter 3",
        "scale_difficulty": "4",
        "priority": "Ongoing",
        "createdAt": "2026-10-01T10:00:00",
        "timedue": "",
    })
    assert task.name == "Read Chapter 3"
    assert task.difficulty == 4
    assert task.status is Priority.ONGOING
    assert task.created_at == "2026-10-01T10:00:00"
    assert task.due is None


def test_task_payload_uses_wire_names() -> None:
    task = Task(name="Essay", difficulty=2, status=Priority.COMPLETED, due="2026-10-20T10:00:00.000Z")
    assert task.to_payload() == {
        "task_name": "Essay",
        "scale_difficulty": 2,
        "priority": "Completed",
        "timedue": "2026-10-20T10:00:00.000Z",
    }


def test_unknown_status_is_rejected() -> None:
    with pytest.raises(ValueError):
        Task.from_dict({"task_name": "x", "priority": "Blocked"})


def test_plan_parses_sessions_in_order_and_optional_fields() -> None:
    plan = StudyPlan.from_dict({
        "schedule": [
            {"task_name": "A", "priority_score": 0.9, "difficulty": 5, "priority": "Pending",
             "timedue": "2026-10-21T00:00:00", "start_time": "2026-10-20T09:00:00",
             "end_time": "2026-10-20T10:00:00", "duration": 1},
            {"task_name": "B", "priority_score": 0.2, "difficulty": 1, "priority": "Pending",
             "timedue": None, "start_time": None, "duration": 0.5, "note": "overdue"},
        ],
        "total_tasks": 2,
        "total_study_hours": 1.5,
        "available_hours_per_day": 4,
        "study_session_duration": 1,
        "adjustment_reason": "reduced session count to fit available hours",
    })
    assert [s.task_name for s in plan.schedule] == ["A", "B"]
    assert plan.schedule[0].end_time == "2026-10-20T10:00:00"
    assert plan.schedule[1].end_time is None
    assert plan.schedule[1].note == "overdue"
    assert plan.total_study_hours == 1.5
    assert plan.adjustment_reason.startswith("reduced")


def test_stats_tolerates_missing_fields() -> None:
    stats = Stats.from_dict({"total_tasks": 3, "completion_rate": 33.3})
    assert stats.total_tasks == 3
    assert stats.pending == 0
    assert stats.completion_rate == pytest.approx(33.3)


@pytest.mark.parametrize(
    "raw, expected",
    [("p", Priority.PENDING), ("Ongoing", Priority.ONGOING), (" C ", Priority.COMPLETED), ("x", None)],
)
def test_parse_status_aliases(raw: str, expected) -> None:
    assert parse_status(raw) is expected
