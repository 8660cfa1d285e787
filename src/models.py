"""Data models mirrored from the study backend's JSON.

All entities are owned by the backend; these are disposable copies parsed
from each response. Wire field names are kept as attribute sources in the
from_dict constructors (task_name, scale_difficulty, timedue, ...).

"priority" on the wire is the workflow status (Pending/Ongoing/Completed),
not urgency. The Python side calls it status where that reads better.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class Priority(str, Enum):
    PENDING = "Pending"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"

    def __str__(self) -> str:
        return self.value


STATUS_ALIASES: Dict[str, Priority] = {
    'p': Priority.PENDING,
    'pending': Priority.PENDING,
    'o': Priority.ONGOING,
    'ongoing': Priority.ONGOING,
    'c': Priority.COMPLETED,
    'completed': Priority.COMPLETED,
}


def parse_status(raw: str) -> Optional[Priority]:
    """Map user input (full name or p/o/c alias, any case) to a Priority."""
    return STATUS_ALIASES.get(raw.strip().lower())


def _opt_str(value: Any) -> Optional[str]:
    if value is None or value == '':
        return None
    return str(value)


def _float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _priority(value: Any) -> Priority:
    """Strict: an unknown status raises ValueError."""
    return Priority(value)


@dataclass
class Task:
    """A unit of study work.

    Fields:
        name: Unique key on the backend (no separate id).
        difficulty: 1..5.
        status: Pending, Ongoing or Completed.
        created_at: ISO timestamp set by the backend.
        due: ISO timestamp or None.
    """
    name: str
    difficulty: int = 3
    status: Priority = Priority.PENDING
    created_at: Optional[str] = None
    due: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        return cls(
            name=str(raw.get('task_name', '')),
            difficulty=_int(raw.get('scale_difficulty'), 3),
            status=_priority(raw.get('priority', Priority.PENDING.value)),
            created_at=_opt_str(raw.get('createdAt')),
            due=_opt_str(raw.get('timedue')),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Body for POST /post_task (createdAt is assigned server-side)."""
        return {
            'task_name': self.name,
            'scale_difficulty': self.difficulty,
            'priority': str(self.status),
            'timedue': self.due,
        }


@dataclass
class TaskScore:
    name: str
    score: float
    difficulty: int
    status: Priority
    due: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "TaskScore":
        return cls(
            name=str(raw.get('task_name', '')),
            score=_float(raw.get('score')),
            difficulty=_int(raw.get('difficulty')),
            status=_priority(raw.get('priority', Priority.PENDING.value)),
            due=_opt_str(raw.get('timedue')),
        )


@dataclass
class StudyPlanSession:
    """One scheduled block inside a generated plan."""
    task_name: str
    priority_score: float
    difficulty: int
    status: Priority
    due: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration: float = 0.0
    note: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "StudyPlanSession":
        return cls(
            task_name=str(raw.get('task_name', '')),
            priority_score=_float(raw.get('priority_score')),
            difficulty=_int(raw.get('difficulty')),
            status=_priority(raw.get('priority', Priority.PENDING.value)),
            due=_opt_str(raw.get('timedue')),
            start_time=_opt_str(raw.get('start_time')),
            end_time=_opt_str(raw.get('end_time')),
            duration=_float(raw.get('duration')),
            note=_opt_str(raw.get('note')),
        )


@dataclass
class StudyPlan:
    schedule: List[StudyPlanSession] = field(default_factory=list)
    total_tasks: int = 0
    total_study_hours: float = 0.0
    available_hours_per_day: float = 0.0
    study_session_duration: float = 0.0
    adjustment_reason: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "StudyPlan":
        return cls(
            schedule=[StudyPlanSession.from_dict(s) for s in raw.get('schedule') or []],
            total_tasks=_int(raw.get('total_tasks')),
            total_study_hours=_float(raw.get('total_study_hours')),
            available_hours_per_day=_float(raw.get('available_hours_per_day')),
            study_session_duration=_float(raw.get('study_session_duration')),
            adjustment_reason=_opt_str(raw.get('adjustment_reason')),
        )


@dataclass
class Stats:
    total_tasks: int = 0
    pending: int = 0
    ongoing: int = 0
    completed: int = 0
    overdue: int = 0
    completion_rate: float = 0.0
    average_difficulty: float = 0.0

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Stats":
        return cls(
            total_tasks=_int(raw.get('total_tasks')),
            pending=_int(raw.get('pending')),
            ongoing=_int(raw.get('ongoing')),
            completed=_int(raw.get('completed')),
            overdue=_int(raw.get('overdue')),
            completion_rate=_float(raw.get('completion_rate')),
            average_difficulty=_float(raw.get('average_difficulty')),
        )
