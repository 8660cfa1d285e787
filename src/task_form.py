"""Create-task tab.

The form keeps its field values between REPL cycles so a failed submit can
simply be retried. A blank due date becomes "one week from now" at submit
time; it is never sent empty.
"""
from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

import click

from api_client import ApiClient, ApiError
from models import Priority, Task
from notify import Notifier
from theme import color, BOLD, DIM
from timefmt import parse_due_input, to_utc_iso

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = 3
DEFAULT_STATUS = Priority.PENDING
DEFAULT_DUE_OFFSET = timedelta(days=7)
DIFFICULTY_LABELS = {1: 'Very Easy', 2: 'Easy', 3: 'Medium', 4: 'Hard', 5: 'Very Hard'}
STATUS_CHOICE = click.Choice([p.value for p in Priority], case_sensitive=False)


class TaskForm:
    def __init__(self, api: ApiClient, notifier: Notifier, on_task_created: Callable[[], None]):
        self.api = api
        self.notifier = notifier
        self.on_task_created = on_task_created
        self.reset()

    def reset(self) -> None:
        self.name: str = ''
        self.difficulty: int = DEFAULT_DIFFICULTY
        self.status: Priority = DEFAULT_STATUS
        self.due: str = ''

    # -------------------- input --------------------
    def prompt(self) -> None:
        """Ask for every field, offering the current values as defaults."""
        self.name = click.prompt('Task name', default=self.name or None, type=str).strip()
        self.difficulty = click.prompt('Difficulty (1-5)', default=self.difficulty,
                                       type=click.IntRange(1, 5))
        raw_status = click.prompt('Status', default=self.status.value, type=STATUS_CHOICE)
        self.status = Priority(raw_status.capitalize())
        self.due = click.prompt('Due (YYYY-MM-DD HH:MM, blank for one week)',
                                default=self.due, show_default=bool(self.due),
                                value_proc=_due_value).strip()

    def due_timestamp(self, now: Optional[datetime] = None) -> str:
        if self.due.strip():
            return to_utc_iso(parse_due_input(self.due))
        now = now or datetime.now().astimezone()
        return to_utc_iso(now + DEFAULT_DUE_OFFSET)

    # -------------------- submit --------------------
    def submit(self, now: Optional[datetime] = None) -> bool:
        name = self.name.strip()
        if not name:
            self.notifier.error('Task name is required')
            return False
        try:
            due = self.due_timestamp(now)
        except ValueError as exc:
            self.notifier.error(str(exc))
            return False
        task = Task(name=name, difficulty=self.difficulty, status=self.status, due=due)
        try:
            self.api.create_task(task)
        except ApiError as exc:
            self.notifier.error(exc.message or 'Failed to create task')
            return False
        logger.info("created task %r due %s", name, due)
        self.notifier.success('Task created', f'"{name}" has been added to your study plan.')
        self.reset()
        self.on_task_created()
        return True

    # -------------------- display --------------------
    def render(self) -> List[str]:
        blank = color('(empty)', DIM)
        return [
            color('Create New Task', BOLD),
            f'  Task Name   : {self.name or blank}',
            f'  Difficulty  : {self.difficulty} - {DIFFICULTY_LABELS[self.difficulty]}',
            f'  Priority    : {self.status}',
            f'  Due Date    : {self.due or color("(one week from submit)", DIM)}',
        ]


def _due_value(raw: str) -> str:
    if raw.strip():
        try:
            parse_due_input(raw)
        except ValueError as exc:
            raise click.BadParameter(str(exc)) from exc
    return raw
