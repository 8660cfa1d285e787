"""Task list tab: rendering plus the status-change and delete actions.

Both actions go straight to the backend and, on success, hand control back
to the shell through on_task_updated, which re-fetches the whole list.
Nothing is changed locally ahead of the server's answer.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Callable, List, Optional

import click

from api_client import ApiClient, ApiError
from models import Priority, Task
from notify import Notifier
from store import TaskStore
from theme import color, difficulty_color, status_color, BOLD, DIM, EMPTY_COLOR, ID_COLOR
from timefmt import due_text

logger = logging.getLogger(__name__)

EMPTY_TEXT = 'No tasks yet. Create one to get started!'
LOADING_TEXT = 'Loading tasks...'


def difficulty_badge(difficulty: int) -> str:
    return color(f'Difficulty: {difficulty}/5', difficulty_color(difficulty))


def status_badge(status: Priority) -> str:
    return color(str(status), status_color(status))


def render_task(number: int, task: Task, now: Optional[datetime] = None) -> List[str]:
    head = color(f'{number}.', ID_COLOR) + ' ' + color(task.name or '<untitled>', BOLD)
    meta = '   ' + color(due_text(task.due, now), DIM)
    badges = '   ' + difficulty_badge(task.difficulty) + '  ' + status_badge(task.status)
    return [head, meta, badges]


class TaskListView:
    def __init__(self, store: TaskStore, api: ApiClient, notifier: Notifier,
                 on_task_updated: Callable[[], None],
                 confirm: Callable[[str], bool] = click.confirm):
        self.store = store
        self.api = api
        self.notifier = notifier
        self.on_task_updated = on_task_updated
        self.confirm = confirm

    # -------------------- display --------------------
    def render(self, now: Optional[datetime] = None) -> List[str]:
        if self.store.loading:
            return [color(LOADING_TEXT, EMPTY_COLOR)]
        if not self.store.tasks:
            return [color(EMPTY_TEXT, EMPTY_COLOR)]
        lines: List[str] = []
        for number, task in enumerate(self.store.tasks, start=1):
            lines.extend(render_task(number, task, now))
            lines.append('')
        return lines[:-1]

    # -------------------- actions --------------------
    def change_status(self, task_name: str, new_status: Priority) -> bool:
        try:
            self.api.update_task_status(task_name, new_status)
        except ApiError as exc:
            self.notifier.error(exc.message or 'Failed to update task')
            return False
        logger.info("status of %r set to %s", task_name, new_status)
        self.notifier.success('Task updated', f'Task status changed to {new_status}')
        self.on_task_updated()
        return True

    def delete(self, task_name: str) -> bool:
        if not self.confirm(f'Are you sure you want to delete "{task_name}"?'):
            return False
        try:
            self.api.delete_task(task_name)
        except ApiError as exc:
            self.notifier.error(exc.message or 'Failed to delete task')
            return False
        logger.info("deleted %r", task_name)
        self.notifier.success('Task deleted', f'"{task_name}" has been removed')
        self.on_task_updated()
        return True
