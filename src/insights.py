"""Read-only panels: the stats card and the query views (scores, upcoming,
overdue, tasks by status). Each panel is fetched fresh when opened.
"""
from __future__ import annotations
import logging
from typing import List, Optional

from api_client import ApiClient, ApiError
from models import Priority, Stats, Task
from notify import Notifier
from theme import color, difficulty_color, status_color, BOLD, DIM, EMPTY_COLOR, PRIMARY
from timefmt import due_text

logger = logging.getLogger(__name__)


def stats_line(stats: Optional[Stats]) -> str:
    if stats is None:
        return color('Stats unavailable', DIM)
    parts = [
        f'Total {stats.total_tasks}',
        color(f'Pending {stats.pending}', status_color(Priority.PENDING)),
        color(f'Ongoing {stats.ongoing}', status_color(Priority.ONGOING)),
        color(f'Completed {stats.completed}', status_color(Priority.COMPLETED)),
        f'Overdue {stats.overdue}',
        f'Completion {stats.completion_rate:.1f}%',
        f'Avg difficulty {stats.average_difficulty:.1f}',
    ]
    return ' • '.join(parts)


def _task_rows(tasks: List[Task]) -> List[str]:
    if not tasks:
        return [color('  (none)', EMPTY_COLOR)]
    return [
        f'  - {t.name}  '
        + color(f'{t.difficulty}/5', difficulty_color(t.difficulty)) + '  '
        + color(str(t.status), status_color(t.status)) + '  '
        + color(due_text(t.due), DIM)
        for t in tasks
    ]


class InsightsPanel:
    """Builds panel text on demand; failures become error toasts and None."""

    def __init__(self, api: ApiClient, notifier: Notifier):
        self.api = api
        self.notifier = notifier

    def scores(self) -> Optional[List[str]]:
        try:
            scores = self.api.get_task_scores()
        except ApiError as exc:
            self.notifier.error(exc.message or 'Failed to load scores')
            return None
        lines = [color('Task Scores', BOLD)]
        if not scores:
            return lines + [color('  (none)', EMPTY_COLOR)]
        for s in scores:
            lines.append(f'  {color(f"{s.score:6.2f}", PRIMARY)}  {s.name}  '
                         + color(str(s.status), status_color(s.status)))
        return lines

    def upcoming(self, days_ahead: int = 7) -> Optional[List[str]]:
        try:
            data = self.api.get_upcoming_tasks(days_ahead)
        except ApiError as exc:
            self.notifier.error(exc.message or 'Failed to load upcoming tasks')
            return None
        days = data.get('days_ahead', days_ahead)
        title = color(f'Upcoming (next {days} days): {data.get("count", len(data["tasks"]))}', BOLD)
        return [title] + _task_rows(data['tasks'])

    def overdue(self) -> Optional[List[str]]:
        try:
            data = self.api.get_overdue_tasks()
        except ApiError as exc:
            self.notifier.error(exc.message or 'Failed to load overdue tasks')
            return None
        return [color(f'Overdue: {data.get("count", len(data["tasks"]))}', BOLD)] + _task_rows(data['tasks'])

    def by_status(self, status: Priority) -> Optional[List[str]]:
        try:
            data = self.api.get_tasks_by_status(status)
        except ApiError as exc:
            self.notifier.error(exc.message or 'Failed to filter tasks')
            return None
        return [color(f'{status}: {data.get("count", len(data["tasks"]))}', BOLD)] + _task_rows(data['tasks'])
