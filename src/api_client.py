"""HTTP client for the study backend.

One method per endpoint. Every call is a fresh round-trip: no retries, no
caching and no client-side timeout (the transport default applies). Any
failure crosses this boundary as ApiError.
"""
from __future__ import annotations
import json
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib import error, request
from urllib.parse import quote, urlencode

from models import Priority, Stats, StudyPlan, Task, TaskScore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiError(Exception):
    """A failed backend call; message is safe to show to the user verbatim."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


def _error_message(exc: error.HTTPError) -> str:
    fallback = f"HTTP error, status {exc.code}"
    try:
        raw = exc.read().decode('utf-8')
        data = json.loads(raw) if raw else None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return fallback
    if isinstance(data, dict) and data.get('message'):
        return str(data['message'])
    return fallback


class ApiClient:
    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')

    # -------------------- transport --------------------
    def _request(self, endpoint: str, method: str = 'GET', body: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        data = json.dumps(body).encode('utf-8') if body is not None else None
        req = request.Request(
            url,
            data=data,
            headers={"Content-Type": "application/json"},
            method=method,
        )
        logger.debug("%s %s", method, url)
        try:
            with request.urlopen(req) as resp:
                raw = resp.read().decode('utf-8')
        except error.HTTPError as exc:
            message = _error_message(exc)
            logger.warning("%s %s failed (%s): %s", method, url, exc.code, message)
            raise ApiError(message, exc.code) from exc
        except (error.URLError, OSError) as exc:
            reason = getattr(exc, 'reason', exc)
            logger.warning("%s %s unreachable: %s", method, url, reason)
            raise ApiError(f"Cannot reach {self.base_url}: {reason}") from exc
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ApiError(f"Invalid JSON from {endpoint}") from exc

    @staticmethod
    def _parsed(endpoint: str, build: Callable[[], T]) -> T:
        """Run a typed conversion; malformed payloads surface as ApiError."""
        try:
            return build()
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("unexpected payload from %s: %s", endpoint, exc)
            raise ApiError(f"Unexpected response from {endpoint}") from exc

    @staticmethod
    def _records(endpoint: str, items: Any, build: Callable[[Any], T]) -> List[T]:
        """Convert a list of records; a malformed record is logged and dropped."""
        out: List[T] = []
        for raw in items or []:
            try:
                out.append(build(raw))
            except (ValueError, TypeError, AttributeError) as exc:
                logger.warning("skipping malformed record from %s: %s (%r)", endpoint, exc, raw)
        return out

    def _task_listing(self, endpoint: str) -> Dict[str, Any]:
        data = self._request(endpoint) or {}
        data['tasks'] = self._parsed(endpoint, lambda: self._records(endpoint, data.get('tasks'), Task.from_dict))
        return data

    # -------------------- health --------------------
    def health_check(self) -> Dict[str, Any]:
        return self._request('/health')

    # -------------------- task management --------------------
    def get_tasks(self) -> List[Task]:
        data = self._request('/get_tasks') or []
        return self._parsed('/get_tasks', lambda: self._records('/get_tasks', data, Task.from_dict))

    def create_task(self, task: Task) -> Dict[str, Any]:
        return self._request('/post_task', 'POST', task.to_payload())

    def update_task_status(self, task_name: str, new_status: Priority) -> Dict[str, Any]:
        return self._request('/update_task_status', 'PUT', {
            'task_name': task_name,
            'new_status': str(new_status),
        })

    def delete_task(self, task_name: str) -> Dict[str, Any]:
        return self._request(f"/delete_task/{quote(task_name, safe='')}", 'DELETE')

    def get_tasks_by_status(self, status: Priority) -> Dict[str, Any]:
        return self._task_listing(f"/tasks_by_status/{quote(str(status), safe='')}")

    # -------------------- study planning --------------------
    def get_task_scores(self) -> List[TaskScore]:
        data = self._request('/score_tasks') or {}
        return self._parsed('/score_tasks',
                            lambda: self._records('/score_tasks', data.get('scores'), TaskScore.from_dict))

    def generate_study_plan(self, available_hours_per_day: float = 4.0,
                            study_session_duration: float = 1.0) -> StudyPlan:
        data = self._request('/generate_plan', 'POST', {
            'available_hours_per_day': available_hours_per_day,
            'study_session_duration': study_session_duration,
        })
        return self._parsed('/generate_plan', lambda: StudyPlan.from_dict(data or {}))

    def mark_task_missed(self, task_name: str) -> Dict[str, Any]:
        endpoint = f"/mark_missed/{quote(task_name, safe='')}"
        data = self._request(endpoint, 'POST') or {}
        data['updated_plan'] = self._parsed(endpoint, lambda: StudyPlan.from_dict(data.get('updated_plan') or {}))
        return data

    # -------------------- task queries --------------------
    def get_upcoming_tasks(self, days_ahead: int = 7) -> Dict[str, Any]:
        return self._task_listing(f"/upcoming_tasks?{urlencode({'days_ahead': days_ahead})}")

    def get_overdue_tasks(self) -> Dict[str, Any]:
        return self._task_listing('/overdue_tasks')

    def get_stats(self) -> Stats:
        data = self._request('/stats') or {}
        return self._parsed('/stats', lambda: Stats.from_dict(data))
