"""View state: the task collection, connection status and stats card.

The shell owns the single TaskStore instance and is the only writer; views
receive it by reference and only read. Nothing here is patched locally:
every update replaces state with what the backend returned.

Connection status moves checking -> connected or checking -> error once and
stays there until restart.
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import List, Optional

from models import Stats, Task

logger = logging.getLogger(__name__)


class ConnectionStatus(str, Enum):
    CHECKING = "checking"
    CONNECTED = "connected"
    ERROR = "error"


class TaskStore:
    def __init__(self) -> None:
        self.tasks: List[Task] = []
        self.loading: bool = True
        self.connection: ConnectionStatus = ConnectionStatus.CHECKING
        self.stats: Optional[Stats] = None
        self.stats_failed: bool = False

    # -------------------- connection --------------------
    def health_succeeded(self) -> None:
        if self.connection is ConnectionStatus.CHECKING:
            self.connection = ConnectionStatus.CONNECTED

    def health_failed(self, reason: object) -> None:
        logger.error("Backend connection failed: %s", reason)
        if self.connection is ConnectionStatus.CHECKING:
            self.connection = ConnectionStatus.ERROR

    # -------------------- tasks --------------------
    def tasks_loaded(self, tasks: List[Task]) -> None:
        self.tasks = list(tasks)
        self.loading = False

    def tasks_failed(self, reason: object) -> None:
        # previous collection stays; this path is log-only
        logger.error("Failed to load tasks: %s", reason)
        self.loading = False

    # -------------------- stats --------------------
    def stats_loaded(self, stats: Stats) -> None:
        self.stats = stats
        self.stats_failed = False

    def stats_unavailable(self, reason: object) -> None:
        logger.warning("Failed to load stats: %s", reason)
        self.stats = None
        self.stats_failed = True

    # -------------------- queries --------------------
    def find(self, task_name: str) -> Optional[Task]:
        for task in self.tasks:
            if task.name == task_name:
                return task
        return None

    def task_at(self, number: int) -> Optional[Task]:
        """1-based lookup matching the numbers shown in the task list."""
        idx = number - 1
        if idx < 0 or idx >= len(self.tasks):
            return None
        return self.tasks[idx]

    def __str__(self) -> str:
        return f'{len(self.tasks)} tasks, connection {self.connection.value}'
