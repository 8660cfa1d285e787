"""Root shell: boot, tab navigation and the command loop.

Boot fires the health probe, the task fetch and the stats fetch together on
a small thread pool. Their results are applied to the store only on the REPL
thread (completed futures are drained before each redraw), so either can
finish first and the store never sees concurrent writes.

Every successful mutation calls refresh(), which re-fetches the whole task
collection and the stats card.
"""
from __future__ import annotations
import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, List, Optional, Tuple

import click

from api_client import ApiClient, ApiError
from insights import InsightsPanel, stats_line
from models import parse_status
from notify import Notifier
from plan_view import StudyPlanView, VIEW_MODES
from store import ConnectionStatus, TaskStore
from task_form import TaskForm
from task_list import TaskListView
from theme import color, BOLD, DIM, ERROR_COLOR, HEADER_COLOR, SUCCESS_COLOR

logger = logging.getLogger(__name__)

# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home); 3J first.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


TABS = ('tasks', 'create', 'plan')
TAB_TITLES = {'tasks': 'Tasks', 'create': 'Create Task', 'plan': 'Study Plan'}
TAB_ALIASES = {'1': 'tasks', 'tasks': 'tasks', '2': 'create', 'create': 'create', '3': 'plan', 'plan': 'plan'}
BOOT_WAIT = 2.0  # seconds; later results land on the next redraw

_Job = Tuple[Future, Callable[[Any], None], Callable[[BaseException], None]]


class Shell:
    def __init__(self, api: ApiClient, alt_screen: bool = True,
                 executor: Optional[ThreadPoolExecutor] = None):
        self.api = api
        self.alt_screen = alt_screen
        self.store = TaskStore()
        self.notifier = Notifier()
        self.task_list = TaskListView(self.store, api, self.notifier, self.refresh)
        self.task_form = TaskForm(api, self.notifier, self.refresh)
        self.plan_view = StudyPlanView(api, self.notifier)
        self.insights = InsightsPanel(api, self.notifier)
        self.tab: str = 'tasks'
        self.panel: Optional[List[str]] = None
        self._executor = executor or ThreadPoolExecutor(max_workers=3, thread_name_prefix='study-desk')
        self._pending: List[_Job] = []

    # -------------------- boot / background results --------------------
    def boot(self) -> None:
        self._submit(self.api.health_check,
                     lambda _: self.store.health_succeeded(), self.store.health_failed)
        self._submit(self.api.get_tasks, self.store.tasks_loaded, self.store.tasks_failed)
        self._submit(self.api.get_stats, self.store.stats_loaded, self.store.stats_unavailable)

    def _submit(self, fn: Callable[[], Any], on_ok: Callable[[Any], None],
                on_fail: Callable[[BaseException], None]) -> None:
        self._pending.append((self._executor.submit(fn), on_ok, on_fail))

    def drain(self) -> None:
        """Apply finished background results, in whatever order they finished."""
        still: List[_Job] = []
        for fut, on_ok, on_fail in self._pending:
            if not fut.done():
                still.append((fut, on_ok, on_fail))
                continue
            exc = fut.exception()
            if exc is None:
                on_ok(fut.result())
            else:
                on_fail(exc)
        self._pending = still

    def settle(self, timeout: Optional[float] = None) -> None:
        if self._pending:
            wait([p[0] for p in self._pending], timeout=timeout)
        self.drain()

    def close(self) -> None:
        self._executor.shutdown(wait=False)

    # -------------------- refresh contract --------------------
    def refresh(self) -> None:
        try:
            self.store.tasks_loaded(self.api.get_tasks())
        except ApiError as exc:  # log-only path, see store.tasks_failed
            self.store.tasks_failed(exc)
        try:
            self.store.stats_loaded(self.api.get_stats())
        except ApiError as exc:
            self.store.stats_unavailable(exc)

    # -------------------- display --------------------
    def render(self) -> List[str]:
        self.drain()
        lines = [color('Study Desk', HEADER_COLOR, BOLD) + '  ' + self._connection_pill()]
        if self.store.connection is ConnectionStatus.ERROR:
            lines.append(color(
                f'Cannot connect to backend. Make sure the API server is running at {self.api.base_url}.',
                ERROR_COLOR))
        lines.append(stats_line(self.store.stats) if self.store.stats is not None or self.store.stats_failed
                     else color('Loading stats...', DIM))
        lines.append('')
        lines.append(self._tab_bar())
        lines.append('')
        toasts = self.notifier.drain()
        if toasts:
            lines.extend(t.render() for t in toasts)
            lines.append('')
        if self.panel:
            lines.extend(self.panel)
            lines.append('')
            self.panel = None
        if self.tab == 'tasks':
            lines.extend(self.task_list.render())
        elif self.tab == 'create':
            lines.extend(self.task_form.render())
        else:
            lines.extend(self.plan_view.render())
        return lines

    def _connection_pill(self) -> str:
        if self.store.connection is ConnectionStatus.CONNECTED:
            return color('[Connected to API]', SUCCESS_COLOR)
        if self.store.connection is ConnectionStatus.ERROR:
            return color('[Disconnected]', ERROR_COLOR)
        return color('[Checking connection]', DIM)

    def _tab_bar(self) -> str:
        cells = []
        for i, tab in enumerate(TABS, start=1):
            label = f'{i} {TAB_TITLES[tab]}'
            cells.append(color(f'[{label}]', HEADER_COLOR, BOLD) if tab == self.tab else color(f' {label} ', DIM))
        return '  '.join(cells)

    def display(self) -> None:
        print('\n'.join(self.render()))

    # -------------------- loop --------------------
    def run(self) -> None:
        """Main REPL loop; the screen is cleared and redrawn every cycle."""
        exit_message: Optional[str] = None
        self.boot()
        self.settle(timeout=BOOT_WAIT)
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self.display()
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return...")
                    continue
                if lower == 'exit':
                    exit_message = "Goodbye."
                    break
                self.handle(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            self.close()
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    # -------------------- command dispatch --------------------
    def handle(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        try:
            self._dispatch(tokens)
        except click.Abort:
            # Ctrl-C or EOF inside a prompt cancels that command only.
            logger.info("command cancelled: %s", tokens[0])
            self.notifier.error("Cancelled.", title='Hint')

    def _dispatch(self, tokens: List[str]) -> None:
        cmd = tokens[0].lower()
        if cmd in TAB_ALIASES and len(tokens) == 1:
            self.tab = TAB_ALIASES[cmd]
        elif cmd == 'refresh':
            self.refresh()
        elif cmd == 'stats':
            self._cmd_stats()
        elif cmd == 'scores':
            self.panel = self.insights.scores()
        elif cmd == 'upcoming':
            self._cmd_upcoming(tokens)
        elif cmd == 'overdue':
            self.panel = self.insights.overdue()
        elif cmd == 'filter':
            self._cmd_filter(tokens)
        elif self.tab == 'tasks' and cmd == 'st':
            self._cmd_st(tokens)
        elif self.tab == 'tasks' and cmd == 'rm':
            self._cmd_rm(tokens)
        elif self.tab == 'create' and cmd in ('new', 'add', 'submit', 'clear'):
            self._cmd_form(cmd, tokens)
        elif self.tab == 'plan' and cmd in ('gen', 'missed', 'view'):
            self._cmd_plan(cmd, tokens)
        else:
            self.notifier.error("Unknown command. Type 'help' for instructions.", title='Hint')

    # ---- individual command helpers ----
    def _cmd_stats(self) -> None:
        try:
            self.store.stats_loaded(self.api.get_stats())
        except ApiError as exc:
            self.store.stats_unavailable(exc)
            self.notifier.error('Failed to load stats')

    def _cmd_upcoming(self, tokens: List[str]) -> None:
        if len(tokens) > 2 or (len(tokens) == 2 and not tokens[1].isdigit()):
            self.notifier.error("Usage: upcoming [days]", title='Hint')
            return
        days = int(tokens[1]) if len(tokens) == 2 else 7
        self.panel = self.insights.upcoming(days)

    def _cmd_filter(self, tokens: List[str]) -> None:
        status = parse_status(tokens[1]) if len(tokens) == 2 else None
        if status is None:
            self.notifier.error("Usage: filter <status>; statuses: p/o/c", title='Hint')
            return
        self.panel = self.insights.by_status(status)

    def _task_name(self, raw: str) -> Optional[str]:
        raw = raw.rstrip('.')
        task = self.store.task_at(int(raw)) if raw.isdigit() else None
        if task is None:
            self.notifier.error(f'No task #{raw}.', title='Hint')
            return None
        return task.name

    def _cmd_st(self, tokens: List[str]) -> None:
        if len(tokens) != 3:
            self.notifier.error("Usage: st <n> <status>; statuses: p/o/c", title='Hint')
            return
        new_status = parse_status(tokens[2])
        if new_status is None:
            self.notifier.error("Invalid status.", title='Hint')
            return
        name = self._task_name(tokens[1])
        if name is not None:
            self.task_list.change_status(name, new_status)

    def _cmd_rm(self, tokens: List[str]) -> None:
        if len(tokens) != 2:
            self.notifier.error("Usage: rm <n>", title='Hint')
            return
        name = self._task_name(tokens[1])
        if name is not None:
            self.task_list.delete(name)

    def _cmd_form(self, cmd: str, tokens: List[str]) -> None:
        if cmd == 'new':
            self.task_form.prompt()
            self.task_form.submit()
        elif cmd == 'add':
            name = ' '.join(tokens[1:]).strip()
            if not name:
                self.notifier.error("Usage: add <task name...>", title='Hint')
                return
            self.task_form.name = name
            self.task_form.submit()
        elif cmd == 'submit':
            self.task_form.submit()
        else:
            self.task_form.reset()

    def _cmd_plan(self, cmd: str, tokens: List[str]) -> None:
        if cmd == 'gen':
            if len(tokens) > 3:
                self.notifier.error("Usage: gen [hours] [duration]", title='Hint')
                return
            if len(tokens) == 1:
                self.plan_view.prompt()
            elif not self.plan_view.set_inputs(*tokens[1:]):
                return
            self.plan_view.generate()
        elif cmd == 'missed':
            session = self.plan_view.session_at(int(tokens[1])) if len(tokens) == 2 and tokens[1].isdigit() else None
            if session is None:
                self.notifier.error("Usage: missed <n> (session number from the list view)", title='Hint')
                return
            self.plan_view.mark_missed(session.task_name)
        else:
            if len(tokens) != 2 or tokens[1].lower() not in VIEW_MODES:
                self.notifier.error("Usage: view list|grid", title='Hint')
                return
            self.plan_view.mode = tokens[1].lower()

    # -------------------- help --------------------
    def _help(self) -> None:
        print("Tabs:")
        print("  1 | tasks           Task list")
        print("  2 | create          Create a task")
        print("  3 | plan            Study plan")
        print("Anywhere:")
        print("  refresh             Reload tasks and stats")
        print("  stats               Reload the stats card")
        print("  scores              Show computed task scores")
        print("  upcoming [days]     Tasks due in the next N days (default 7)")
        print("  overdue             Tasks past their due date")
        print("  filter <status>     Tasks with a status; aliases: p (Pending), o (Ongoing), c (Completed)")
        print("Tasks tab:")
        print("  st <n> <status>     Change the status of task n")
        print("  rm <n>              Delete task n (asks for confirmation)")
        print("Create tab:")
        print("  new                 Fill in every field, then submit")
        print("  add <name...>       Submit with this name and the other current fields")
        print("  submit              Retry with the current fields")
        print("  clear               Reset the form")
        print("Plan tab:")
        print("  gen [hours] [dur]   Generate a plan (prompts when no values are given)")
        print("  missed <n>          Mark session n's task as missed and reschedule")
        print("  view list|grid      Switch between the list and the calendar grid")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Exit")
