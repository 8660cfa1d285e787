"""Study plan tab.

The plan is the only source of truth here: day buckets, the unscheduled
section and the fallback week are all recomputed from it on every render
and never stored.

Bucket key for a session: date of start_time, else date of timedue, else
the unscheduled section. Days are listed in ascending order; sessions keep
the backend's order inside a day.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Tuple

import click

from api_client import ApiClient, ApiError
from calendar_grid import CalendarGrid, Column
from models import StudyPlan, StudyPlanSession
from notify import Notifier
from theme import color, difficulty_color, status_color, BOLD, DIM, EMPTY_COLOR, NOTE_COLOR, PRIMARY
from timefmt import clock, day_label, day_of, hours, parse_iso

logger = logging.getLogger(__name__)

FALLBACK_DAYS = 5
DEFAULT_HOURS_PER_DAY = 4.0
DEFAULT_SESSION_HOURS = 1.0
HOURS_RANGE = click.FloatRange(0.5, 24)
SESSION_RANGE = click.FloatRange(0.25, 8)
VIEW_MODES = ('list', 'grid')
EMPTY_PLAN_TEXT = 'No tasks to schedule. Create some tasks first!'


@dataclass
class DayBucket:
    day: date
    sessions: List[StudyPlanSession] = field(default_factory=list)


@dataclass
class PlanBuckets:
    days: List[DayBucket]
    unscheduled: List[StudyPlanSession]
    fallback: bool = False


# -------------------- derived state --------------------
def session_day(session: StudyPlanSession) -> Optional[date]:
    return day_of(session.start_time) or day_of(session.due)


def bucket_sessions(plan: StudyPlan, today: Optional[date] = None) -> PlanBuckets:
    by_day = {}
    unscheduled: List[StudyPlanSession] = []
    for session in plan.schedule:
        day = session_day(session)
        if day is None:
            unscheduled.append(session)
        else:
            by_day.setdefault(day, []).append(session)
    if not by_day:
        start = today or date.today()
        days = [DayBucket(start + timedelta(days=i)) for i in range(FALLBACK_DAYS)]
        return PlanBuckets(days, unscheduled, fallback=True)
    days = [DayBucket(d, by_day[d]) for d in sorted(by_day)]
    return PlanBuckets(days, unscheduled)


def format_time_range(session: StudyPlanSession) -> str:
    start = parse_iso(session.start_time)
    end = parse_iso(session.end_time)
    if start and end:
        return f'{clock(start)} - {clock(end)}'
    if start:
        return f'{clock(start)} • {hours(session.duration)}'
    return f'{hours(session.duration)} block'


def summary_line(plan: StudyPlan) -> str:
    text = f'{plan.total_tasks} tasks • {plan.total_study_hours:.1f} total hours'
    if plan.adjustment_reason:
        text += f' • {plan.adjustment_reason}'
    return text


class StudyPlanView:
    def __init__(self, api: ApiClient, notifier: Notifier):
        self.api = api
        self.notifier = notifier
        self.available_hours: float = DEFAULT_HOURS_PER_DAY
        self.session_duration: float = DEFAULT_SESSION_HOURS
        self.plan: Optional[StudyPlan] = None
        self.mode: str = 'list'

    # -------------------- input --------------------
    def prompt(self) -> None:
        self.available_hours = click.prompt('Available hours per day', default=self.available_hours,
                                            type=HOURS_RANGE)
        self.session_duration = click.prompt('Session duration (hours)', default=self.session_duration,
                                             type=SESSION_RANGE)

    def set_inputs(self, available_hours: str, session_duration: Optional[str] = None) -> bool:
        """Apply inline values through the same ranges the prompts use."""
        try:
            hours_value = HOURS_RANGE.convert(available_hours, None, None)
            duration_value = (SESSION_RANGE.convert(session_duration, None, None)
                              if session_duration is not None else self.session_duration)
        except click.BadParameter as exc:
            self.notifier.error(exc.format_message())
            return False
        self.available_hours = hours_value
        self.session_duration = duration_value
        return True

    # -------------------- actions --------------------
    def generate(self) -> bool:
        try:
            plan = self.api.generate_study_plan(self.available_hours, self.session_duration)
        except ApiError as exc:
            self.notifier.error(exc.message or 'Failed to generate plan')
            return False
        self.plan = plan
        logger.info("plan generated: %d sessions", len(plan.schedule))
        self.notifier.success('Study plan generated',
                              f'Created a plan with {len(plan.schedule)} study sessions')
        return True

    def mark_missed(self, task_name: str) -> bool:
        try:
            result = self.api.mark_task_missed(task_name)
        except ApiError as exc:
            self.notifier.error(exc.message or 'Failed to mark task as missed')
            return False
        self.plan = result['updated_plan']
        self.notifier.success('Plan updated', f'"{task_name}" marked as missed; plan rescheduled')
        return True

    def session_at(self, number: int) -> Optional[StudyPlanSession]:
        if self.plan is None:
            return None
        idx = number - 1
        if idx < 0 or idx >= len(self.plan.schedule):
            return None
        return self.plan.schedule[idx]

    # -------------------- display --------------------
    def render(self, today: Optional[date] = None, term_width: int = 0) -> List[str]:
        lines = [
            color('Generate Study Plan', BOLD),
            f'  Available hours per day : {self.available_hours:g}',
            f'  Session duration        : {self.session_duration:g}h',
        ]
        if self.plan is None:
            return lines
        lines += ['', color('Your Study Schedule', BOLD), color(summary_line(self.plan), DIM)]
        if not self.plan.schedule:
            lines.append(color(EMPTY_PLAN_TEXT, EMPTY_COLOR))
            if self.mode == 'grid':
                lines += [''] + self._render_grid(today, term_width)
            return lines
        if self.mode == 'grid':
            return lines + [''] + self._render_grid(today, term_width)
        return lines + [''] + self._render_list()

    def _render_list(self) -> List[str]:
        # Numbers follow the backend order so `missed <n>` stays stable across sections.
        numbered = list(enumerate(self.plan.schedule, start=1))
        out: List[str] = []
        for number, s in numbered:
            day = session_day(s)
            if day is not None:
                out += self._list_block(number, s, f'{day_label(day)}, ')
        unscheduled = [(n, s) for n, s in numbered if session_day(s) is None]
        if unscheduled:
            if out:
                out.append('')
            out.append(color('Unscheduled', NOTE_COLOR, BOLD))
            for number, s in unscheduled:
                out += self._list_block(number, s, '')
        return out

    @staticmethod
    def _list_block(number: int, s: StudyPlanSession, when: str) -> List[str]:
        badges = ('   ' + color(f'Difficulty: {s.difficulty}/5', difficulty_color(s.difficulty))
                  + '  ' + color(str(s.status), status_color(s.status)))
        if s.note:
            badges += '  ' + color(s.note, NOTE_COLOR)
        return [
            color(f'{number}.', PRIMARY, BOLD) + ' ' + color(s.task_name, BOLD)
            + '  ' + color(f'Priority: {s.priority_score:.2f}', PRIMARY),
            '   ' + when + format_time_range(s),
            badges,
        ]

    def _render_grid(self, today: Optional[date], term_width: int) -> List[str]:
        buckets = bucket_sessions(self.plan, today)
        columns = [Column(day_label(b.day), [self._entry(s) for s in b.sessions]) for b in buckets.days]
        out = CalendarGrid(columns).render(term_width)
        if buckets.unscheduled:
            out += ['', color('Unscheduled', NOTE_COLOR, BOLD)]
            for s in buckets.unscheduled:
                out.append(f'  - {s.task_name} ({format_time_range(s)})'
                           + (f' [{s.note}]' if s.note else ''))
        return out

    @staticmethod
    def _entry(session: StudyPlanSession) -> Tuple[List[str], str]:
        lines = [session.task_name, format_time_range(session)]
        if session.note:
            lines.append(f'({session.note})')
        return lines, status_color(session.status)
