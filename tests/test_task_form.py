# tests/test_task_form.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import click
import pytest

from api_client import ApiError
from models import Priority
from notify import Notifier
from task_form import TaskForm
from timefmt import parse_iso

from .fakes import FakeApiClient, RefreshCounter


@pytest.fixture()
def form(api: FakeApiClient, notifier: Notifier, refresh: RefreshCounter) -> TaskForm:
    return TaskForm(api, notifier, refresh)


def _sent_task(api: FakeApiClient):
    return [c for c in api.calls if c[0] == "create_task"][0][1][0]


def test_defaults() -> None:
    form = TaskForm(FakeApiClient(), Notifier(), lambda: None)
    assert (form.name, form.difficulty, form.status, form.due) == ("", 3, Priority.PENDING, "")


def test_submit_success_resets_fields_and_refreshes_once(
    form: TaskForm, api: FakeApiClient, notifier: Notifier, refresh: RefreshCounter
) -> None:
    form.name = "Read Chapter 3"
    form.difficulty = 4
    form.status = Priority.PENDING
    form.due = ""
    before = datetime.now(timezone.utc)

    assert form.submit() is True

    sent = _sent_task(api)
    assert sent.name == "Read Chapter 3"
    assert sent.difficulty == 4
    assert sent.status is Priority.PENDING
    due = datetime.fromisoformat(sent.due.replace("Z", "+00:00"))
    after = datetime.now(timezone.utc)
    assert before + timedelta(days=7) - timedelta(milliseconds=1) <= due <= after + timedelta(days=7)

    assert (form.name, form.difficulty, form.status, form.due) == ("", 3, Priority.PENDING, "")
    assert refresh.count == 1
    assert notifier.pending[-1].title == "Task created"
    assert '"Read Chapter 3"' in notifier.pending[-1].description


def test_default_due_is_exactly_one_week_after_submit(form: TaskForm) -> None:
    now = datetime(2026, 10, 19, 8, 30, 15, 250000, tzinfo=timezone.utc)
    assert form.due_timestamp(now) == "2026-10-26T08:30:15.250Z"


def test_typed_due_is_sent_as_utc(form: TaskForm, api: FakeApiClient) -> None:
    form.name = "Essay"
    form.due = "2026-11-02 17:00"
    assert form.submit() is True
    assert parse_iso(_sent_task(api).due) == datetime(2026, 11, 2, 17, 0)


def test_failure_keeps_fields_and_shows_server_message(
    form: TaskForm, api: FakeApiClient, notifier: Notifier, refresh: RefreshCounter
) -> None:
    api.fail["create_task"] = ApiError("Task already exists", 400)
    form.name = "Dup"
    form.difficulty = 5
    form.status = Priority.ONGOING
    form.due = "2026-11-02 17:00"

    assert form.submit() is False

    assert (form.name, form.difficulty, form.status, form.due) == ("Dup", 5, Priority.ONGOING, "2026-11-02 17:00")
    assert refresh.count == 0
    toast = notifier.pending[-1]
    assert toast.destructive and toast.description == "Task already exists"


def test_blank_name_never_reaches_backend(form: TaskForm, api: FakeApiClient, notifier: Notifier) -> None:
    form.name = "   "
    assert form.submit() is False
    assert api.calls == []
    assert notifier.pending[-1].destructive


def test_unparseable_due_is_reported(form: TaskForm, api: FakeApiClient, notifier: Notifier) -> None:
    form.name = "Essay"
    form.due = "someday"
    assert form.submit() is False
    assert api.calls == []
    assert "someday" in notifier.pending[-1].description


def test_prompt_offers_current_values(form: TaskForm, monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter(["Flashcards", 2, "Ongoing", ""])
    seen = []

    def fake_prompt(text, default=None, type=None, **kwargs):
        seen.append((text, default, type))
        return next(answers)

    monkeypatch.setattr(click, "prompt", fake_prompt)
    form.prompt()

    assert (form.name, form.difficulty, form.status, form.due) == ("Flashcards", 2, Priority.ONGOING, "")
    assert seen[1][1] == 3
    assert isinstance(seen[1][2], click.IntRange)
    assert seen[2][1] == "Pending"


def test_render_lists_fields(form: TaskForm) -> None:
    form.name = "Essay"
    text = "\n".join(form.render())
    assert "Essay" in text
    assert "3 - Medium" in text
    assert "Pending" in text
