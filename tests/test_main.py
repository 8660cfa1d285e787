# tests/test_main.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

import main
from logging_setup import setup_logging


def _reset_root_logger() -> None:
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()


class RecordingShell:
    instances: list = []

    def __init__(self, api, alt_screen: bool = True) -> None:
        self.api = api
        self.alt_screen = alt_screen
        self.ran = False
        RecordingShell.instances.append(self)

    def run(self) -> None:
        self.ran = True


@pytest.fixture()
def recording_shell(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    RecordingShell.instances = []
    monkeypatch.setattr(main, "Shell", RecordingShell)
    monkeypatch.setenv("STUDY_DESK_LOG_DIR", str(tmp_path / "logs"))
    yield RecordingShell
    _reset_root_logger()


def test_cli_options_override_settings(recording_shell, tmp_path: Path) -> None:
    result = CliRunner().invoke(main.main, ["--api-url", "http://api.test:8080/", "--no-alt-screen"])
    assert result.exit_code == 0, result.output
    shell = recording_shell.instances[0]
    assert shell.ran
    assert shell.api.base_url == "http://api.test:8080"
    assert shell.alt_screen is False
    assert (tmp_path / "logs" / "study-desk.log").exists()


def test_setup_logging_console_is_optional(tmp_path: Path) -> None:
    try:
        log_file = setup_logging(log_dir=tmp_path, console=False)
        root = logging.getLogger()
        assert log_file == tmp_path / "study-desk.log"
        assert len(root.handlers) == 1
        setup_logging(log_dir=tmp_path, console=True)
        assert len(root.handlers) == 2
    finally:
        _reset_root_logger()
