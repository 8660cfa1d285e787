# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

from config import DEFAULT_API_URL, load_settings, read_env_file, truthy


def test_defaults_without_env(tmp_path: Path) -> None:
    settings = load_settings(environ={}, env_file=tmp_path / "missing.env")
    assert settings.api_base_url == DEFAULT_API_URL == "http://localhost:5000"
    assert settings.alt_screen is True
    assert settings.file_log_level == logging.DEBUG


def test_env_file_then_environment(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "STUDY_DESK_API_URL=http://from-file:8000/\n"
        "export STUDY_DESK_ALT_SCREEN=off\n"
        "UNRELATED=1\n",
        encoding="utf-8",
    )
    assert read_env_file(env_file) == {
        "STUDY_DESK_API_URL": "http://from-file:8000/",
        "STUDY_DESK_ALT_SCREEN": "off",
    }
    settings = load_settings(environ={}, env_file=env_file)
    assert settings.api_base_url == "http://from-file:8000"
    assert settings.alt_screen is False

    settings = load_settings(environ={"STUDY_DESK_API_URL": "http://env:9000"}, env_file=env_file)
    assert settings.api_base_url == "http://env:9000"


def test_truthy() -> None:
    assert truthy(None) is True
    assert truthy(None, default=False) is False
    assert truthy("0") is False
    assert truthy("Yes") is True


def test_unknown_log_level_falls_back(tmp_path: Path) -> None:
    settings = load_settings(environ={"STUDY_DESK_LOG_LEVEL": "chatty"}, env_file=tmp_path / "x")
    assert settings.file_log_level == logging.DEBUG
    settings = load_settings(environ={"STUDY_DESK_LOG_LEVEL": "warning"}, env_file=tmp_path / "x")
    assert settings.file_log_level == logging.WARNING
