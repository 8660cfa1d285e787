# tests/test_theme.py

from __future__ import annotations

import pytest

import theme
from models import Priority


@pytest.mark.parametrize(
    "difficulty, band",
    [(1, "easy"), (2, "easy"), (3, "medium"), (4, "hard"), (5, "hard")],
)
def test_difficulty_band_boundaries(difficulty: int, band: str) -> None:
    assert theme.difficulty_band(difficulty) == band


def test_difficulty_color_follows_band() -> None:
    assert theme.difficulty_color(2) == theme.DIFFICULTY_COLOR["easy"]
    assert theme.difficulty_color(3) == theme.DIFFICULTY_COLOR["medium"]
    assert theme.difficulty_color(4) == theme.DIFFICULTY_COLOR["hard"]


def test_status_colors_cover_exactly_the_three_statuses() -> None:
    assert set(theme.STATUS_COLOR) == set(Priority)
    assert len(theme.STATUS_COLOR) == 3
    for status in Priority:
        assert theme.status_color(status) == theme.STATUS_COLOR[status]
    # plain strings from the wire resolve to the same entries
    assert theme.status_color("Ongoing") == theme.STATUS_COLOR[Priority.ONGOING]


def test_status_color_has_no_fallback() -> None:
    with pytest.raises(ValueError):
        theme.status_color("Blocked")


def test_color_is_identity_when_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(theme, "_ENABLE", False)
    assert theme.color("text", theme.BOLD) == "text"
