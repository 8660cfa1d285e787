"""Transient notifications ("toasts").

Views push messages here; the shell shows everything pending on the next
redraw and then drops it.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List

from theme import color, BOLD, ERROR_COLOR, SUCCESS_COLOR

logger = logging.getLogger(__name__)


@dataclass
class Toast:
    title: str
    description: str
    destructive: bool = False

    def render(self) -> str:
        tint = ERROR_COLOR if self.destructive else SUCCESS_COLOR
        return color(self.title, tint, BOLD) + ': ' + self.description


class Notifier:
    def __init__(self) -> None:
        self.pending: List[Toast] = []

    def success(self, title: str, description: str) -> None:
        self.pending.append(Toast(title, description))

    def error(self, description: str, title: str = 'Error') -> None:
        logger.info("error toast: %s", description)
        self.pending.append(Toast(title, description, destructive=True))

    def drain(self) -> List[Toast]:
        toasts, self.pending = self.pending, []
        return toasts
