"""Logging configuration.

The REPL owns the terminal while it runs, so console logging is off by
default there; everything goes to the log file instead.
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Union

APP_LOGGERS = ('api_client', 'store', 'shell', 'task_list', 'task_form', 'plan_view', 'insights', 'notify', 'main')


class _ConsoleNoiseFilter(logging.Filter):
    """Let our own modules through; other libraries only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.split('.')[0] in APP_LOGGERS:
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: Union[str, Path] = '.local/study-desk',
    console: bool = False,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """Configure the root logger once, early; returns the log file path."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / 'study-desk.log'

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(console_level)
        ch.setFormatter(fmt)
        ch.addFilter(_ConsoleNoiseFilter())
        root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding='utf-8')
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
