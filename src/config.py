"""Runtime settings for the study desk.

Decisions:
- Resolution order: real environment variable > project .env file > default.
- The .env file is parsed line by line (KEY=VALUE, '#' comments); unknown
  keys are ignored so the same file can carry palette overrides for theme.
- No client-side request timeout is configurable; the transport default applies.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

DEFAULT_API_URL = 'http://localhost:5000'
DEFAULT_LOG_DIR = '.local/study-desk'
ENV_FILE = Path(__file__).resolve().parent.parent / '.env'

KNOWN_KEYS = {
    'STUDY_DESK_API_URL',
    'STUDY_DESK_ALT_SCREEN',
    'STUDY_DESK_LOG_DIR',
    'STUDY_DESK_LOG_LEVEL',
    'STUDY_DESK_PRIMARY',
    'STUDY_DESK_EASY',
    'STUDY_DESK_MEDIUM',
    'STUDY_DESK_HARD',
    'STUDY_DESK_PENDING',
    'STUDY_DESK_ONGOING',
    'STUDY_DESK_COMPLETED',
}


def truthy(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def read_env_file(path: Path = ENV_FILE) -> Dict[str, str]:
    """Return recognised KEY=VALUE pairs from a .env file (missing file -> {})."""
    overrides: Dict[str, str] = {}
    if not path.exists():
        return overrides
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        if k.startswith('export '):
            k = k[len('export '):].strip()
        v = v.strip().strip('"').strip("'")
        if k in KNOWN_KEYS:
            overrides[k] = v
    return overrides


def lookup(key: str, env_file_values: Mapping[str, str], default: Optional[str] = None,
           environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    env = os.environ if environ is None else environ
    value = env.get(key)
    if value:
        return value
    return env_file_values.get(key, default)


@dataclass
class Settings:
    """Resolved settings.

    Fields:
        api_base_url: Backend root, without trailing slash.
        alt_screen: Draw the REPL in the terminal's alternate screen buffer.
        log_dir: Directory receiving study-desk.log.
        log_level: Level name for the file handler.
    """
    api_base_url: str = DEFAULT_API_URL
    alt_screen: bool = True
    log_dir: Path = Path(DEFAULT_LOG_DIR)
    log_level: str = 'DEBUG'

    @property
    def file_log_level(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.DEBUG


def load_settings(environ: Optional[Mapping[str, str]] = None,
                  env_file: Path = ENV_FILE) -> Settings:
    values = read_env_file(env_file)
    api_url = lookup('STUDY_DESK_API_URL', values, DEFAULT_API_URL, environ) or DEFAULT_API_URL
    return Settings(
        api_base_url=api_url.rstrip('/'),
        alt_screen=truthy(lookup('STUDY_DESK_ALT_SCREEN', values, None, environ), True),
        log_dir=Path(lookup('STUDY_DESK_LOG_DIR', values, DEFAULT_LOG_DIR, environ) or DEFAULT_LOG_DIR),
        log_level=lookup('STUDY_DESK_LOG_LEVEL', values, 'DEBUG', environ) or 'DEBUG',
    )
