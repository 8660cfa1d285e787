"""Color & style helpers.

Decisions:
- Difficulty bands: 1-2 easy (green), 3 medium (yellow), 4-5 hard (red).
- Status colors cover exactly Pending, Ongoing and Completed; there is no
  fallback entry, an unknown status is a ValueError from Priority().
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import os, sys
from typing import Dict

from config import lookup, read_env_file
from models import Priority

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _valid_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    """Convert a hex color code to an ANSI escape sequence."""
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
UNDERLINE = _code('4')

PALETTE_DEFAULTS: Dict[str, str] = {
    'STUDY_DESK_PRIMARY': '#476EAE',
    'STUDY_DESK_EASY': '#4CAF50',
    'STUDY_DESK_MEDIUM': '#E6C229',
    'STUDY_DESK_HARD': '#E05252',
    'STUDY_DESK_PENDING': '#9AA0A6',
    'STUDY_DESK_ONGOING': '#4A90D9',
    'STUDY_DESK_COMPLETED': '#A7E399',
}

# priority: real env var > .env override > default
_env_file_values = read_env_file()

def _palette(key: str) -> str:
    value = str(lookup(key, _env_file_values, PALETTE_DEFAULTS[key]))
    return '#' + value.lstrip('#') if _valid_hex(value) else PALETTE_DEFAULTS[key]

PRIMARY = _from_hex(_palette('STUDY_DESK_PRIMARY'))
C_EASY = _from_hex(_palette('STUDY_DESK_EASY'))
C_MEDIUM = _from_hex(_palette('STUDY_DESK_MEDIUM'))
C_HARD = _from_hex(_palette('STUDY_DESK_HARD'))

STATUS_COLOR: Dict[Priority, str] = {
    Priority.PENDING: _from_hex(_palette('STUDY_DESK_PENDING')),
    Priority.ONGOING: _from_hex(_palette('STUDY_DESK_ONGOING')),
    Priority.COMPLETED: _from_hex(_palette('STUDY_DESK_COMPLETED')),
}

DIFFICULTY_COLOR: Dict[str, str] = {
    'easy': C_EASY,
    'medium': C_MEDIUM,
    'hard': C_HARD,
}

HEADER_COLOR = PRIMARY
ID_COLOR = PRIMARY + BOLD
EMPTY_COLOR = DIM + PRIMARY
SUCCESS_COLOR = C_EASY
ERROR_COLOR = C_HARD
NOTE_COLOR = C_MEDIUM

def difficulty_band(difficulty: int) -> str:
    """Band name for a 1..5 difficulty."""
    if difficulty <= 2:
        return 'easy'
    if difficulty == 3:
        return 'medium'
    return 'hard'

def difficulty_color(difficulty: int) -> str:
    return DIFFICULTY_COLOR[difficulty_band(difficulty)]

def status_color(status: Priority) -> str:
    return STATUS_COLOR[Priority(status)]

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','RESET','BOLD','DIM','UNDERLINE','STATUS_COLOR','DIFFICULTY_COLOR','HEADER_COLOR','ID_COLOR',
    'EMPTY_COLOR','SUCCESS_COLOR','ERROR_COLOR','NOTE_COLOR','difficulty_band','difficulty_color',
    'status_color','_ENABLE','_USE_TRUECOLOR','_FORCE'
]
