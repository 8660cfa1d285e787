"""Column layout for the calendar-style plan grid.

Each column is one day: a header plus a list of entries, every entry a
short block of text lines with one style. Columns share the terminal width,
entries are word-wrapped into their column and ANSI codes are ignored when
padding.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Tuple
from theme import color, HEADER_COLOR, EMPTY_COLOR, BOLD
import re, shutil

MIN_COL_WIDTH = 18
MAX_COLUMNS = 5
SEP = " | "
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

Entry = Tuple[Sequence[str], str]  # (raw lines, style)


@dataclass
class Column:
    title: str
    entries: List[Entry] = field(default_factory=list)


class CalendarGrid:
    def __init__(self, columns: Sequence[Column], max_columns: int = MAX_COLUMNS):
        self.columns = list(columns)
        self.max_columns = max(1, max_columns)

    def render(self, term_width: int = 0) -> List[str]:
        """Render in bands of at most max_columns days, blank line between bands."""
        if not term_width:
            term_width = shutil.get_terminal_size((120, 30)).columns
        out: List[str] = []
        for start in range(0, len(self.columns), self.max_columns):
            band = self.columns[start:start + self.max_columns]
            if out:
                out.append('')
            widths = self._compute_column_widths(band, term_width)
            wrapped = [self._wrap_column(col, widths[i]) for i, col in enumerate(band)]
            out.extend(self._render_band(band, widths, wrapped))
        return out

    # ---- width calculation ----
    def _compute_column_widths(self, band: Sequence[Column], term_width: int) -> Dict[int, int]:
        sep_total = len(SEP) * (len(band) - 1)
        widths: Dict[int, int] = {}
        for i, col in enumerate(band):
            longest = len(col.title)
            for lines, _ in col.entries:
                for raw in lines:
                    longest = max(longest, len(raw))
            widths[i] = max(MIN_COL_WIDTH, longest)
        total = sum(widths.values()) + sep_total
        if total > term_width:
            target_space = max(term_width - sep_total, len(band) * MIN_COL_WIDTH)
            while sum(widths.values()) > target_space:
                widest = max(widths, key=lambda k: widths[k])
                if widths[widest] <= MIN_COL_WIDTH:
                    break
                widths[widest] -= 1
        return widths

    # ---- wrapping ----
    def _wrap_column(self, col: Column, width: int) -> List[str]:
        if not col.entries:
            return [color('(no sessions)', EMPTY_COLOR)]
        acc: List[str] = []
        for idx, (lines, style) in enumerate(col.entries):
            if idx:
                acc.append('')
            for raw in lines:
                acc.extend(color(part, style) for part in self._wrap_text(raw, width))
        return acc

    @staticmethod
    def _wrap_text(text: str, width: int) -> List[str]:
        words = text.split()
        lines_raw: List[str] = []
        current = ''
        for w in words:
            while len(w) > width:
                if current:
                    lines_raw.append(current)
                    current = ''
                lines_raw.append(w[:width])
                w = w[width:]
            candidate = w if not current else current + ' ' + w
            if len(candidate) <= width:
                current = candidate
            else:
                if current:
                    lines_raw.append(current)
                current = w
        if current:
            lines_raw.append(current)
        return lines_raw or ['']

    # ---- rendering ----
    def _render_band(self, band: Sequence[Column], widths: Mapping[int, int],
                     wrapped: Sequence[List[str]]) -> List[str]:
        rows = max(len(lines) for lines in wrapped)
        header_cells: List[str] = []
        for i, col in enumerate(band):
            header_cells.append(self._pad(color(col.title, HEADER_COLOR, BOLD), widths[i]))
        out = [SEP.join(header_cells),
               SEP.join(color('-' * widths[i], HEADER_COLOR) for i in range(len(band)))]
        for r in range(rows):
            row_cells: List[str] = []
            for i in range(len(band)):
                col_lines = wrapped[i]
                line = col_lines[r] if r < len(col_lines) else ''
                row_cells.append(self._pad(line, widths[i]))
            out.append(SEP.join(row_cells).rstrip())
        return out

    @classmethod
    def _pad(cls, s: str, width: int) -> str:
        pad = width - cls._visible_len(s)
        return s + ' ' * pad if pad > 0 else s

    @staticmethod
    def _visible_len(s: str) -> int:
        return len(ANSI_RE.sub('', s))
