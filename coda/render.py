"""
Line rendering
==============

Turns headers and records into fixed-width display lines. Each column is
left-justified and closed with a tab, so the page lines up in a terminal.

Two layouts:
- `format_record` / `format_header`: the page view, one name column in the
  active language (9 columns).
- `format_record_all` / `format_header_all`: both name columns (10 columns),
  used by the edit menu so every editable field is visible.
"""

from __future__ import annotations
from typing import List, Sequence
from .models import Header, Lang, Record

BANNER = "Covid Data CLI App"

# column widths for the page view; the full view repeats the name width
_WIDTHS = [8, 30, 15, 10, 10, 10, 10, 10, 10]
_WIDTHS_ALL = [8, 30, 30, 15, 10, 10, 10, 10, 10, 10]


def col_spacing(text: str, width: int) -> str:
    """Pad `text` to `width - 2` characters and end it with a tab."""
    return str(text).ljust(width - 2) + "\t"

def _line(cells: Sequence[str], widths: List[int]) -> str:
    return "".join(col_spacing(c, w) for c, w in zip(cells, widths))

def _display_cells(record: Record, lang: Lang) -> List[str]:
    cells = record.as_fields()
    return [cells[0], record.name(lang)] + cells[3:]

def format_record(record: Record, lang: Lang) -> str:
    return _line(_display_cells(record, lang), _WIDTHS)

def format_header(header: Header, lang: Lang) -> str:
    return _line(header.display_labels(lang), _WIDTHS)

def format_record_all(record: Record) -> str:
    return _line(record.as_fields(), _WIDTHS_ALL)

def format_header_all(header: Header) -> str:
    return _line(header.labels, _WIDTHS_ALL)
