"""
Paging session
==============

`PageSession` drives the interactive page view of a record list:

1) Show the header and the next 25 rows
2) Read one command: Enter = next page, S = sort, R = reverse, Q = back
3) Repeat until the rows run out or the user quits

The session keeps a reference to the canonical list it was opened on and a
private working copy. Sorting always starts again from a fresh copy of the
canonical list (copy-on-sort), so the order shown never compounds earlier
sorts and the canonical list itself is never reordered.

Sort direction is an explicit `SortState` value: the last column sorted by
and whether it is currently reversed.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence
import logging
from .models import ColumnKey, Header, Lang, Record
from .sorting import InvalidColumn, cascade_sort, reverse_current, split_keys
from .render import BANNER, format_header, format_record

logger = logging.getLogger(__name__)

PAGE_SIZE = 25

PAGE_PROMPT = "\n[Press ENTER to read more, S to sort output by column, R to reverse output (asc-desc), or Q to go back]"
SORT_PROMPT = "\nChoose one or more columns (1-9, separated by commas) to sort for, in order of priority: "


@dataclass
class SortState:
    """Last column sorted by (None = never sorted) and its direction."""
    last_key: Optional[ColumnKey] = None
    reversed: bool = False

class SessionState(Enum):
    PAGING = "paging"
    AWAITING_SORT_INPUT = "awaiting_sort_input"
    TERMINATED = "terminated"


class PageSession:
    def __init__(self, records: Sequence[Record], language: Lang, page_size: int = PAGE_SIZE) -> None:
        self.canonical = records
        self.working: List[Record] = list(records)
        self.language = language
        self.page_size = page_size
        self.cursor = 0
        self.sort_state = SortState()
        self.state = SessionState.PAGING

    @property
    def total(self) -> int:
        return len(self.working)

    @property
    def page_number(self) -> int:
        """1-based number of the page last returned by `next_page`."""
        return self.cursor

    def has_next(self) -> bool:
        return self.state is not SessionState.TERMINATED and self.page_size * self.cursor < self.total

    def next_page(self) -> List[Record]:
        """Return the rows of the current page and advance the cursor."""
        start = self.page_size * self.cursor
        end = min(start + self.page_size, self.total)
        self.cursor += 1
        return self.working[start:end]

    # ---------------- Commands ----------------
    def handle_command(self, text: str) -> SessionState:
        cmd = text.strip().lower()
        if cmd == "q":
            self.state = SessionState.TERMINATED
        elif cmd == "s":
            self.state = SessionState.AWAITING_SORT_INPUT
        elif cmd == "r":
            self.reverse()
        return self.state

    def submit_sort(self, text: str) -> List[InvalidColumn]:
        """Apply a comma-separated column list and go back to paging.

        Returns the column errors (already logged) for the caller to report.
        """
        result = cascade_sort(self.canonical, split_keys(text), self.language)
        self.working = result.records
        if result.applied:
            self.sort_state = SortState(last_key=result.last_key, reversed=False)
            self.cursor = 0
        else:
            # working copy is back in canonical order; show the same page again
            self.sort_state = SortState()
            self.cursor = max(self.cursor - 1, 0)
        self.state = SessionState.PAGING
        return result.errors

    def reverse(self) -> None:
        self.working, self.sort_state.reversed = reverse_current(
            self.working, self.sort_state.last_key, self.language, self.sort_state.reversed)
        self.cursor = 0

    # ---------------- Interactive loop ----------------
    def run(self, header: Header, read: Callable[[str], str], write: Callable[[str], None]) -> None:
        """Blocking page loop. `read(prompt)` returns one line of input."""
        if self.total == 0:
            write("No records to display.")
            return
        while self.has_next():
            write(BANNER)
            write(format_header(header, self.language))
            for r in self.next_page():
                write(format_record(r, self.language))
            write(f"\nPage: {self.page_number}\n")
            state = self.handle_command(read(PAGE_PROMPT + "\n"))
            if state is SessionState.AWAITING_SORT_INPUT:
                for err in self.submit_sort(read(SORT_PROMPT)):
                    write(str(err))
        self.state = SessionState.TERMINATED
