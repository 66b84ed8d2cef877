"""
Search, edit and delete
=======================

These helpers work directly on the canonical record list and use the
selection language (`coda.selection`) to find their targets.

Edits are validated before anything is written. A value that breaks a
column's bounds is rejected and the same column is asked for again, so a
bad value can never reach the list.

Edit menu numbering follows the header (1-10). Positions 2 and 3 are the
English and French name columns, but both write the name of the *active*
language. This mirrors how the menu has always behaved; whether 3 should
write the other language's name is an open question (see DESIGN.md).
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Dict, List, MutableSequence, Optional, Sequence
import logging
import re
from .models import Header, Lang, Record
from .selection import select, select_one
from .render import format_header_all, format_record, format_record_all

logger = logging.getLogger(__name__)

MAX_ID = 999
MAX_NAME_CHARS = 30
MAX_COUNT = 99_999_999
MAX_RATE = 99_999.99

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_RATE_RE = re.compile(r"(?=\.?\d)(\d*)(?:\.(\d*))?")


class ValidationError(ValueError):
    pass


# ---------------- Validators ----------------
def _non_negative_int(text: str) -> int:
    t = text.strip()
    if not t.isdigit() or not t.isascii():
        raise ValidationError(f"Not a valid number: {t!r}, please try again.")
    return int(t)

def validate_identifier(text: str) -> int:
    v = _non_negative_int(text)
    if v > MAX_ID:
        raise ValidationError(f"Invalid number (must be 0-{MAX_ID}), please try again.")
    return v

def validate_name(text: str) -> str:
    v = text.strip()
    if len(v) > MAX_NAME_CHARS:
        raise ValidationError(f"Invalid name (must be at most {MAX_NAME_CHARS} characters long), please try again.")
    return v

def validate_date(text: str) -> str:
    v = text.strip()
    if not _DATE_RE.fullmatch(v):
        raise ValidationError("Invalid date format (must be YYYY-MM-DD), please try again.")
    try:
        datetime.strptime(v, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"Invalid date {v!r}, please try again.") from None
    return v

def validate_count(text: str) -> int:
    v = _non_negative_int(text)
    if v > MAX_COUNT:
        raise ValidationError(f"Invalid number (must be 0-{MAX_COUNT}), please try again.")
    return v

def validate_rate(text: str) -> float:
    t = text.strip()
    m = _RATE_RE.fullmatch(t)
    if not m or not t.isascii():
        raise ValidationError(f"Not a valid number: {t!r}, please try again.")
    if m.group(2) is not None and len(m.group(2)) > 2:
        raise ValidationError("Invalid number (must have no more than two digits after the decimal), please try again.")
    v = float(t)
    if v > MAX_RATE:
        raise ValidationError(f"Invalid number (must be 0.00-{MAX_RATE:.2f}), please try again.")
    return v


# ---------------- Edit menu ----------------
NAME = "name"  # placeholder field: the active-language name

@dataclass(frozen=True)
class EditColumn:
    field: str
    validate: Callable[[str], object]
    prompt: str

_COUNT_PROMPT = "Choose a new value for this line (max 8 digits)"
_NAME_PROMPT = f"Choose a new value for this line (max {MAX_NAME_CHARS} characters)"

EDIT_COLUMNS: Dict[int, EditColumn] = {
    1: EditColumn("pruid", validate_identifier, "Choose a new value for this line (max 3 digits)"),
    2: EditColumn(NAME, validate_name, _NAME_PROMPT),
    3: EditColumn(NAME, validate_name, _NAME_PROMPT),
    4: EditColumn("date", validate_date, "Choose a new value for this line (YYYY-MM-DD)"),
    5: EditColumn("numconf", validate_count, _COUNT_PROMPT),
    6: EditColumn("numprob", validate_count, _COUNT_PROMPT),
    7: EditColumn("numdeaths", validate_count, _COUNT_PROMPT),
    8: EditColumn("numtotal", validate_count, _COUNT_PROMPT),
    9: EditColumn("numtoday", validate_count, _COUNT_PROMPT),
    10: EditColumn("ratetotal", validate_rate,
                   "Choose a new value for this line (max 99999.99, no more than two digits after decimal point)"),
}

def _field_name(column: EditColumn, language: Lang) -> str:
    if column.field == NAME:
        return "prname_fr" if language is Lang.FR else "prname"
    return column.field

def apply_edit(record: Record, position: int, text: str, language: Lang) -> Record:
    """Validate `text` for menu column `position` and return the edited copy."""
    column = EDIT_COLUMNS.get(position)
    if column is None:
        raise ValidationError(f"Please select a valid number (1-{len(EDIT_COLUMNS)})")
    value = column.validate(text)
    return replace(record, **{_field_name(column, language): value})

def _menu_position(choice: str) -> Optional[int]:
    c = choice.strip()
    if c.isdigit() and c.isascii() and int(c) in EDIT_COLUMNS:
        return int(c)
    return None


# ---------------- Operations ----------------
def search(records: Sequence[Record], expression: str) -> List[Record]:
    """Rows picked by a selection expression; out-of-range numbers are dropped."""
    n = len(records)
    return [records[i] for i in select(expression, n) if i < n]

def edit_record(records: MutableSequence[Record], expression: str, header: Header, language: Lang,
                read: Callable[[str], str], write: Callable[[str], None]) -> Record:
    """Interactive editor for one row. Returns the row as left after editing."""
    i = select_one(expression, len(records))
    while True:
        choice = read(f"Choose a column (1-10) to edit from the following (row {i}). Enter Q to quit.\n"
                      f"{format_header_all(header)}\n{format_record_all(records[i])}\n")
        if choice.strip().lower() == "q":
            break
        position = _menu_position(choice)
        if position is None:
            write(f"Please select a valid number (1-{len(EDIT_COLUMNS)})")
            continue
        column = EDIT_COLUMNS[position]
        while True:
            try:
                records[i] = apply_edit(records[i], position, read(column.prompt + "\n"), language)
                break
            except ValidationError as e:
                logger.info("Rejected value for row %d column %d: %s", i, position, e)
                write(str(e))
        logger.info("Row %d column %d updated", i, position)
        again = read("Do you want to keep editing? Enter Q to quit (any key to continue)\n")
        if again.strip().lower() == "q":
            break
    return records[i]

def delete_record(records: MutableSequence[Record], expression: str, language: Lang,
                  read: Callable[[str], str], write: Callable[[str], None]) -> Optional[Record]:
    """Delete one row after a y/Y confirmation. Returns the removed row, if any."""
    i = select_one(expression, len(records))
    answer = read(f"Do you want to delete the following (row {i})? y/N\n{format_record(records[i], language)}\n")
    if answer.strip() not in ("y", "Y"):
        write("Nothing deleted.")
        return None
    removed = records.pop(i)
    logger.info("Deleted row %d (%s, %s)", i, removed.prname, removed.date)
    return removed
