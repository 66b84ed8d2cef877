"""
Column sorting
==============

The sorter orders a list of records by one of the 9 sortable columns
(see `ColumnKey`). Every sort is stable and returns a new list, so the
caller's list is left untouched when a column token is invalid.

Multi-column sorts are done as a cascade: the user lists columns in order
of priority ("4, 1" = by confirmed cases, then by id) and the sorter
applies them from the last-listed to the first-listed. Because each pass is
stable, the first-listed column ends up dominating.

Reversing is a toggle tied to the last column sorted by: it re-sorts that
column descending, or back to ascending when already reversed. It is not a
plain list reversal.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union
import logging
from .models import ColumnKey, Lang, Record
from .dsa import merge_sort

logger = logging.getLogger(__name__)

DEFAULT_KEY = ColumnKey.DATE


class InvalidColumn(ValueError):
    pass


_FIELD_KEYS: Dict[ColumnKey, Callable[[Record], object]] = {
    ColumnKey.PRUID: lambda r: r.pruid,
    ColumnKey.DATE: lambda r: r.date,
    ColumnKey.NUMCONF: lambda r: r.numconf,
    ColumnKey.NUMPROB: lambda r: r.numprob,
    ColumnKey.NUMDEATHS: lambda r: r.numdeaths,
    ColumnKey.NUMTOTAL: lambda r: r.numtotal,
    ColumnKey.NUMTODAY: lambda r: r.numtoday,
    ColumnKey.RATETOTAL: lambda r: r.ratetotal,
}

def column_key(token: Union[str, ColumnKey]) -> ColumnKey:
    """Turn a user token ("1".."9") into a ColumnKey."""
    if isinstance(token, ColumnKey):
        return token
    t = str(token).strip()
    if t.isdigit() and t.isascii():
        try:
            return ColumnKey(int(t))
        except ValueError:
            pass
    raise InvalidColumn(f"Please select a valid number (1-9), got {t!r}")

def _key_func(key: ColumnKey, language: Lang) -> Callable[[Record], object]:
    if key is ColumnKey.PRNAME:
        return lambda r: r.name(language)
    return _FIELD_KEYS[key]

def sort_by(records: Sequence[Record], key: Union[str, ColumnKey], language: Lang) -> List[Record]:
    """Stable ascending sort by one column."""
    ck = column_key(key)
    return merge_sort(list(records), key=_key_func(ck, language))

def reverse_current(records: Sequence[Record], key: Optional[Union[str, ColumnKey]],
                    language: Lang, currently_reversed: bool) -> Tuple[List[Record], bool]:
    """Toggle the direction of the current column sort.

    Returns the re-sorted list and the new reversed flag. With no column
    sorted yet the date column is used.
    """
    ck = DEFAULT_KEY if key is None else column_key(key)
    reverse = not currently_reversed
    out = merge_sort(list(records), key=_key_func(ck, language), reverse=reverse)
    logger.debug("Re-sorted %d records by column %d (%s)", len(out), ck, "desc" if reverse else "asc")
    return out, reverse

def split_keys(text: str) -> List[str]:
    return [t.strip() for t in text.split(",")]


@dataclass
class CascadeResult:
    records: List[Record]
    last_key: Optional[ColumnKey] = None
    applied: int = 0
    errors: List[InvalidColumn] = field(default_factory=list)

def cascade_sort(records: Sequence[Record], tokens: Sequence[str], language: Lang) -> CascadeResult:
    """Sort by several columns, first-listed column having highest priority.

    An invalid token only skips its own pass; passes already applied stay.
    `last_key` is the column of the last token processed (the first token
    typed, since the list is walked backwards), or None when that token was
    invalid, in which case reversing falls back to the date column.
    """
    result = CascadeResult(records=list(records))
    for token in reversed(tokens):
        try:
            ck = column_key(token)
        except InvalidColumn as e:
            logger.warning("Skipping sort column: %s", e)
            result.errors.append(e)
            result.last_key = None
            continue
        result.records = sort_by(result.records, ck, language)
        result.last_key = ck
        result.applied += 1
    logger.info("Sorted %d records by columns %s", len(result.records), list(tokens))
    return result
