"""
Index selection language
========================

Search, edit and delete address rows by position. The user types a short
selection expression, for example:

- 4            -> [4]
- 4, 7, 9-14   -> [4, 7, 9, 10, 11, 12, 13]

Grammar:
# expr  := term ("," term)*
# term  := INT | INT "-" INT
# INT   := non-negative decimal integer, surrounding spaces allowed

A range `a-b` is half-open: it covers a, a+1, ..., b-1 and never b, so
`2-2` selects nothing. Order and duplicates are kept as typed.
"""

from __future__ import annotations
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

USAGE_EXAMPLE = '"4, 7, 9-14"'


class SelectionError(ValueError):
    pass

class ParseError(SelectionError):
    pass

class MalformedTerm(ParseError):
    pass

class InvalidInteger(ParseError):
    pass

class IndexOutOfRange(SelectionError):
    pass


def _to_index(text: str) -> int:
    t = text.strip()
    if not t.isdigit() or not t.isascii():
        raise InvalidInteger(f"Not a valid row number: {t!r}")
    return int(t)

def select(expression: str, upper_bound: Optional[int] = None) -> List[int]:
    """Parse a selection expression into a list of row indices.

    Indices are not checked against `upper_bound`; callers filter against
    the live row count themselves. Any bad term rejects the whole expression.
    """
    out: List[int] = []
    for term in expression.split(","):
        parts = term.split("-")
        if len(parts) == 1:
            out.append(_to_index(parts[0]))
        elif len(parts) == 2:
            first = _to_index(parts[0])
            last = _to_index(parts[1])
            out.extend(range(first, last))
        else:
            raise MalformedTerm(
                f"Selection term {term.strip()!r} is invalid. "
                f"Please refer to the following example for formatting (without quotes): {USAGE_EXAMPLE}"
            )
    logger.debug("Selection %r resolved to %d indices", expression, len(out))
    return out

def select_one(expression: str, upper_bound: int) -> int:
    """Resolve an expression that must name exactly one existing row."""
    indices = select(expression, upper_bound)
    if len(indices) != 1:
        raise ParseError(f"Expected exactly one row number, got {len(indices)}")
    i = indices[0]
    if i >= upper_bound:
        raise IndexOutOfRange(f"No row {i} (there are {upper_bound} rows)")
    return i
