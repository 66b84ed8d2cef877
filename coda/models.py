"""
Data model (Record, Header)
===========================

Each data row of the COVID file is converted into a `Record` object.
Records are immutable (`frozen=True`):
- a paging session can hold a copy of the row list without it changing
  underneath it, and
- edits replace the record at its index instead of modifying it.

Rows have no key of their own. Their position in the list is the address
used by search, edit and delete, so an index only means something for one
particular ordering of the list.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Sequence

FIELD_COUNT = 10


class Lang(Enum):
    """Presentation language. Only the province name column depends on it."""
    EN = "en"
    FR = "fr"

    @classmethod
    def parse(cls, text: str) -> "Lang":
        t = str(text).strip().lower()
        for lang in cls:
            if lang.value == t:
                return lang
        raise ValueError("Must supply a valid language (en/fr)")


class ColumnKey(IntEnum):
    """The 9 sortable columns, numbered as the user types them."""
    PRUID = 1
    PRNAME = 2
    DATE = 3
    NUMCONF = 4
    NUMPROB = 5
    NUMDEATHS = 6
    NUMTOTAL = 7
    NUMTODAY = 8
    RATETOTAL = 9


def _int_cell(x: str) -> int:
    x = x.strip()
    return 0 if x == "" else int(x)

def _float_cell(x: str) -> float:
    x = x.strip()
    return 0.0 if x == "" else float(x)


@dataclass(frozen=True)
class Record:
    """One data row (one province/territory on one date)."""
    pruid: int
    prname: str
    prname_fr: str
    date: str
    numconf: int
    numprob: int
    numdeaths: int
    numtotal: int
    numtoday: int
    ratetotal: float

    @classmethod
    def from_fields(cls, values: Sequence[str]) -> "Record":
        """Build a record from the 10 text cells of one file line.

        Blank numeric cells are read as 0.
        """
        if len(values) != FIELD_COUNT:
            raise ValueError(f"Expected {FIELD_COUNT} fields, got {len(values)}")
        return cls(
            pruid=_int_cell(values[0]),
            prname=str(values[1]),
            prname_fr=str(values[2]),
            date=str(values[3]),
            numconf=_int_cell(values[4]),
            numprob=_int_cell(values[5]),
            numdeaths=_int_cell(values[6]),
            numtotal=_int_cell(values[7]),
            numtoday=_int_cell(values[8]),
            ratetotal=_float_cell(values[9]),
        )

    def name(self, lang: Lang) -> str:
        return self.prname_fr if lang is Lang.FR else self.prname

    def as_fields(self) -> List[str]:
        """Return the 10 cells as text, in file order."""
        return [
            str(self.pruid), self.prname, self.prname_fr, self.date,
            str(self.numconf), str(self.numprob), str(self.numdeaths),
            str(self.numtotal), str(self.numtoday), str(self.ratetotal),
        ]


@dataclass(frozen=True)
class Header:
    """Column labels, paired 1:1 with the Record fields."""
    labels: tuple

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", tuple(str(l).strip() for l in self.labels))
        if len(self.labels) != FIELD_COUNT:
            raise ValueError(f"Header must have {FIELD_COUNT} labels, got {len(self.labels)}")

    def display_labels(self, lang: Lang) -> List[str]:
        """The 9 labels shown on a page (one name column per language)."""
        name = self.labels[2] if lang is Lang.FR else self.labels[1]
        return [self.labels[0], name] + list(self.labels[3:])
