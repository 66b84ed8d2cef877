"""
Workspace (CODA core state)
===========================

The workspace is the single owner of the canonical record list:

1) Open -> load the datastore if it exists, else the raw public download
2) View / search -> hand the list (or a selection of it) to a PageSession
3) Edit / delete -> change the canonical list in place, after validation
4) Save / refresh -> write the list out, or reload from the raw download

Paging sessions only ever sort their own copy, so nothing here changes
order unless the user edits or deletes.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional
import logging
import os
from .models import Header, Record
from .config import Config
from .session import PageSession
from . import editing, loader

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]


@dataclass
class Workspace:
    config: Config
    header: Header
    records: List[Record]

    @classmethod
    def open(cls, config: Config) -> "Workspace":
        if os.path.exists(config.datastore_file):
            config.use_datastore()
        header, records = loader.load(config)
        return cls(config=config, header=header, records=records)

    # ---------------- Viewing ----------------
    def view(self, read: Reader, write: Writer) -> PageSession:
        session = PageSession(self.records, self.config.language)
        session.run(self.header, read, write)
        return session

    def view_selection(self, expression: str, read: Reader, write: Writer) -> PageSession:
        """Page through the rows picked by a selection expression."""
        rows = editing.search(self.records, expression)
        logger.info("Search %r matched %d of %d rows", expression, len(rows), len(self.records))
        session = PageSession(rows, self.config.language)
        session.run(self.header, read, write)
        return session

    # ---------------- Changes ----------------
    def edit(self, expression: str, read: Reader, write: Writer) -> Record:
        return editing.edit_record(self.records, expression, self.header, self.config.language, read, write)

    def delete(self, expression: str, read: Reader, write: Writer) -> Optional[Record]:
        return editing.delete_record(self.records, expression, self.config.language, read, write)

    # ---------------- Persistence ----------------
    def save(self) -> None:
        loader.save(self.header, self.records, self.config.datastore_file)

    def refresh(self) -> None:
        self.header, self.records = loader.refresh(self.config)
