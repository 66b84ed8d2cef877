"""
Configuration
=============

The app is started with a language and, optionally, file names:

    python -m coda.cli en
    python -m coda.cli fr --source covid19-download.csv --datastore datastore.csv -vv

`Config` carries these settings into every call that needs them; nothing
reads them from module globals.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import argparse
from .models import Lang

SOURCE_FILE = "covid19-download.csv"
DATASTORE_FILE = "datastore.csv"


@dataclass
class Config:
    language: Lang
    filename: str = SOURCE_FILE
    source_file: str = SOURCE_FILE
    datastore_file: str = DATASTORE_FILE
    verbose: int = 0

    def use_source(self) -> None:
        self.filename = self.source_file

    def use_datastore(self) -> None:
        self.filename = self.datastore_file

    @property
    def reading_datastore(self) -> bool:
        return self.filename == self.datastore_file


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="coda", description="Covid Data CLI App")
    ap.add_argument("language", help="Presentation language (en/fr)")
    ap.add_argument("--source", default=SOURCE_FILE, help="Raw public download CSV")
    ap.add_argument("--datastore", default=DATASTORE_FILE, help="Working datastore CSV (written by Save)")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-v, -vv, -vvv)")
    return ap

def parse_args(argv: Optional[List[str]] = None) -> Config:
    """Parse command-line arguments into a Config.

    An unknown language is reported through argparse (exit status 2).
    """
    ap = build_parser()
    args = ap.parse_args(argv)
    try:
        language = Lang.parse(args.language)
    except ValueError as e:
        ap.error(str(e))
    return Config(
        language=language,
        filename=args.source,
        source_file=args.source,
        datastore_file=args.datastore,
        verbose=args.verbose,
    )
