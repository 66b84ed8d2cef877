"""
Dataset loading and saving (CSV -> Record list)
===============================================

Two files are involved:

- the raw public download (`covid19-download.csv`): many columns, of which
  ten are kept. Only the first 100 data rows are loaded.
- the working datastore (`datastore.csv`): exactly the ten kept columns,
  written by Save and preferred at startup when it exists.

Key ideas:
- Cells are read as text with pandas and converted by `Record.from_fields`
  (blank numbers become 0).
- Saving rewrites the whole datastore file; there is no partial update.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple
import csv
import logging
import pandas as pd
from .models import FIELD_COUNT, Header, Record
from .config import Config

logger = logging.getLogger(__name__)

# raw column positions kept from the public download, in Record field order
RAW_COLUMNS = [0, 1, 2, 3, 5, 6, 7, 8, 13, 15]
SOURCE_ROW_LIMIT = 100


class LoaderError(ValueError):
    pass


def _read_text_csv(path: str) -> pd.DataFrame:
    try:
        return pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=False)
    except pd.errors.EmptyDataError:
        raise LoaderError(f"File contents invalid: {path} must have at least one line of text") from None
    except (UnicodeDecodeError, pd.errors.ParserError) as e:
        raise LoaderError(f"File contents invalid: {path}: {e}") from e

def _to_records(df: pd.DataFrame, path: str) -> List[Record]:
    records: List[Record] = []
    # line 1 is the header
    for line_no, row in enumerate(df.itertuples(index=False, name=None), start=2):
        try:
            records.append(Record.from_fields(list(row)))
        except ValueError as e:
            raise LoaderError(f"{path}, line {line_no}: {e}") from e
    return records

def load_source(path: str) -> Tuple[Header, List[Record]]:
    """Load the raw public download, keeping 10 columns and the first 100 rows."""
    df = _read_text_csv(path)
    if df.shape[1] <= max(RAW_COLUMNS):
        raise LoaderError(
            f"{path} has {df.shape[1]} columns, expected at least {max(RAW_COLUMNS) + 1}")
    df = df.iloc[:, RAW_COLUMNS].head(SOURCE_ROW_LIMIT)
    header = Header(tuple(df.columns))
    records = _to_records(df, path)
    logger.info("Loaded %d records from source %s", len(records), path)
    return header, records

def load_datastore(path: str) -> Tuple[Header, List[Record]]:
    """Load a datastore file written by `save`."""
    df = _read_text_csv(path)
    if df.shape[1] != FIELD_COUNT:
        raise LoaderError(f"{path} has {df.shape[1]} columns, expected {FIELD_COUNT}")
    header = Header(tuple(df.columns))
    records = _to_records(df, path)
    logger.info("Loaded %d records from datastore %s", len(records), path)
    return header, records

def load(config: Config) -> Tuple[Header, List[Record]]:
    """Load whichever file `config.filename` points at."""
    if config.reading_datastore:
        return load_datastore(config.filename)
    return load_source(config.filename)

def save(header: Header, records: Sequence[Record], path: str) -> None:
    """Overwrite `path` with the header line and every record."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(header.labels)
        for r in records:
            w.writerow(r.as_fields())
    logger.info("Saved %d records to %s", len(records), path)

def refresh(config: Config) -> Tuple[Header, List[Record]]:
    """Discard working data and reload from the raw public download."""
    config.use_source()
    return load(config)
