"""
CODA Command Line Interface (CLI)
=================================

This file provides the interactive terminal program you run like:

    python -m coda.cli en

It demonstrates:
- Argument parsing (argparse, see `coda.config`)
- A menu loop for commands
- Mapping menu choices to workspace methods (view, save, search, edit,
  delete, refresh)

Bad selections and bad edit values are reported and the menu goes on.
Failing to read or write a data file ends the program with status 1.
"""

from __future__ import annotations
from typing import Callable, List, Optional
import logging
import sys
from .config import parse_args
from .engine import Workspace
from .loader import LoaderError
from .render import BANNER
from .selection import SelectionError, USAGE_EXAMPLE, select, select_one

logger = logging.getLogger(__name__)

MENU = """
Input a key to select an option (Q to exit)
1) View all the current data
2) Save current data to file
3) View specific records
4) Edit a record
5) Delete a record
6) Clear and refresh all records"""

_LOG_LEVELS = {0: logging.ERROR, 1: logging.WARNING, 2: logging.INFO, 3: logging.DEBUG}


class AppError(RuntimeError):
    """A data file could not be read or written."""


def _setup_logging(verbose: int) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(verbose, logging.DEBUG),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def _read_selection(prompt: str, check: Callable[[str], object],
                    read: Callable[[str], str], write: Callable[[str], None]) -> Optional[str]:
    """Ask for a row selection until `check` accepts it. Q goes back to the menu."""
    while True:
        expr = read(prompt)
        if expr.strip().lower() == "q":
            return None
        try:
            check(expr)
        except SelectionError as e:
            logger.info("Rejected row selection %r: %s", expr, e)
            write(f"Error: {e}")
            continue
        return expr

def handle(ws: Workspace, choice: str, read: Callable[[str], str], write: Callable[[str], None]) -> bool:
    """Handle one menu choice. Returns False when the user quits."""
    if choice in ("q", "Q"):
        return False
    if choice == "1":
        ws.view(read, write)
    elif choice == "2":
        try:
            ws.save()
        except OSError as e:
            raise AppError(str(e)) from e
        write(f"Saved {len(ws.records)} records to {ws.config.datastore_file}")
    elif choice == "3":
        expr = _read_selection(f"Rows to view (example: {USAGE_EXAMPLE}, Q to go back): ", select, read, write)
        if expr is not None:
            ws.view_selection(expr, read, write)
    elif choice == "4":
        expr = _read_selection("Row to edit (Q to go back): ",
                               lambda e: select_one(e, len(ws.records)), read, write)
        if expr is not None:
            ws.edit(expr, read, write)
    elif choice == "5":
        expr = _read_selection("Row to delete (Q to go back): ",
                               lambda e: select_one(e, len(ws.records)), read, write)
        if expr is not None:
            ws.delete(expr, read, write)
    elif choice == "6":
        try:
            ws.refresh()
        except (OSError, LoaderError) as e:
            raise AppError(str(e)) from e
        write(f"Reloaded {len(ws.records)} records from {ws.config.source_file}")
    else:
        write("Please enter a valid selection (1-6, Q)")
    return True

def run_menu(ws: Workspace, read: Callable[[str], str], write: Callable[[str], None]) -> None:
    """Menu loop. Selection and validation errors are reported, not fatal."""
    while True:
        write(BANNER)
        try:
            choice = read(MENU + "\n").strip()
        except EOFError:
            break
        if len(choice) != 1:
            write("Please enter exactly one key (1-6, Q).")
            continue
        try:
            if not handle(ws, choice, read, write):
                break
        except EOFError:
            break
        except ValueError as e:
            logger.info("Rejected input for choice %s: %s", choice, e)
            write(f"Error: {e}")

def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CODA CLI.

    1) Parse arguments
    2) Load the dataset
    3) Start the menu loop
    """
    config = parse_args(argv)
    _setup_logging(config.verbose)
    try:
        ws = Workspace.open(config)
    except (OSError, LoaderError) as e:
        print(f"Data error: {e}", file=sys.stderr)
        return 1
    print(f"Loaded {len(ws.records)} records from {ws.config.filename}.")
    try:
        run_menu(ws, input, print)
    except AppError as e:
        print(f"Application error: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
