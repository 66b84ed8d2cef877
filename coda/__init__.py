"""
CODA package
============

This package contains CODA, a small COVID Data App for the terminal.

- The CLI entry point is in `coda/cli.py`.
- Paging, sorting and index selection are in `coda/session.py`,
  `coda/sorting.py` and `coda/selection.py`.
- Dataset loading and saving is in `coda/loader.py`.
"""

__version__ = '0.3.0'
