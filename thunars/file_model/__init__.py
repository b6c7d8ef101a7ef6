"""Domain model for directory listings.

This package contains non-UI primitives:
- the immutable ``Entry`` snapshot and its ``EntryKind``
- the one-level directory scanner with the browser's collation rule
"""

from __future__ import annotations

from .types import Entry, EntryKind
from .fs import entry_sort_key, list_directory

__all__ = [
    "Entry",
    "EntryKind",
    "entry_sort_key",
    "list_directory",
]
