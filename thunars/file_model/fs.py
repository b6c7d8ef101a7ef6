"""Filesystem listing for the entry-list model.

Scans one directory level, classifies children, and applies the fixed
collation: directories first, then case-folded name with the raw name as
tie-breaker.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import AccessError
from .types import Entry, EntryKind

logger = logging.getLogger(__name__)


def entry_sort_key(entry: Entry) -> tuple[bool, str, str]:
    """Sort key placing directories first, then case-insensitive names."""
    return (not entry.is_dir, entry.name.casefold(), entry.name)


def _classify(child: os.DirEntry) -> EntryKind:
    try:
        if child.is_dir(follow_symlinks=True):
            return EntryKind.DIRECTORY
    except OSError:
        pass
    return EntryKind.FILE


def list_directory(directory: Path, show_hidden: bool = False) -> list[Entry]:
    """Return sorted entries of ``directory``.

    Raises ``AccessError`` when the directory cannot be scanned; a partial
    listing is never returned.
    """
    try:
        resolved = directory.resolve()
    except (OSError, RuntimeError) as exc:
        raise AccessError(f"Cannot resolve {directory}: {exc}") from exc

    entries: list[Entry] = []
    try:
        with os.scandir(resolved) as children:
            for child in children:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                entries.append(
                    Entry(
                        name=name,
                        kind=_classify(child),
                        path=resolved / name,
                    )
                )
    except OSError as exc:
        logger.info("listing %s failed: %s", resolved, exc)
        reason = exc.strerror or exc.__class__.__name__
        raise AccessError(f"Cannot read {resolved}: {reason}") from exc

    entries.sort(key=entry_sort_key)
    return entries


__all__ = ["entry_sort_key", "list_directory"]
