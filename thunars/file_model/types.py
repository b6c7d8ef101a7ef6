"""Domain datatypes for listed filesystem entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Whether an entry can be entered (directory) or opened (file)."""

    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class Entry:
    """Immutable snapshot of one directory child taken at load time."""

    name: str
    kind: EntryKind
    path: Path

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


__all__ = ["Entry", "EntryKind"]
