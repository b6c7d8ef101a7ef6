"""Mode variants for the browser's modal state machine.

Exactly one variant is active at a time. Each carries only its own payload;
entering a mode builds a fresh payload and leaving it discards it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .file_model import Entry
from .hints import HintAssignment
from .overlays import CandidateProvider


@dataclass
class NormalMode:
    """Entry-list navigation; no payload."""


@dataclass
class FinderMode:
    """Shared payload of the two candidate overlays.

    ``generation`` is the scheduler generation of the latest issued query;
    only batches carrying it are merged into ``candidates``.
    """

    provider: CandidateProvider
    query: str = ""
    candidates: list[Path] = field(default_factory=list)
    selected: int = 0
    generation: int = 0
    loading: bool = False
    error: str = ""

    source = "finder"
    prompt = ">"

    @property
    def selected_candidate(self) -> Path | None:
        if 0 <= self.selected < len(self.candidates):
            return self.candidates[self.selected]
        return None


@dataclass
class SearchMode(FinderMode):
    """Recursive search below ``root`` driven by the walker provider."""

    root: Path | None = None

    source = "search"
    prompt = "/"


@dataclass
class DirJumpMode(FinderMode):
    """Frecency-ranked directory history driven by the jump provider."""

    source = "jump"
    prompt = "z"


@dataclass
class HintMode:
    """Quick-jump labels over the viewport plus the label typed so far."""

    assignment: HintAssignment[Entry]
    buffer: str = ""


Mode = NormalMode | SearchMode | DirJumpMode | HintMode


def mode_name(mode: Mode) -> str:
    """Short upper-case label used by the status row and logs."""
    if isinstance(mode, SearchMode):
        return "SEARCH"
    if isinstance(mode, DirJumpMode):
        return "JUMP"
    if isinstance(mode, HintMode):
        return "HINT"
    return "NORMAL"


__all__ = [
    "DirJumpMode",
    "FinderMode",
    "HintMode",
    "Mode",
    "NormalMode",
    "SearchMode",
    "mode_name",
]
