"""Events funnelled through the runtime's single dispatch point.

Key presses and provider results share one queue so only the input loop
thread ever mutates browser state.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Queue


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class CandidateBatch:
    """Candidates produced by query ``generation`` of provider ``source``.

    ``done`` marks the final batch of a query (possibly with no paths).
    """

    source: str
    generation: int
    paths: tuple[Path, ...]
    done: bool = False


@dataclass(frozen=True)
class ProviderFailed:
    source: str
    generation: int
    message: str


BrowserEvent = KeyPressed | CandidateBatch | ProviderFailed


class EventQueue:
    """Thread-safe inbox drained by the input loop between keystrokes."""

    def __init__(self) -> None:
        self._queue: Queue[BrowserEvent] = Queue()

    def post(self, event: BrowserEvent) -> None:
        self._queue.put(event)

    def drain(self) -> list[BrowserEvent]:
        """Return all queued events in arrival order without blocking."""
        out: list[BrowserEvent] = []
        while True:
            try:
                out.append(self._queue.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "BrowserEvent",
    "CandidateBatch",
    "EventQueue",
    "KeyPressed",
    "ProviderFailed",
]
