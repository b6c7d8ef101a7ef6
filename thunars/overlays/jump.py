"""Directory-jump provider backed by zoxide's frecency database."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from threading import Event

from .base import home_relative, stream_command_lines


class ZoxideProvider:
    """Ranked historical directories matching whitespace-separated terms."""

    name = "jump"

    def __init__(self, executable: str = "zoxide") -> None:
        self.executable = executable

    def command(self, text: str) -> list[str]:
        return [self.executable, "query", "--list", "--", *text.split()]

    def query(self, text: str, cancelled: Event | None = None) -> Iterator[Path]:
        # zoxide exits 1 when nothing matches.
        for line in stream_command_lines(self.command(text), ok_returncodes=(0, 1), cancelled=cancelled):
            yield Path(line)

    def describe(self, candidate: Path) -> str:
        return home_relative(candidate)


__all__ = ["ZoxideProvider"]
