"""Provider driven by an arbitrary user-configured command.

Each argument may contain ``{query}``; an argument that is exactly
``{query}`` expands to one argument per whitespace-separated term. Output
lines are paths, relative ones resolved against ``cwd``.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from threading import Event

from .base import home_relative, stream_command_lines


class CommandProvider:
    def __init__(
        self,
        name: str,
        argv_template: Sequence[str],
        cwd: Path | None = None,
        ok_returncodes: tuple[int, ...] = (0, 1),
    ) -> None:
        self.name = name
        self.argv_template = tuple(argv_template)
        self.cwd = cwd
        self.ok_returncodes = ok_returncodes

    def command(self, text: str) -> list[str]:
        argv: list[str] = []
        for part in self.argv_template:
            if part == "{query}":
                argv.extend(text.split())
            else:
                argv.append(part.replace("{query}", text))
        return argv

    def query(self, text: str, cancelled: Event | None = None) -> Iterator[Path]:
        lines = stream_command_lines(
            self.command(text), cwd=self.cwd, ok_returncodes=self.ok_returncodes, cancelled=cancelled
        )
        for line in lines:
            path = Path(line).expanduser()
            if not path.is_absolute() and self.cwd is not None:
                path = self.cwd / path
            yield path

    def describe(self, candidate: Path) -> str:
        if self.cwd is not None:
            try:
                return candidate.relative_to(self.cwd).as_posix()
            except ValueError:
                pass
        return home_relative(candidate)


__all__ = ["CommandProvider"]
