"""Overlay providers for recursive search and directory jumping.

Both providers satisfy ``CandidateProvider`` so the mode controller treats
them alike; ``QueryScheduler`` runs them off the input thread.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from .base import CandidateProvider, home_relative, stream_command_lines
from .command import CommandProvider
from .jump import ZoxideProvider
from .scheduler import QueryScheduler
from .walker import WalkerProvider


def search_provider_factory(
    command: Sequence[str] | None,
    show_hidden: Callable[[], bool],
) -> Callable[[Path], CandidateProvider]:
    """Return a factory building the search provider rooted at a directory."""

    def build(root: Path) -> CandidateProvider:
        if command:
            return CommandProvider("search", command, cwd=root)
        return WalkerProvider(root, show_hidden=show_hidden())

    return build


def jump_provider(command: Sequence[str] | None) -> CandidateProvider:
    """Return the directory-jump provider, honoring a configured command."""
    if command:
        return CommandProvider("jump", command)
    return ZoxideProvider()


__all__ = [
    "CandidateProvider",
    "CommandProvider",
    "QueryScheduler",
    "WalkerProvider",
    "ZoxideProvider",
    "home_relative",
    "jump_provider",
    "search_provider_factory",
    "stream_command_lines",
]
