"""Recursive file search backed by ``rg --files``.

``rg`` honors ``.gitignore``/``.ignore`` files and streams paths as it
walks, so candidates appear before the walk finishes. Without ``rg`` an
in-process walk is used, skipping paths git reports as ignored.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator
from pathlib import Path
from threading import Event

from .base import stream_command_lines
from .fuzzy import fuzzy_matches, to_root_relative
from .gitignore import get_gitignore_matcher

logger = logging.getLogger(__name__)


def _walk_files(root: Path, show_hidden: bool, cancelled: Event | None = None) -> Iterator[Path]:
    ignore_matcher = get_gitignore_matcher(root)
    for dirpath, dirnames, filenames in os.walk(root):
        if cancelled is not None and cancelled.is_set():
            return
        base = Path(dirpath)
        if not show_hidden:
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            filenames = [name for name in filenames if not name.startswith(".")]
        dirnames[:] = [name for name in dirnames if name != ".git"]
        if ignore_matcher is not None:
            dirnames[:] = [name for name in dirnames if not ignore_matcher.is_ignored(base / name)]
            filenames = [name for name in filenames if not ignore_matcher.is_ignored(base / name)]
        dirnames.sort(key=str.casefold)
        filenames.sort(key=str.casefold)
        for filename in filenames:
            yield base / filename


class WalkerProvider:
    """Search provider listing files under ``root`` filtered by the query."""

    name = "search"

    def __init__(self, root: Path, show_hidden: bool = False) -> None:
        self.root = root.resolve()
        self.show_hidden = show_hidden

    def _rg_command(self) -> list[str]:
        cmd = ["rg", "--files", "--no-messages"]
        if self.show_hidden:
            cmd.extend(["--hidden", "--glob", "!.git"])
        return cmd

    def _iter_files(self, cancelled: Event | None = None) -> Iterator[Path]:
        if shutil.which("rg") is None:
            logger.info("rg not found, walking %s in-process", self.root)
            yield from _walk_files(self.root, self.show_hidden, cancelled)
            return
        # rg exits 1 when it finds no files at all; that is not a failure.
        for raw in stream_command_lines(
            self._rg_command(), cwd=self.root, ok_returncodes=(0, 1), cancelled=cancelled
        ):
            relative = Path(raw)
            if relative.is_absolute() or ".." in relative.parts:
                continue
            yield self.root / relative

    def query(self, text: str, cancelled: Event | None = None) -> Iterator[Path]:
        """Yield files whose root-relative path fuzzy-matches ``text``.

        ``cancelled`` is checked for every scanned file, matching or not.
        """
        for path in self._iter_files(cancelled):
            if cancelled is not None and cancelled.is_set():
                return
            if fuzzy_matches(text, to_root_relative(path, self.root)):
                yield path

    def describe(self, candidate: Path) -> str:
        return to_root_relative(candidate, self.root)


__all__ = ["WalkerProvider"]
