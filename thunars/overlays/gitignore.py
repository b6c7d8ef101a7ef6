"""Gitignore lookup for the in-process walker fallback.

Asks git once per walk for the ignored paths below a root. Outside a
repository, or without git, nothing is treated as ignored.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Snapshot of ignored files and directories under ``root``."""

    root: Path
    ignored_files: frozenset[Path]
    ignored_dirs: frozenset[Path]

    def is_ignored(self, path: Path) -> bool:
        if path in self.ignored_files:
            return True
        current = path
        while True:
            if current in self.ignored_dirs:
                return True
            if current == self.root or current.parent == current:
                return False
            current = current.parent


def _git_output(args: list[str]) -> bytes | None:
    try:
        proc = subprocess.run(
            ["git", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return proc.stdout


def get_gitignore_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Return a matcher for ``root`` or ``None`` when git cannot answer."""
    if shutil.which("git") is None:
        return None
    root = root.resolve()
    top = _git_output(["-C", str(root), "rev-parse", "--show-toplevel"])
    if not top:
        return None
    repo_root = Path(top.decode("utf-8", errors="replace").strip()).resolve()

    listing = _git_output(
        [
            "-C",
            str(repo_root),
            "ls-files",
            "-z",
            "--others",
            "-i",
            "--exclude-standard",
            "--directory",
        ]
    )
    if listing is None:
        return None

    ignored_files: set[Path] = set()
    ignored_dirs: set[Path] = set()
    for raw in listing.split(b"\x00"):
        if not raw:
            continue
        rel = raw.decode("utf-8", errors="replace")
        target = ignored_dirs if rel.endswith("/") else ignored_files
        path = repo_root / rel.rstrip("/")
        if path == root or root in path.parents:
            target.add(path)
    logger.debug("gitignore under %s: %d files, %d dirs", root, len(ignored_files), len(ignored_dirs))
    return GitIgnoreMatcher(
        root=root,
        ignored_files=frozenset(ignored_files),
        ignored_dirs=frozenset(ignored_dirs),
    )


__all__ = ["GitIgnoreMatcher", "get_gitignore_matcher"]
