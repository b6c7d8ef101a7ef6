"""Provider contract shared by the search and directory-jump overlays.

A provider turns query text into a lazy, restartable iterator of candidate
paths and renders a candidate for display. Subprocess-backed providers
stream stdout line by line and kill the child when the iterator is closed.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Iterator, Sequence
from pathlib import Path
from threading import Event
from typing import Protocol

from ..errors import ProviderError

logger = logging.getLogger(__name__)


class CandidateProvider(Protocol):
    """Uniform overlay contract: ``query`` plus ``describe``.

    ``query`` stops early, without error, once ``cancelled`` is set.
    """

    name: str

    def query(self, text: str, cancelled: Event | None = None) -> Iterator[Path]:
        ...

    def describe(self, candidate: Path) -> str:
        ...


def home_relative(path: Path) -> str:
    """Render ``path`` with the home directory abbreviated to ``~``."""
    try:
        relative = path.relative_to(Path.home())
    except ValueError:
        return str(path)
    text = relative.as_posix()
    return "~" if text == "." else f"~/{text}"


def stream_command_lines(
    argv: Sequence[str],
    cwd: Path | None = None,
    ok_returncodes: tuple[int, ...] = (0,),
    cancelled: Event | None = None,
) -> Iterator[str]:
    """Yield stripped non-empty stdout lines of ``argv`` as they arrive.

    Raises ``ProviderError`` when the executable is missing, cannot start,
    or exits with a code outside ``ok_returncodes``. Closing the iterator
    early, or setting ``cancelled``, kills the child process.
    """
    if not argv:
        raise ProviderError("empty provider command")
    if shutil.which(argv[0]) is None:
        raise ProviderError(f"{argv[0]} is not installed.")

    try:
        proc = subprocess.Popen(
            list(argv),
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise ProviderError(f"failed to run {argv[0]}: {exc}") from exc

    completed = False
    try:
        assert proc.stdout is not None
        for raw in proc.stdout:
            if cancelled is not None and cancelled.is_set():
                break
            line = raw.rstrip("\r\n")
            if line:
                yield line
        else:
            completed = True
    finally:
        if not completed and proc.poll() is None:
            logger.debug("killing %s (query abandoned)", argv[0])
            proc.kill()
        _stdout_unused, stderr_text = proc.communicate()

    if not completed:
        return
    if proc.returncode not in ok_returncodes:
        err = (stderr_text or "").strip() or f"{argv[0]} failed with exit code {proc.returncode}"
        raise ProviderError(err.splitlines()[0])


__all__ = ["CandidateProvider", "home_relative", "stream_command_lines"]
