"""File-open helper for entries selected in the browser.

Foreground commands (an editor) run while raw/alternate-screen TUI mode is
suspended. Background commands are started detached and not waited on.
Failures raise ``LaunchError``; the session reports them and keeps going.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .errors import LaunchError

logger = logging.getLogger(__name__)


def default_open_command() -> tuple[list[str], bool]:
    """Return ``(argv, background)`` for opening files without configuration.

    ``$VISUAL``/``$EDITOR`` run in the foreground; the desktop opener runs
    in the background.
    """
    for var in ("VISUAL", "EDITOR"):
        value = os.environ.get(var, "").strip()
        if value:
            cmd = shlex.split(value)
            if cmd:
                return cmd, False
    opener = "open" if sys.platform == "darwin" else "xdg-open"
    return [opener], True


def build_open_argv(command: Sequence[str], target: Path) -> list[str]:
    """Substitute ``{path}`` in ``command`` or append the path at the end."""
    path_text = str(target)
    if any("{path}" in part for part in command):
        return [part.replace("{path}", path_text) for part in command]
    return [*command, path_text]


def open_path(
    target: Path,
    command: Sequence[str] | None = None,
    background: bool | None = None,
    disable_tui_mode: Callable[[], None] | None = None,
    enable_tui_mode: Callable[[], None] | None = None,
) -> None:
    if command:
        cmd = list(command)
        run_in_background = bool(background)
    else:
        cmd, default_background = default_open_command()
        run_in_background = default_background if background is None else background
    argv = build_open_argv(cmd, target)
    if shutil.which(argv[0]) is None:
        raise LaunchError(f"Cannot open: {argv[0]} is not installed.")

    logger.info("opening %s with %s", target, argv[0])
    if run_in_background:
        try:
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise LaunchError(f"Failed to open {target.name}: {exc}") from exc
        return

    if disable_tui_mode is not None:
        disable_tui_mode()
    try:
        result = subprocess.run(argv, check=False)
    except OSError as exc:
        raise LaunchError(f"Failed to open {target.name}: {exc}") from exc
    finally:
        if enable_tui_mode is not None:
            enable_tui_mode()
    if result.returncode != 0:
        raise LaunchError(f"{argv[0]} exited with code {result.returncode}")


__all__ = ["build_open_argv", "default_open_command", "open_path"]
