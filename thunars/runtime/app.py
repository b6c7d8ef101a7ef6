"""Runtime composition for the browser.

Builds the entry-list model, overlay schedulers, and mode controller from
validated settings, then runs the interactive loop on the real terminal.
"""

from __future__ import annotations

import logging
import sys
from functools import partial
from pathlib import Path

from ..config import BrowserSettings, save_show_hidden
from ..controller import ModeController
from ..entry_list import EntryListModel
from ..events import EventQueue
from ..file_model import Entry
from ..input import read_key
from ..launcher import open_path
from ..overlays import QueryScheduler, jump_provider, search_provider_factory
from ..preview import Preview, PreviewCache
from ..render import render_frame
from ..terminal import TerminalController
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop

logger = logging.getLogger(__name__)


def build_controller(
    start_dir: Path,
    settings: BrowserSettings,
    events: EventQueue,
    config_path: Path | None = None,
    terminal: TerminalController | None = None,
) -> ModeController:
    """Load ``start_dir`` and wire a controller; ``AccessError`` propagates."""
    entries = EntryListModel(show_hidden=settings.show_hidden)
    entries.load(start_dir)

    def open_file(target: Path) -> None:
        open_path(
            target,
            command=settings.open_command,
            background=settings.open_in_background if settings.open_command else None,
            disable_tui_mode=terminal.disable_tui_mode if terminal is not None else None,
            enable_tui_mode=terminal.enable_tui_mode if terminal is not None else None,
        )

    return ModeController(
        entries=entries,
        keymap=settings.keymap,
        search_scheduler=QueryScheduler("search", events.post, max_candidates=settings.max_candidates),
        jump_scheduler=QueryScheduler("jump", events.post, max_candidates=settings.max_candidates),
        search_provider=search_provider_factory(settings.search_command, lambda: entries.show_hidden),
        jump_provider=jump_provider(settings.jump_command),
        open_file=open_file,
        hint_alphabet=settings.hint_alphabet,
        hint_case_sensitive=settings.hint_case_sensitive,
        scroll_step=settings.scroll_step,
        max_candidates=settings.max_candidates,
        on_toggle_hidden=partial(save_show_hidden, path=config_path),
    )


def run_browser(start_dir: Path, settings: BrowserSettings, config_path: Path | None = None) -> None:
    """Run the interactive browser rooted at ``start_dir`` until quit."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    events = EventQueue()
    controller = build_controller(start_dir, settings, events, config_path, terminal)
    previews = PreviewCache(style=settings.style)

    def preview_for(entry: Entry, show_hidden: bool) -> Preview | None:
        if not settings.preview:
            return None
        return previews.get(entry.path, entry.is_dir, show_hidden)

    callbacks = RuntimeLoopCallbacks(
        read_key=read_key,
        write_frame=render_frame,
        terminal_size=terminal.size,
        preview_for=preview_for,
    )
    logger.info("browser started in %s", controller.entries.directory)
    try:
        run_main_loop(controller, events, terminal, stdin_fd, RuntimeLoopTiming(), callbacks)
    finally:
        controller.search_scheduler.cancel()
        controller.jump_scheduler.cancel()
    logger.info("browser exited")


__all__ = ["build_controller", "run_browser"]
