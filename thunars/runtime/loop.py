"""Main interactive event loop for the browser.

Each cycle keeps the viewport in step with the terminal size, renders when
the controller is dirty, reads one key with a short timeout, then drains
provider results. Every event goes through ``ModeController.dispatch`` on
this thread.
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..controller import ModeController, Outcome
from ..events import EventQueue, KeyPressed
from ..file_model import Entry
from ..input.keymap import FINDER, HINT, NORMAL
from ..modes import FinderMode, HintMode
from ..preview import Preview
from ..render import RenderContext, build_frame, footer_hints, help_panel_lines, layout_rows
from ..terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    key_timeout_ms: int = 50
    spinner_frame_seconds: float = 0.12


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected I/O used by ``run_main_loop``."""

    read_key: Callable[[int, int | None], str]
    write_frame: Callable[[list[str]], None]
    terminal_size: Callable[[], os.terminal_size]
    preview_for: Callable[[Entry, bool], Preview | None]


def keymap_mode_for(controller: ModeController) -> str:
    if isinstance(controller.mode, HintMode):
        return HINT
    if isinstance(controller.mode, FinderMode):
        return FINDER
    return NORMAL


def build_render_context(
    controller: ModeController,
    width: int,
    height: int,
    preview_for: Callable[[Entry, bool], Preview | None],
    spinner_frame: int = 0,
) -> RenderContext:
    """Snapshot controller and model state for one frame."""
    entries = controller.entries
    keymap_mode = keymap_mode_for(controller)
    help_lines = help_panel_lines(controller.keymap, keymap_mode) if controller.show_help else []
    preview = None
    selected = entries.selected_entry
    if selected is not None and not isinstance(controller.mode, FinderMode):
        preview = preview_for(selected, entries.show_hidden)
    return RenderContext(
        mode=controller.mode,
        directory=entries.directory,
        entries=entries.visible_entries(),
        scroll_offset=entries.scroll_offset,
        cursor=entries.cursor,
        total=len(entries),
        width=width,
        height=height,
        show_hidden=entries.show_hidden,
        show_help=controller.show_help,
        status_message=controller.status_message,
        help_lines=help_lines,
        footer=footer_hints(controller.keymap, keymap_mode),
        preview=preview,
        spinner_frame=spinner_frame,
    )


def run_main_loop(
    controller: ModeController,
    events: EventQueue,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the browser until an ``exit`` action returns ``Outcome.QUIT``."""
    spinner_frame = 0
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while True:
            term = callbacks.terminal_size()
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                controller.dirty = True
            controller.expire_status()

            # Labels belong to the slice they were computed for.
            if not isinstance(controller.mode, HintMode):
                help_count = (
                    len(help_panel_lines(controller.keymap, keymap_mode_for(controller)))
                    if controller.show_help
                    else 0
                )
                content_rows, _help_rows = layout_rows(term.lines, controller.show_help, help_count)
                controller.entries.set_viewport_height(content_rows)

            mode = controller.mode
            if isinstance(mode, FinderMode) and mode.loading:
                next_frame = int(time.monotonic() / timing.spinner_frame_seconds)
                if next_frame != spinner_frame:
                    spinner_frame = next_frame
                    controller.dirty = True

            if controller.dirty:
                context = build_render_context(
                    controller,
                    term.columns,
                    term.lines,
                    callbacks.preview_for,
                    spinner_frame,
                )
                callbacks.write_frame(build_frame(context))
                controller.dirty = False

            key = callbacks.read_key(stdin_fd, timing.key_timeout_ms)
            if key and controller.dispatch(KeyPressed(key)) is Outcome.QUIT:
                break
            for event in events.drain():
                controller.dispatch(event)


__all__ = [
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "build_render_context",
    "keymap_mode_for",
    "run_main_loop",
]
