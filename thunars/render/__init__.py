"""Frame composition for the browser view.

``build_frame`` is a pure function of a ``RenderContext`` returning exactly
``height`` rows; ``render_frame`` writes one composed ANSI frame. Nothing
here mutates browser state.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from ..ansi import display_width, fit_ansi_line
from ..file_model import Entry
from ..modes import FinderMode, HintMode, Mode, NormalMode, mode_name
from ..overlays import home_relative
from ..preview import Preview, sanitize_terminal_text
from .help import footer_hints, help_panel_lines, help_panel_row_count

HEADER_SGR = "\033[1;38;5;81m"
DIR_SGR = "\033[1;34m"
SEPARATOR = "\033[2m│\033[0m"
SINGLE_HINT_SGR = "\033[1;30;42m"
DOUBLE_HINT_SGR = "\033[1;30;44m"
TYPED_HINT_SGR = "\033[2m"
DIM_SGR = "\033[2m"
LOADING_FRAMES: tuple[str, ...] = ("|", "/", "-", "\\")
PREVIEW_MIN_WIDTH = 80
LIST_MIN_WIDTH = 24


@dataclass
class RenderContext:
    mode: Mode
    directory: Path | None
    entries: list[Entry]
    scroll_offset: int
    cursor: int | None
    total: int
    width: int
    height: int
    show_hidden: bool = False
    show_help: bool = False
    status_message: str = ""
    help_lines: list[str] = field(default_factory=list)
    footer: str = ""
    preview: Preview | None = None
    spinner_frame: int = 0


def selected_with_ansi(text: str) -> str:
    """Apply reverse video while keeping inner colors."""
    if not text:
        return text
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def layout_rows(height: int, show_help: bool, help_line_count: int) -> tuple[int, int]:
    """Return ``(content_rows, help_rows)`` between header and status row."""
    body = max(1, height - 2)
    help_rows = help_panel_row_count(body, help_line_count) if show_help else 0
    return max(1, body - help_rows), help_rows


def split_widths(width: int, with_preview: bool) -> tuple[int, int]:
    """Return ``(list_width, preview_width)``; preview width 0 means no pane."""
    if not with_preview or width < PREVIEW_MIN_WIDTH:
        return width, 0
    list_width = max(LIST_MIN_WIDTH, (width * 2) // 5)
    return list_width, max(0, width - list_width - 1)


def format_entry_name(entry: Entry) -> str:
    name = sanitize_terminal_text(entry.name)
    if entry.is_dir:
        return f"{DIR_SGR}{name}/\033[0m"
    return name


def format_hint_label(label: str | None, typed: str, width: int = 2) -> str:
    """Render a hint badge; labels the typed prefix rules out are blanked."""
    if label is None or (typed and not label.startswith(typed)):
        return " " * width
    sgr = SINGLE_HINT_SGR if len(label) == 1 else DOUBLE_HINT_SGR
    shown = f"{TYPED_HINT_SGR}{typed}\033[0m{sgr}{label[len(typed):]}" if typed else f"{sgr}{label}"
    return f"{shown}\033[0m" + " " * max(0, width - len(label))


def _entry_rows(context: RenderContext, rows: int, width: int) -> list[str]:
    mode = context.mode
    hint_mode = mode if isinstance(mode, HintMode) else None
    label_width = 0
    hint_typed = ""
    if hint_mode is not None:
        label_width = max((len(label) for label in hint_mode.assignment.labels), default=1)
        hint_typed = hint_mode.assignment.normalize_input(hint_mode.buffer)

    out: list[str] = []
    if not context.entries:
        out.append(fit_ansi_line(f"{DIM_SGR}  (empty)\033[0m", width))
    for row, entry in enumerate(context.entries[:rows]):
        prefix = " "
        if hint_mode is not None:
            prefix = format_hint_label(hint_mode.assignment.label_for(row), hint_typed, label_width) + " "
        line = fit_ansi_line(prefix + format_entry_name(entry), width)
        if context.cursor is not None and context.scroll_offset + row == context.cursor:
            line = selected_with_ansi(line)
        out.append(line)
    while len(out) < rows:
        out.append(" " * width)
    return out[:rows]


def _finder_rows(mode: FinderMode, rows: int, width: int, spinner_frame: int) -> list[str]:
    count = f"{len(mode.candidates)}"
    if mode.loading:
        count += f" {LOADING_FRAMES[spinner_frame % len(LOADING_FRAMES)]}"
    prompt = f"{HEADER_SGR}{mode.prompt}\033[0m {sanitize_terminal_text(mode.query)}\033[7m \033[0m"
    right = f"{DIM_SGR}{count}\033[0m"
    gap = max(1, width - display_width(prompt) - display_width(right))
    out = [fit_ansi_line(prompt + " " * gap + right, width)]

    list_rows = max(0, rows - 1)
    if mode.error and not mode.candidates:
        out.append(fit_ansi_line(f"\033[31m {sanitize_terminal_text(mode.error)}\033[0m", width))
    elif not mode.candidates and not mode.loading:
        out.append(fit_ansi_line(f"{DIM_SGR} no matches\033[0m", width))
    elif list_rows:
        start = max(0, mode.selected - list_rows + 1)
        for idx in range(start, min(len(mode.candidates), start + list_rows)):
            text = " " + sanitize_terminal_text(mode.provider.describe(mode.candidates[idx]))
            line = fit_ansi_line(text, width)
            out.append(selected_with_ansi(line) if idx == mode.selected else line)
    while len(out) < rows:
        out.append(" " * width)
    return out[:rows]


def _preview_rows(preview: Preview | None, rows: int, width: int) -> list[str]:
    lines = list(preview.lines[:rows]) if preview is not None else []
    out = [fit_ansi_line(" " + line, width) for line in lines]
    while len(out) < rows:
        out.append(" " * width)
    return out


def _header_line(context: RenderContext) -> str:
    where = home_relative(context.directory) if context.directory is not None else ""
    text = f"{HEADER_SGR}{sanitize_terminal_text(where)}\033[0m"
    if context.show_hidden:
        text += f" {DIM_SGR}[hidden shown]\033[0m"
    return fit_ansi_line(text, context.width)


def _status_line(context: RenderContext) -> str:
    left = f" {mode_name(context.mode)} "
    if context.status_message:
        # Paths and tool stderr may hold control bytes and newlines.
        left += " " + " ".join(sanitize_terminal_text(context.status_message).split())
    elif isinstance(context.mode, (NormalMode, HintMode)) and context.cursor is not None:
        left += f" {context.cursor + 1}/{context.total}"
    right = f"{context.footer} " if context.footer else ""
    if len(left) + len(right) + 1 >= context.width:
        right = ""
    status = build_status_line(left, context.width, right)
    return "\033[7m" + status + "\033[0m"


def build_frame(context: RenderContext) -> list[str]:
    """Compose the full screen as ``context.height`` rows."""
    width = max(1, context.width)
    height = max(3, context.height)
    content_rows, help_rows = layout_rows(height, context.show_help, len(context.help_lines))

    lines = [_header_line(context)]
    if isinstance(context.mode, FinderMode):
        lines.extend(_finder_rows(context.mode, content_rows, width, context.spinner_frame))
    else:
        list_width, preview_width = split_widths(width, context.preview is not None)
        list_rows = _entry_rows(context, content_rows, list_width)
        if preview_width:
            preview_rows = _preview_rows(context.preview, content_rows, preview_width)
            lines.extend(left + SEPARATOR + right for left, right in zip(list_rows, preview_rows))
        else:
            lines.extend(list_rows)

    for row in range(help_rows):
        lines.append(fit_ansi_line(context.help_lines[row], width))
    lines.append(_status_line(context))
    return lines


def render_frame(lines: list[str]) -> None:
    """Write a composed frame to stdout in one call."""
    out = ["\033[H\033[J", "\r\n".join(lines)]
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "build_frame",
    "build_status_line",
    "footer_hints",
    "format_hint_label",
    "help_panel_lines",
    "layout_rows",
    "render_frame",
    "selected_with_ansi",
    "split_widths",
]
