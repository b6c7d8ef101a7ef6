"""Help panel content derived from the active key table.

The panel lists every bound action per mode, so user overrides show up
without separate documentation. Presentation only; no state is touched.
"""

from __future__ import annotations

from ..input.keymap import FINDER, HINT, KEYMAP_MODES, NORMAL, Keymap

HEADING_SGR = "\033[1;38;5;81m"
KEY_SGR = "\033[38;5;229m"
RESET = "\033[0m"

MODE_TITLES: dict[str, str] = {
    NORMAL: "NORMAL",
    FINDER: "SEARCH / JUMP",
    HINT: "HINT",
}

ACTION_LABELS: dict[str, str] = {
    "scroll_down": "down",
    "scroll_up": "up",
    "page_down": "page down",
    "page_up": "page up",
    "top": "first entry",
    "bottom": "last entry",
    "select_entry": "open",
    "ascend": "parent dir",
    "hint_mode": "hints",
    "finder_search": "search files",
    "finder_jump": "jump to dir",
    "toggle_hidden": "hidden files",
    "toggle_help": "help",
    "refresh": "reload",
    "exit": "quit",
    "backspace": "delete char",
    "clear": "clear query",
}

KEY_LABELS: dict[str, str] = {
    "ENTER": "Enter",
    "ESC": "Esc",
    "BACKSPACE": "Bksp",
    "TAB": "Tab",
    "UP": "Up",
    "DOWN": "Down",
    "LEFT": "Left",
    "RIGHT": "Right",
    "HOME": "Home",
    "END": "End",
    "PAGE_UP": "PgUp",
    "PAGE_DOWN": "PgDn",
    "DELETE": "Del",
    " ": "Space",
}

MODE_EXTRA_LINES: dict[str, tuple[str, ...]] = {
    FINDER: (f"{KEY_SGR}Type{RESET} edit query",),
    HINT: (f"{KEY_SGR}Type{RESET} label to jump",),
}


def key_label(key: str) -> str:
    """Human-readable label for a key token."""
    if key in KEY_LABELS:
        return KEY_LABELS[key]
    if key.startswith("CTRL_") and len(key) == 6:
        return f"Ctrl+{key[-1]}"
    return key


def action_label(mode: str, action: str) -> str:
    if mode != NORMAL and action == "exit":
        return "cancel"
    return ACTION_LABELS.get(action, action.replace("_", " "))


def help_lines_for_mode(keymap: Keymap, mode: str) -> list[str]:
    lines = [f"{HEADING_SGR}{MODE_TITLES.get(mode, mode.upper())}{RESET}"]
    for action, keys in keymap.bindings(mode).items():
        if not keys:
            continue
        keys_text = "/".join(key_label(key) for key in keys)
        lines.append(f"{KEY_SGR}{keys_text}{RESET} {action_label(mode, action)}")
    lines.extend(MODE_EXTRA_LINES.get(mode, ()))
    return lines


def help_panel_lines(keymap: Keymap, active_mode: str = NORMAL) -> list[str]:
    """Help lines for ``active_mode`` first, then the remaining modes."""
    ordered = [active_mode, *(mode for mode in KEYMAP_MODES if mode != active_mode)]
    lines: list[str] = []
    for mode in ordered:
        if lines:
            lines.append("")
        lines.extend(help_lines_for_mode(keymap, mode))
    return lines


def help_panel_row_count(total_rows: int, line_count: int) -> int:
    """Rows given to the help panel, leaving at least one list row."""
    if total_rows <= 1:
        return 0
    return min(line_count, total_rows - 1)


def footer_hints(keymap: Keymap, mode: str) -> str:
    """Short key reminder for the controls footer."""
    picks: dict[str, tuple[str, ...]] = {
        NORMAL: ("finder_search", "finder_jump", "hint_mode", "toggle_help", "exit"),
        FINDER: ("select_entry", "scroll_down", "exit"),
        HINT: ("backspace", "exit"),
    }
    parts: list[str] = []
    for action in picks.get(mode, ()):
        keys = keymap.keys_for(mode, action)
        if keys:
            parts.append(f"{key_label(keys[0])} {action_label(mode, action)}")
    return "  ".join(parts)


__all__ = [
    "action_label",
    "footer_hints",
    "help_lines_for_mode",
    "help_panel_lines",
    "help_panel_row_count",
    "key_label",
]
