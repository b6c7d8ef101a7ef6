"""Per-mode key tables mapping key tokens to action names.

The core only consumes ``Keymap.action_for(mode, key)``. Tables start from
``DEFAULT_BINDINGS``; user overrides replace the keys of an action and are
validated strictly because a half-understood table misbehaves silently.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..errors import ConfigError

logger = logging.getLogger(__name__)

NORMAL = "normal"
FINDER = "finder"
HINT = "hint"
KEYMAP_MODES: tuple[str, ...] = (NORMAL, FINDER, HINT)

DEFAULT_BINDINGS: dict[str, dict[str, tuple[str, ...]]] = {
    NORMAL: {
        "scroll_down": ("n", "DOWN"),
        "scroll_up": ("e", "UP"),
        "page_down": ("CTRL_D", "PAGE_DOWN"),
        "page_up": ("CTRL_U", "PAGE_UP"),
        "top": ("g", "HOME"),
        "bottom": ("G", "END"),
        "select_entry": ("ENTER", "i", "RIGHT"),
        "ascend": ("m", "LEFT", "BACKSPACE"),
        "hint_mode": ("f",),
        "finder_search": ("/",),
        "finder_jump": ("z",),
        "toggle_hidden": (".",),
        "toggle_help": ("?",),
        "refresh": ("r",),
        "exit": ("q",),
    },
    FINDER: {
        "backspace": ("BACKSPACE",),
        "clear": ("CTRL_U",),
        "select_entry": ("ENTER",),
        "scroll_down": ("DOWN", "CTRL_N", "TAB"),
        "scroll_up": ("UP", "CTRL_P"),
        "exit": ("ESC", "CTRL_C"),
    },
    HINT: {
        "backspace": ("BACKSPACE",),
        "exit": ("ESC", "CTRL_C"),
    },
}

KEY_NAME_ALIASES: dict[str, str] = {
    "enter": "ENTER",
    "return": "ENTER",
    "esc": "ESC",
    "escape": "ESC",
    "backspace": "BACKSPACE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "pageup": "PAGE_UP",
    "pagedown": "PAGE_DOWN",
    "delete": "DELETE",
    "space": " ",
}

NAMED_KEY_TOKENS: frozenset[str] = frozenset(
    {alias for alias in KEY_NAME_ALIASES.values() if len(alias) > 1}
    | {f"CTRL_{chr(code)}" for code in range(ord("A"), ord("Z") + 1)}
)


def normalize_key_name(name: object) -> str:
    """Translate a configured key name into an input-layer token.

    Accepts single characters, tokens such as ``PAGE_UP``, lower-case names
    such as ``pageup``, and ``ctrl+x``/``ctrl-x`` combos.
    """
    if not isinstance(name, str) or not name:
        raise ConfigError(f"key binding must be a non-empty string, got {name!r}")
    if len(name) == 1:
        if not name.isprintable():
            raise ConfigError(f"unprintable key binding {name!r}")
        return name
    if name in NAMED_KEY_TOKENS:
        return name
    lowered = name.lower()
    alias = KEY_NAME_ALIASES.get(lowered)
    if alias is not None:
        return alias
    for prefix in ("ctrl+", "ctrl-", "ctrl_", "c-"):
        if lowered.startswith(prefix) and len(lowered) == len(prefix) + 1 and lowered[-1].isalpha():
            return f"CTRL_{lowered[-1].upper()}"
    raise ConfigError(f"unknown key name {name!r}")


def is_text_input_key(key: str) -> bool:
    """Return whether ``key`` is a literal character typed into a prompt."""
    return len(key) == 1 and key.isprintable()


class Keymap:
    """Lookup table ``(mode, key) -> action`` built from validated bindings."""

    def __init__(self, bindings: Mapping[str, Mapping[str, tuple[str, ...]]]) -> None:
        self._actions: dict[str, dict[str, str]] = {}
        self._keys: dict[str, dict[str, tuple[str, ...]]] = {}
        for mode in KEYMAP_MODES:
            by_key: dict[str, str] = {}
            by_action: dict[str, tuple[str, ...]] = {}
            for action, keys in bindings.get(mode, {}).items():
                by_action[action] = tuple(keys)
                for key in keys:
                    by_key[key] = action
            self._actions[mode] = by_key
            self._keys[mode] = by_action

    @classmethod
    def default(cls) -> Keymap:
        return cls(DEFAULT_BINDINGS)

    def action_for(self, mode: str, key: str) -> str | None:
        """Return the bound action or ``None`` for an unbound key."""
        return self._actions.get(mode, {}).get(key)

    def keys_for(self, mode: str, action: str) -> tuple[str, ...]:
        return self._keys.get(mode, {}).get(action, ())

    def bindings(self, mode: str) -> dict[str, tuple[str, ...]]:
        return dict(self._keys.get(mode, {}))


def _coerce_key_list(mode: str, action: str, raw: object) -> tuple[str, ...]:
    if isinstance(raw, str):
        raw_keys: list[object] = [raw]
    elif isinstance(raw, list) and raw:
        raw_keys = list(raw)
    else:
        raise ConfigError(f"keys.{mode}.{action} must be a key name or a non-empty list of key names")
    keys: list[str] = []
    for raw_key in raw_keys:
        key = normalize_key_name(raw_key)
        if mode != NORMAL and is_text_input_key(key):
            raise ConfigError(f"keys.{mode}.{action}: {key!r} is text input in {mode} mode and cannot be bound")
        if key not in keys:
            keys.append(key)
    return tuple(keys)


def build_keymap(user_table: object = None) -> Keymap:
    """Merge user overrides onto ``DEFAULT_BINDINGS`` and return a ``Keymap``.

    ``user_table`` is the ``keys`` object from the config file. Raises
    ``ConfigError`` for anything it cannot interpret unambiguously.
    """
    if user_table is None:
        return Keymap.default()
    if not isinstance(user_table, dict):
        raise ConfigError("keys must be an object of per-mode tables")

    merged: dict[str, dict[str, tuple[str, ...]]] = {}
    for mode in KEYMAP_MODES:
        merged[mode] = dict(DEFAULT_BINDINGS[mode])

    for mode, mode_table in user_table.items():
        if mode not in DEFAULT_BINDINGS:
            raise ConfigError(f"unknown key mode {mode!r} (expected one of {', '.join(KEYMAP_MODES)})")
        if not isinstance(mode_table, dict):
            raise ConfigError(f"keys.{mode} must be an object mapping actions to keys")

        user_keys: dict[str, tuple[str, ...]] = {}
        owner_by_key: dict[str, str] = {}
        for action, raw in mode_table.items():
            if action not in DEFAULT_BINDINGS[mode]:
                raise ConfigError(f"unknown action {action!r} in keys.{mode}")
            keys = _coerce_key_list(mode, action, raw)
            for key in keys:
                other = owner_by_key.get(key)
                if other is not None:
                    raise ConfigError(f"keys.{mode}: {key!r} is bound to both {other!r} and {action!r}")
                owner_by_key[key] = action
            user_keys[action] = keys

        table = merged[mode]
        for action, default_keys in list(table.items()):
            if action in user_keys:
                continue
            kept = tuple(key for key in default_keys if key not in owner_by_key)
            if kept != default_keys:
                logger.debug("keys.%s: user binding displaced default keys of %s", mode, action)
            table[action] = kept
        table.update(user_keys)

    return Keymap(merged)


__all__ = [
    "DEFAULT_BINDINGS",
    "FINDER",
    "HINT",
    "KEYMAP_MODES",
    "Keymap",
    "NORMAL",
    "build_keymap",
    "is_text_input_key",
    "normalize_key_name",
]
