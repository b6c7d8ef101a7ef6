"""JSON config loading and browser settings.

Reads the per-user config file, validates the key table and hint alphabet
strictly, and falls back to defaults for bad scalar values. Also persists the
hidden-file toggle back into the same file.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigError
from .hints import DEFAULT_HINT_ALPHABET, normalize_alphabet
from .input.keymap import Keymap, build_keymap

logger = logging.getLogger(__name__)

APP_NAME = "thunars"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_STYLE = "monokai"
DEFAULT_MAX_CANDIDATES = 1_000


@dataclass(frozen=True)
class BrowserSettings:
    """Validated startup configuration consumed by the runtime."""

    keymap: Keymap = field(default_factory=Keymap.default)
    hint_alphabet: str = DEFAULT_HINT_ALPHABET
    hint_case_sensitive: bool = False
    scroll_step: int = 1
    show_hidden: bool = False
    preview: bool = True
    style: str = DEFAULT_STYLE
    search_command: tuple[str, ...] | None = None
    jump_command: tuple[str, ...] | None = None
    open_command: tuple[str, ...] | None = None
    open_in_background: bool = False
    max_candidates: int = DEFAULT_MAX_CANDIDATES


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file does not exist. A file that exists
    but cannot be read, parsed, or is not a JSON object raises
    ``ConfigError``.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        raise ConfigError(f"cannot read config {config_path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config {config_path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config {config_path} must contain a JSON object")
    return data


def save_config(data: dict[str, object], path: Path | None = None) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored so a read-only config
    directory never interrupts browsing.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", config_path, exc)


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans and non-integers are invalid; values below 1 fall back too."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return default
    return value


def _coerce_str(value: object, default: str) -> str:
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _coerce_command(value: object) -> tuple[str, ...] | None:
    """Accept an argv list of strings; anything else means "use default"."""
    if not isinstance(value, list) or not value:
        return None
    if not all(isinstance(part, str) and part for part in value):
        return None
    return tuple(value)


def settings_from_config(data: dict[str, object]) -> BrowserSettings:
    """Build ``BrowserSettings`` from a decoded config object."""
    keymap = build_keymap(data.get("keys"))

    hint_case_sensitive = _coerce_bool(data.get("hint_case_sensitive"), False)
    raw_alphabet = data.get("hint_alphabet", DEFAULT_HINT_ALPHABET)
    hint_alphabet = normalize_alphabet(raw_alphabet, hint_case_sensitive)  # type: ignore[arg-type]

    return BrowserSettings(
        keymap=keymap,
        hint_alphabet=hint_alphabet,
        hint_case_sensitive=hint_case_sensitive,
        scroll_step=_coerce_positive_int(data.get("scroll_step"), 1),
        show_hidden=_coerce_bool(data.get("show_hidden"), False),
        preview=_coerce_bool(data.get("preview"), True),
        style=_coerce_str(data.get("style"), DEFAULT_STYLE),
        search_command=_coerce_command(data.get("search_command")),
        jump_command=_coerce_command(data.get("jump_command")),
        open_command=_coerce_command(data.get("open_command")),
        open_in_background=_coerce_bool(data.get("open_in_background"), False),
        max_candidates=_coerce_positive_int(data.get("max_candidates"), DEFAULT_MAX_CANDIDATES),
    )


def load_settings(path: Path | None = None) -> BrowserSettings:
    """Load and validate settings; raises ``ConfigError`` when malformed."""
    config_path = CONFIG_PATH if path is None else path
    settings = settings_from_config(load_config(config_path))
    logger.debug("settings loaded from %s", config_path)
    return settings


def save_show_hidden(show_hidden: bool, path: Path | None = None) -> None:
    """Persist hidden-file visibility preference as a boolean."""
    try:
        config = load_config(path)
    except ConfigError as exc:
        logger.warning("not persisting show_hidden: %s", exc)
        return
    config["show_hidden"] = bool(show_hidden)
    save_config(config, path)


def resolve_config_path(explicit: str | os.PathLike[str] | None) -> Path:
    """Return the config path chosen on the command line or the default."""
    if explicit is None:
        return CONFIG_PATH
    return Path(explicit).expanduser()


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "BrowserSettings",
    "load_config",
    "load_settings",
    "resolve_config_path",
    "save_config",
    "save_show_hidden",
    "settings_from_config",
]
