"""Input-layer public API for key decoding and key tables.

Exports are split between low-level terminal decoding (``read_key``) and
the per-mode binding tables consumed by the mode controller.
"""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key
from .keymap import (
    DEFAULT_BINDINGS,
    FINDER,
    HINT,
    KEYMAP_MODES,
    NORMAL,
    Keymap,
    build_keymap,
    is_text_input_key,
    normalize_key_name,
)

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "DEFAULT_BINDINGS",
    "FINDER",
    "HINT",
    "KEYMAP_MODES",
    "NORMAL",
    "Keymap",
    "build_keymap",
    "is_text_input_key",
    "normalize_key_name",
]
