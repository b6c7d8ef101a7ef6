"""Preview pane payloads for the entry under the cursor.

Text files show their first lines syntax-colored with Pygments, binary
files a placeholder, and directories their child listing. Control bytes
are neutralized so previews cannot move the cursor or ring the bell.
"""

from __future__ import annotations

import logging
import re
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .errors import AccessError
from .file_model import list_directory

logger = logging.getLogger(__name__)

BINARY_SNIFF_BYTES = 4_096
PREVIEW_READ_BYTES = 64 * 1024
PREVIEW_MAX_LINES = 200
PREVIEW_CACHE_MAX = 64
DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}
_INVALID_STYLES: set[str] = set()


@dataclass(frozen=True)
class Preview:
    """Rendered preview lines plus the kind of payload they describe."""

    lines: tuple[str, ...]
    kind: str

    @classmethod
    def message(cls, text: str, kind: str) -> Preview:
        return cls(lines=(f"\033[2m{text}\033[0m",), kind=kind)


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes, keeping newlines and tabs."""
    if _CONTROL_RE.search(source) is None:
        return source
    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
        elif code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
        else:
            out.append(ch)
    return "".join(out)


def decode_text(data: bytes) -> str:
    for encoding in ("utf-8", "utf-8-sig"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1")


def looks_binary(sample: bytes) -> bool:
    return b"\x00" in sample[:BINARY_SNIFF_BYTES]


def _formatter_for_style(style: str) -> TerminalFormatter:
    if style in _INVALID_STYLES:
        style = DEFAULT_STYLE
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.warning("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        _INVALID_STYLES.add(style)
        style = DEFAULT_STYLE
    formatter = TerminalFormatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` with ANSI colors for the lexer matching ``path``."""
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return pygments_highlight(source, lexer, _formatter_for_style(style))


def _file_preview(path: Path, style: str, max_lines: int) -> Preview:
    try:
        with path.open("rb") as handle:
            data = handle.read(PREVIEW_READ_BYTES)
    except OSError as exc:
        return Preview.message(f"<cannot read: {exc.strerror or exc}>", "error")
    if not data:
        return Preview.message("<empty file>", "text")
    if looks_binary(data):
        try:
            size = path.stat().st_size
        except OSError:
            return Preview.message("<binary file>", "binary")
        return Preview.message(f"<binary file: {size} bytes>", "binary")

    text_lines = decode_text(data).splitlines()[:max_lines]
    source = sanitize_terminal_text("\n".join(text_lines)) + "\n"
    rendered = colorize_source(source, path, style)
    return Preview(lines=tuple(rendered.splitlines()[:max_lines]), kind="text")


def _directory_preview(path: Path, show_hidden: bool, max_lines: int) -> Preview:
    try:
        entries = list_directory(path, show_hidden)
    except AccessError as exc:
        return Preview.message(f"<{exc}>", "error")
    if not entries:
        return Preview.message("<empty directory>", "directory")
    lines = [
        f"\033[1;34m{sanitize_terminal_text(entry.name)}/\033[0m" if entry.is_dir else sanitize_terminal_text(entry.name)
        for entry in entries[:max_lines]
    ]
    return Preview(lines=tuple(lines), kind="directory")


def build_preview(
    path: Path,
    is_dir: bool,
    style: str = DEFAULT_STYLE,
    show_hidden: bool = False,
    max_lines: int = PREVIEW_MAX_LINES,
) -> Preview:
    if is_dir:
        return _directory_preview(path, show_hidden, max_lines)
    return _file_preview(path, style, max_lines)


class PreviewCache:
    """LRU of previews keyed by path, mtime, size, and display options."""

    def __init__(self, style: str = DEFAULT_STYLE, max_entries: int = PREVIEW_CACHE_MAX) -> None:
        self.style = style
        self.max_entries = max(1, max_entries)
        self._items: OrderedDict[tuple[str, int, int, bool, int], Preview] = OrderedDict()

    def get(self, path: Path, is_dir: bool, show_hidden: bool = False, max_lines: int = PREVIEW_MAX_LINES) -> Preview:
        try:
            stat = path.stat()
            key = (str(path), stat.st_mtime_ns, stat.st_size, show_hidden, max_lines)
        except OSError:
            return build_preview(path, is_dir, self.style, show_hidden, max_lines)
        cached = self._items.get(key)
        if cached is not None:
            self._items.move_to_end(key)
            return cached
        preview = build_preview(path, is_dir, self.style, show_hidden, max_lines)
        self._items[key] = preview
        while len(self._items) > self.max_entries:
            self._items.popitem(last=False)
        return preview

    def clear(self) -> None:
        self._items.clear()


__all__ = [
    "BINARY_SNIFF_BYTES",
    "Preview",
    "PreviewCache",
    "build_preview",
    "colorize_source",
    "decode_text",
    "looks_binary",
    "sanitize_terminal_text",
]
