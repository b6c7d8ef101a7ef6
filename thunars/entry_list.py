"""Entry-list model: current directory listing, cursor, and scroll window.

The model owns the listing of exactly one directory. Loads replace the
listing wholesale; a failed load leaves the previous listing untouched.
After every mutation the cursor lies inside the viewport window.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .file_model import Entry, list_directory

logger = logging.getLogger(__name__)

DirectoryLister = Callable[[Path, bool], list[Entry]]


class EntryListModel:
    """Listing of the current directory with a viewport-aware cursor."""

    def __init__(
        self,
        lister: DirectoryLister = list_directory,
        viewport_height: int = 20,
        show_hidden: bool = False,
    ) -> None:
        self._lister = lister
        self.directory: Path | None = None
        self.entries: list[Entry] = []
        self.cursor: int | None = None
        self.scroll_offset = 0
        self.viewport_height = max(1, viewport_height)
        self.show_hidden = show_hidden

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def selected_entry(self) -> Entry | None:
        if self.cursor is None:
            return None
        return self.entries[self.cursor]

    def load(self, directory: Path) -> None:
        """Replace the listing with ``directory``; cursor and scroll reset to 0.

        ``AccessError`` from the lister propagates and the previous listing is
        retained.
        """
        target = directory.resolve()
        entries = self._lister(target, self.show_hidden)
        self.directory = target
        self.entries = list(entries)
        self.cursor = 0 if self.entries else None
        self.scroll_offset = 0
        logger.debug("loaded %s (%d entries)", target, len(self.entries))

    def reload(self) -> None:
        """Re-list the current directory keeping the cursor on the same name."""
        if self.directory is None:
            return
        previous = self.selected_entry
        previous_cursor = self.cursor
        self.load(self.directory)
        if previous is not None and self.select_path(previous.path):
            return
        if previous_cursor is not None:
            self.move_to(previous_cursor)

    def set_viewport_height(self, height: int) -> None:
        """Resize the viewport and keep the cursor visible."""
        height = max(1, height)
        if height == self.viewport_height:
            return
        self.viewport_height = height
        self._sync_scroll()

    def _max_scroll_offset(self) -> int:
        return max(0, len(self.entries) - self.viewport_height)

    def _sync_scroll(self) -> None:
        if self.cursor is None:
            self.scroll_offset = 0
            return
        if self.cursor < self.scroll_offset:
            self.scroll_offset = self.cursor
        elif self.cursor >= self.scroll_offset + self.viewport_height:
            self.scroll_offset = self.cursor - self.viewport_height + 1
        self.scroll_offset = max(0, min(self.scroll_offset, self._max_scroll_offset()))

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor by ``delta`` clamped to list bounds.

        Returns whether the cursor moved. No-op on an empty list.
        """
        if self.cursor is None:
            return False
        return self.move_to(self.cursor + delta)

    def move_to(self, index: int) -> bool:
        """Place the cursor at ``index`` clamped to list bounds."""
        if self.cursor is None:
            return False
        previous = self.cursor
        self.cursor = max(0, min(len(self.entries) - 1, index))
        self._sync_scroll()
        return self.cursor != previous

    def visible_entries(self) -> list[Entry]:
        """Return the viewport slice of the listing."""
        return self.entries[self.scroll_offset : self.scroll_offset + self.viewport_height]

    def select_path(self, path: Path) -> bool:
        """Move the cursor onto the entry whose path is ``path`` if listed."""
        for idx, entry in enumerate(self.entries):
            if entry.path == path:
                self.cursor = idx
                self._sync_scroll()
                return True
        return False

    def enter_selected(self) -> Path | None:
        """Enter the directory under the cursor, or return the file to open.

        Returns the file path for the caller to open. Returns ``None`` after a
        directory load and on an empty list.
        """
        entry = self.selected_entry
        if entry is None:
            return None
        if entry.is_dir:
            self.load(entry.path)
            return None
        return entry.path

    def ascend(self) -> bool:
        """Load the parent directory and select the directory just left.

        Returns ``False`` at the filesystem root (no-op).
        """
        if self.directory is None:
            return False
        parent = self.directory.parent
        if parent == self.directory:
            return False
        child = self.directory
        self.load(parent)
        self.select_path(child)
        return True

    def set_show_hidden(self, show_hidden: bool) -> None:
        """Toggle dotfile visibility and reload the current listing."""
        if show_hidden == self.show_hidden:
            return
        previous = self.show_hidden
        self.show_hidden = show_hidden
        try:
            self.reload()
        except Exception:
            self.show_hidden = previous
            raise


__all__ = ["DirectoryLister", "EntryListModel"]
