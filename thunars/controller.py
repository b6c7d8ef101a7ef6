"""Modal state machine driving the browser.

``ModeController`` owns the active mode and is the single writer of both
mode state and the entry-list model. Key presses and provider results
reach it through ``dispatch``; every event yields an ``Outcome``, with
``IGNORED`` for combinations that mean nothing in the active mode.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from .entry_list import EntryListModel
from .errors import AccessError, LaunchError
from .events import BrowserEvent, CandidateBatch, KeyPressed, ProviderFailed
from .hints import DEFAULT_HINT_ALPHABET, HintMatch, assign_hints, normalize_alphabet
from .input.keymap import FINDER, HINT, NORMAL, Keymap, is_text_input_key
from .modes import DirJumpMode, FinderMode, HintMode, Mode, NormalMode, SearchMode, mode_name
from .overlays import CandidateProvider, QueryScheduler

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 2.5


class Outcome(str, Enum):
    IGNORED = "ignored"
    HANDLED = "handled"
    QUIT = "quit"


class ModeController:
    """Interpret events against the active mode and apply the transition."""

    def __init__(
        self,
        *,
        entries: EntryListModel,
        keymap: Keymap,
        search_scheduler: QueryScheduler,
        jump_scheduler: QueryScheduler,
        search_provider: Callable[[Path], CandidateProvider],
        jump_provider: CandidateProvider,
        open_file: Callable[[Path], None],
        hint_alphabet: str = DEFAULT_HINT_ALPHABET,
        hint_case_sensitive: bool = False,
        scroll_step: int = 1,
        max_candidates: int = 1_000,
        on_toggle_hidden: Callable[[bool], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.entries = entries
        self.keymap = keymap
        self.search_scheduler = search_scheduler
        self.jump_scheduler = jump_scheduler
        self.search_provider = search_provider
        self.jump_provider = jump_provider
        self.open_file = open_file
        self.hint_alphabet = normalize_alphabet(hint_alphabet, hint_case_sensitive)
        self.hint_case_sensitive = hint_case_sensitive
        self.scroll_step = max(1, scroll_step)
        self.max_candidates = max(1, max_candidates)
        self.on_toggle_hidden = on_toggle_hidden
        self.clock = clock

        self.mode: Mode = NormalMode()
        self.show_help = False
        self.status_message = ""
        self.status_message_until = 0.0
        self.dirty = True

        self._normal_actions: dict[str, Callable[[], Outcome]] = {
            "scroll_down": lambda: self._move(self.scroll_step),
            "scroll_up": lambda: self._move(-self.scroll_step),
            "page_down": lambda: self._move(self._page_step()),
            "page_up": lambda: self._move(-self._page_step()),
            "top": lambda: self._move_to(0),
            "bottom": lambda: self._move_to(len(self.entries) - 1),
            "select_entry": self._select_entry,
            "ascend": self._ascend,
            "hint_mode": self._enter_hint_mode,
            "finder_search": self._enter_search_mode,
            "finder_jump": self._enter_jump_mode,
            "toggle_hidden": self._toggle_hidden,
            "toggle_help": self._toggle_help,
            "refresh": self._refresh,
            "exit": lambda: Outcome.QUIT,
        }

    # status row
    def set_status(self, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
        self.status_message = message
        self.status_message_until = self.clock() + seconds
        self.dirty = True

    def expire_status(self, now: float | None = None) -> bool:
        """Clear an elapsed status message; returns whether it was cleared."""
        if not self.status_message:
            return False
        current = self.clock() if now is None else now
        if current < self.status_message_until:
            return False
        self.status_message = ""
        self.status_message_until = 0.0
        self.dirty = True
        return True

    # dispatch
    def dispatch(self, event: BrowserEvent) -> Outcome:
        if isinstance(event, KeyPressed):
            outcome = self.handle_key(event.key)
        elif isinstance(event, CandidateBatch):
            outcome = self._merge_candidates(event)
        elif isinstance(event, ProviderFailed):
            outcome = self._provider_failed(event)
        else:
            outcome = Outcome.IGNORED
        if outcome is not Outcome.IGNORED:
            self.dirty = True
        return outcome

    def handle_key(self, key: str) -> Outcome:
        mode = self.mode
        if isinstance(mode, HintMode):
            return self._handle_hint_key(mode, key)
        if isinstance(mode, FinderMode):
            return self._handle_finder_key(mode, key)
        return self._handle_normal_key(key)

    def _enter(self, mode: Mode) -> None:
        logger.debug("mode %s -> %s", mode_name(self.mode), mode_name(mode))
        self.mode = mode
        self.dirty = True

    # normal mode
    def _handle_normal_key(self, key: str) -> Outcome:
        action = self.keymap.action_for(NORMAL, key)
        if action is None:
            return Outcome.IGNORED
        handler = self._normal_actions.get(action)
        if handler is None:
            return Outcome.IGNORED
        return handler()

    def _page_step(self) -> int:
        return max(1, self.entries.viewport_height - 1)

    def _move(self, delta: int) -> Outcome:
        return Outcome.HANDLED if self.entries.move_cursor(delta) else Outcome.IGNORED

    def _move_to(self, index: int) -> Outcome:
        return Outcome.HANDLED if self.entries.move_to(index) else Outcome.IGNORED

    def _select_entry(self) -> Outcome:
        if self.entries.selected_entry is None:
            return Outcome.IGNORED
        try:
            target = self.entries.enter_selected()
        except AccessError as exc:
            self.set_status(str(exc))
            return Outcome.HANDLED
        if target is None:
            return Outcome.HANDLED
        try:
            self.open_file(target)
        except LaunchError as exc:
            logger.warning("open failed for %s: %s", target, exc)
            self.set_status(str(exc))
        return Outcome.HANDLED

    def _ascend(self) -> Outcome:
        try:
            moved = self.entries.ascend()
        except AccessError as exc:
            self.set_status(str(exc))
            return Outcome.HANDLED
        return Outcome.HANDLED if moved else Outcome.IGNORED

    def _refresh(self) -> Outcome:
        try:
            self.entries.reload()
        except AccessError as exc:
            self.set_status(str(exc))
        return Outcome.HANDLED

    def _toggle_hidden(self) -> Outcome:
        show_hidden = not self.entries.show_hidden
        try:
            self.entries.set_show_hidden(show_hidden)
        except AccessError as exc:
            self.set_status(str(exc))
            return Outcome.HANDLED
        if self.on_toggle_hidden is not None:
            self.on_toggle_hidden(show_hidden)
        self.set_status("Hidden files shown" if show_hidden else "Hidden files hidden")
        return Outcome.HANDLED

    def _toggle_help(self) -> Outcome:
        self.show_help = not self.show_help
        return Outcome.HANDLED

    def _enter_hint_mode(self) -> Outcome:
        visible = self.entries.visible_entries()
        if not visible:
            self.set_status("Nothing to hint")
            return Outcome.HANDLED
        assignment = assign_hints(visible, self.hint_alphabet, self.hint_case_sensitive)
        self._enter(HintMode(assignment))
        return Outcome.HANDLED

    def _enter_search_mode(self) -> Outcome:
        root = self.entries.directory if self.entries.directory is not None else Path.cwd()
        mode = SearchMode(provider=self.search_provider(root), root=root)
        self._enter(mode)
        self._issue_query(mode)
        return Outcome.HANDLED

    def _enter_jump_mode(self) -> Outcome:
        mode = DirJumpMode(provider=self.jump_provider)
        self._enter(mode)
        self._issue_query(mode)
        return Outcome.HANDLED

    # search / jump overlays
    def _scheduler_for(self, mode: FinderMode) -> QueryScheduler:
        return self.search_scheduler if isinstance(mode, SearchMode) else self.jump_scheduler

    def _issue_query(self, mode: FinderMode) -> None:
        mode.candidates = []
        mode.selected = 0
        mode.error = ""
        mode.loading = True
        mode.generation = self._scheduler_for(mode).submit(mode.provider, mode.query)

    def _leave_finder(self, mode: FinderMode) -> None:
        self._scheduler_for(mode).cancel()
        self._enter(NormalMode())

    def _handle_finder_key(self, mode: FinderMode, key: str) -> Outcome:
        action = self.keymap.action_for(FINDER, key)
        if action is None:
            if not is_text_input_key(key):
                return Outcome.IGNORED
            mode.query += key
            self._issue_query(mode)
            return Outcome.HANDLED

        if action == "exit":
            self._leave_finder(mode)
            return Outcome.HANDLED
        if action == "backspace":
            if not mode.query:
                return Outcome.IGNORED
            mode.query = mode.query[:-1]
            self._issue_query(mode)
            return Outcome.HANDLED
        if action == "clear":
            if not mode.query:
                return Outcome.IGNORED
            mode.query = ""
            self._issue_query(mode)
            return Outcome.HANDLED
        if action in {"scroll_down", "scroll_up"}:
            if not mode.candidates:
                return Outcome.IGNORED
            delta = 1 if action == "scroll_down" else -1
            mode.selected = max(0, min(len(mode.candidates) - 1, mode.selected + delta))
            return Outcome.HANDLED
        if action == "select_entry":
            candidate = mode.selected_candidate
            if candidate is None:
                return Outcome.IGNORED
            return self._open_candidate(mode, candidate)
        return Outcome.IGNORED

    def _open_candidate(self, mode: FinderMode, candidate: Path) -> Outcome:
        """Load a candidate directory, or a file's parent with the file selected."""
        try:
            if candidate.is_dir():
                self.entries.load(candidate)
            else:
                self.entries.load(candidate.parent)
                directory = self.entries.directory
                if directory is not None:
                    self.entries.select_path(directory / candidate.name)
        except AccessError as exc:
            self.set_status(str(exc))
            return Outcome.HANDLED
        self._leave_finder(mode)
        return Outcome.HANDLED

    def _merge_candidates(self, event: CandidateBatch) -> Outcome:
        mode = self.mode
        if (
            not isinstance(mode, FinderMode)
            or mode.source != event.source
            or mode.generation != event.generation
        ):
            logger.debug("dropping stale %s batch #%d", event.source, event.generation)
            return Outcome.IGNORED
        room = self.max_candidates - len(mode.candidates)
        if room > 0 and event.paths:
            mode.candidates.extend(event.paths[:room])
        if event.done:
            mode.loading = False
        return Outcome.HANDLED

    def _provider_failed(self, event: ProviderFailed) -> Outcome:
        mode = self.mode
        if (
            not isinstance(mode, FinderMode)
            or mode.source != event.source
            or mode.generation != event.generation
        ):
            return Outcome.IGNORED
        mode.candidates = []
        mode.selected = 0
        mode.loading = False
        mode.error = event.message
        self.set_status(event.message)
        return Outcome.HANDLED

    # hint mode
    def _handle_hint_key(self, mode: HintMode, key: str) -> Outcome:
        action = self.keymap.action_for(HINT, key)
        if action == "exit":
            self._enter(NormalMode())
            return Outcome.HANDLED
        if action == "backspace":
            if not mode.buffer:
                return Outcome.IGNORED
            mode.buffer = mode.buffer[:-1]
            return Outcome.HANDLED
        if action is not None or not is_text_input_key(key):
            return Outcome.IGNORED

        buffer = mode.buffer + key
        resolution = mode.assignment.resolve(buffer)
        if resolution.match is HintMatch.COMPLETE and resolution.index is not None:
            entry = mode.assignment.entries[resolution.index]
            self.entries.select_path(entry.path)
            self._enter(NormalMode())
        elif resolution.match is HintMatch.PARTIAL:
            mode.buffer = buffer
        else:
            logger.debug("hint %r matches nothing, buffer reset", buffer)
            mode.buffer = ""
        return Outcome.HANDLED


__all__ = ["ModeController", "Outcome", "STATUS_MESSAGE_SECONDS"]
