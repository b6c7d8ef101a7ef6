"""Background query runner with latest-query-wins semantics.

Every submitted query gets a fresh generation number, a cancel flag, and
its own daemon worker. Submitting again (or cancelling) sets the previous
flag; the provider checks it while it scans, so abandoned work stops even
when it has no more matches to report. Each candidate is posted as soon
as it arrives, tagged with its generation; the dispatcher drops any batch
whose generation is no longer the active one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from ..errors import ProviderError
from ..events import BrowserEvent, CandidateBatch, ProviderFailed
from .base import CandidateProvider

logger = logging.getLogger(__name__)


class QueryScheduler:
    """Run provider queries off the input thread for one overlay source."""

    def __init__(
        self,
        source: str,
        post: Callable[[BrowserEvent], None],
        *,
        max_candidates: int = 1_000,
    ) -> None:
        self.source = source
        self._post = post
        self._max_candidates = max(1, max_candidates)
        self._lock = threading.Lock()
        self._generation = 0
        self._cancel_event: threading.Event | None = None

    def submit(self, provider: CandidateProvider, text: str) -> int:
        """Start ``provider.query(text)`` in the background, superseding any prior query."""
        with self._lock:
            if self._cancel_event is not None:
                self._cancel_event.set()
            self._generation += 1
            generation = self._generation
            cancel_event = threading.Event()
            self._cancel_event = cancel_event

        logger.debug("%s query #%d: %r", self.source, generation, text)
        worker = threading.Thread(
            target=self._worker,
            args=(provider, text, generation, cancel_event),
            name=f"thunars-{self.source}-query",
            daemon=True,
        )
        worker.start()
        return generation

    def cancel(self) -> None:
        """Abandon the in-flight query, if any."""
        with self._lock:
            if self._cancel_event is not None:
                logger.debug("%s query #%d cancelled", self.source, self._generation)
                self._cancel_event.set()
                self._cancel_event = None

    def _worker(
        self,
        provider: CandidateProvider,
        text: str,
        generation: int,
        cancel_event: threading.Event,
    ) -> None:
        produced = 0
        iterator = None
        try:
            iterator = iter(provider.query(text, cancel_event))
            for path in iterator:
                if cancel_event.is_set():
                    return
                self._post(CandidateBatch(self.source, generation, (Path(path),)))
                produced += 1
                if produced >= self._max_candidates:
                    break
        except ProviderError as exc:
            logger.warning("%s provider failed: %s", self.source, exc)
            if not cancel_event.is_set():
                self._post(ProviderFailed(self.source, generation, str(exc)))
            return
        except Exception as exc:
            logger.exception("%s provider crashed", self.source)
            if not cancel_event.is_set():
                self._post(ProviderFailed(self.source, generation, f"{self.source} failed: {exc}"))
            return
        finally:
            close = getattr(iterator, "close", None) if iterator is not None else None
            if close is not None:
                close()

        if cancel_event.is_set():
            logger.debug("%s query #%d stopped after %d candidates", self.source, generation, produced)
            return
        self._post(CandidateBatch(self.source, generation, (), done=True))


__all__ = ["QueryScheduler"]
