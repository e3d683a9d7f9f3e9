"""Background search worker with a non-blocking poll contract.

Each ``start`` spawns one daemon thread that runs a full matching pass and
delivers exactly one message through a queue owned by the returned handle.
The coordinator keeps a single live slot: starting a new search cancels the
previous handle, whose worker then stops without producing a message.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from queue import Empty, Queue

from .engine import SearchCancelled, SearchResult, check_query_length, search_entries
from .query import SearchQuery

logger = logging.getLogger(__name__)

WAIT_POLL_SECONDS = 0.05


@dataclass(frozen=True)
class SearchPending:
    pass


@dataclass(frozen=True)
class SearchReady:
    results: list[SearchResult]


@dataclass(frozen=True)
class SearchFailed:
    message: str


SearchOutcome = SearchPending | SearchReady | SearchFailed

PENDING = SearchPending()


class SearchTimeout(Exception):
    """Raised by ``SearchCoordinator.wait`` when no message arrives in time."""


@dataclass(eq=False)
class SearchHandle:
    """Opaque token for one in-flight search invocation."""

    handle_id: int
    base_dir: Path
    query: SearchQuery
    result_cap: int
    _channel: Queue = field(default_factory=lambda: Queue(maxsize=1), repr=False)
    _cancel: threading.Event = field(default_factory=threading.Event, repr=False)
    _thread: threading.Thread | None = field(default=None, repr=False)
    _outcome: SearchReady | SearchFailed | None = field(default=None, repr=False)

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def done(self) -> bool:
        return self._outcome is not None


class SearchCoordinator:
    """Runs searches off the input thread, one live search at a time."""

    def __init__(self, search_fn: Callable[..., list[SearchResult]] = search_entries) -> None:
        self._search_fn = search_fn
        self._ids = itertools.count(1)
        self._current: SearchHandle | None = None

    @property
    def current(self) -> SearchHandle | None:
        return self._current

    def start(self, base_dir: Path, query: SearchQuery, result_cap: int) -> SearchHandle:
        """Begin a search and return its handle.

        Raises ``QueryTooLongError`` synchronously, before any walk starts.
        A worker that cannot be started yields a handle that polls as failed.
        """
        check_query_length(query)
        if self._current is not None:
            self.cancel(self._current)

        handle = SearchHandle(
            handle_id=next(self._ids),
            base_dir=Path(base_dir),
            query=query,
            result_cap=result_cap,
        )
        self._current = handle
        worker = threading.Thread(
            target=self._worker,
            args=(handle,),
            name=f"vfv-search-{handle.handle_id}",
            daemon=True,
        )
        handle._thread = worker
        try:
            worker.start()
        except RuntimeError as exc:
            logger.error("could not start search worker: %s", exc)
            handle._outcome = SearchFailed(f"Search failed to start: {exc}")
        return handle

    def _worker(self, handle: SearchHandle) -> None:
        started = time.monotonic()
        try:
            results = self._search_fn(
                handle.base_dir,
                handle.query,
                handle.result_cap,
                should_stop=handle._cancel.is_set,
            )
        except SearchCancelled:
            logger.debug("search %d abandoned", handle.handle_id)
            return
        except Exception as exc:
            logger.exception("search %d failed", handle.handle_id)
            handle._channel.put(SearchFailed(f"Search failed: {exc}"))
            return
        if handle.cancelled:
            return
        logger.debug(
            "search %d finished with %d results in %.3fs",
            handle.handle_id,
            len(results),
            time.monotonic() - started,
        )
        handle._channel.put(SearchReady(results=list(results)))

    def _receive(self, handle: SearchHandle) -> SearchReady | SearchFailed | None:
        try:
            message = handle._channel.get_nowait()
        except Empty:
            return None
        handle._outcome = message
        return message

    def poll(self, handle: SearchHandle) -> SearchOutcome:
        """Return the handle's terminal message, or ``PENDING``; never blocks."""
        if handle._outcome is not None:
            return handle._outcome
        if handle.cancelled:
            return SearchFailed("Search cancelled")
        message = self._receive(handle)
        if message is not None:
            return message
        worker = handle._thread
        if worker is not None and worker.is_alive():
            return PENDING
        # The worker may have delivered between the first read and the liveness check.
        message = self._receive(handle)
        if message is not None:
            return message
        handle._outcome = SearchFailed("Search worker exited unexpectedly")
        return handle._outcome

    def cancel(self, handle: SearchHandle) -> None:
        """Abandon ``handle``; any result it later produces is never read."""
        handle._cancel.set()
        if self._current is handle:
            self._current = None

    def wait(self, handle: SearchHandle, timeout: float | None = None) -> SearchReady | SearchFailed:
        """Block until ``handle`` finishes, raising ``SearchTimeout`` at the deadline.

        ``timeout=None`` waits without a deadline.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            outcome = self.poll(handle)
            if not isinstance(outcome, SearchPending):
                return outcome
            wait_for = WAIT_POLL_SECONDS
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self.cancel(handle)
                    raise SearchTimeout(f"search did not finish within {timeout:g}s")
                wait_for = min(wait_for, remaining)
            try:
                handle._outcome = handle._channel.get(timeout=wait_for)
            except Empty:
                continue
            return handle._outcome
