"""Lookup session: load once, then answer searches and wilaya selections.

A session mirrors one user interaction context (one open page):

    loading --load ok--> ready
    loading --load failed--> error   (terminal; a new session retries)

All state lives in an immutable `SessionState` that is *replaced* on every
event, never mutated. Queries issued before the session is ready, or after it
failed, are no-ops that return an empty result.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Awaitable, Callable

from .desks import DeskDirectory, DeskRecord
from .errors import DatasetLoadError
from .gazetteer import CommuneIndex
from .matcher import DEFAULT_LIMIT, DEFAULT_THRESHOLD, CommuneMatcher, MatchResult

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load data. Please try again later."

DatasetLoader = Callable[[], Awaitable[tuple[CommuneIndex, DeskDirectory]]]


@dataclass(frozen=True)
class SessionState:
    status: str = "loading"  # loading|ready|error
    error: str | None = None
    matcher: CommuneMatcher | None = None
    desks: DeskDirectory | None = None
    last_query: str = ""
    results: tuple[MatchResult, ...] = ()
    query_id: int = 0
    selected_wilaya: str | None = None

    @property
    def ready(self) -> bool:
        return self.status == "ready"


class LookupSession:
    """Holds the current SessionState for one interaction context."""

    def __init__(
        self,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
    ):
        self.threshold = threshold
        self.limit = limit
        self.state = SessionState()
        self._load_started = False
        # Guards read-modify-write of `state`; API handlers share one session
        # across threadpool workers.
        self._lock = threading.Lock()

    async def load(self, loader: DatasetLoader) -> SessionState:
        """Load the datasets. Only the first call does any work."""
        if self._load_started:
            return self.state
        self._load_started = True

        try:
            communes, desks = await loader()
        except DatasetLoadError as e:
            logger.error("Error loading datasets: %s", e)
            with self._lock:
                self.state = replace(self.state, status="error", error=LOAD_ERROR_MESSAGE)
            return self.state

        matcher = CommuneMatcher(communes, threshold=self.threshold, limit=self.limit)
        with self._lock:
            self.state = replace(self.state, status="ready", matcher=matcher, desks=desks)
        logger.info(
            "Session ready: %d searchable communes, %d wilayas with desks",
            len(matcher),
            len(desks),
        )
        return self.state

    def begin_query(self, text: str) -> int:
        """Register `text` as the latest query and return its id.

        Use together with `submit` when a query runs deferred/in parallel.
        """
        with self._lock:
            query_id = self.state.query_id + 1
            self.state = replace(self.state, last_query=text, query_id=query_id)
        return query_id

    def submit(self, query_id: int, results: list[MatchResult]) -> bool:
        """Apply results for `query_id` unless a newer query has been issued."""
        with self._lock:
            if query_id != self.state.query_id:
                logger.debug("Dropping stale results for query #%d", query_id)
                return False
            self.state = replace(self.state, results=tuple(results))
        return True

    def search(self, text: str) -> tuple[MatchResult, ...]:
        """Run a commune search and record it as the latest query.

        Returns `()` without touching state unless the session is ready.
        """
        if not self.state.ready or self.state.matcher is None:
            return ()

        matcher = self.state.matcher
        query_id = self.begin_query(text)
        results = tuple(matcher.search(text))
        self.submit(query_id, list(results))
        return results

    def select_wilaya(self, key: str | None) -> tuple[DeskRecord, ...]:
        """Select a wilaya and return its desks (`()` if unknown or not ready)."""
        if not self.state.ready or self.state.desks is None:
            return ()

        desks = self.state.desks
        with self._lock:
            self.state = replace(self.state, selected_wilaya=key)
        if key is None:
            return ()
        return desks.desks_for(key)
