"""Serialized fetch -> recompute -> save cycle."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from lifelapse.schema import Event
from lifelapse.significance import DEFAULT_COEFFICIENTS, Coefficients, recompute
from lifelapse.store import EventStore, StorageError

logger = logging.getLogger(__name__)


class ScoreRefresher:
    """Runs at most one recompute-and-persist cycle at a time against a store.

    ``scores`` holds the last successfully persisted significance per event
    id. A failed cycle leaves it untouched.
    """

    def __init__(self, store: EventStore, coefficients: Coefficients = DEFAULT_COEFFICIENTS):
        self.store = store
        self.coefficients = coefficients
        self._lock = threading.Lock()
        self._scores: dict[str, float] = {}

    @property
    def scores(self) -> dict[str, float]:
        return dict(self._scores)

    def refresh(self) -> Optional[list[Event]]:
        """Recompute every stored event's significance and persist it.

        Returns the refreshed events, or None when the store failed.
        """

        with self._lock:
            try:
                events = self.store.fetch_all()
                recompute(events, self.coefficients)
                self.store.save(events)
            except StorageError as exc:
                logger.error("Significance refresh failed, keeping previous scores: %s", exc)
                return None

            self._scores = {event.event_id: event.significance for event in events}
            logger.info("Refreshed significance for %d events", len(events))
            return events
