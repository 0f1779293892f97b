"""Event persistence: store interface plus in-memory and JSON file backends."""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from lifelapse.adapters import json_adapter
from lifelapse.schema import Event

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for persistence failures."""


class StorageUnavailableError(StorageError):
    """The backing storage could not be read or written."""


class StorageSerializationError(StorageError):
    """Persisted data could not be encoded or decoded."""


class EventStore(ABC):
    """Persistence boundary for events.

    Subclasses implement ``fetch_all`` and ``save``; CRUD helpers are built
    on top of those two and persist on every call.
    """

    @abstractmethod
    def fetch_all(self) -> list[Event]:
        """Return every persisted event, in no particular order."""

    @abstractmethod
    def save(self, events: Sequence[Event]) -> None:
        """Persist the given events atomically, replacing stored ones with the same id."""

    def get(self, event_id: str) -> Optional[Event]:
        for event in self.fetch_all():
            if event.event_id == event_id:
                return event
        return None

    def add(self, event: Event) -> None:
        self.save([event])

    def update(self, event: Event) -> None:
        if self.get(event.event_id) is None:
            raise KeyError(event.event_id)
        self.save([event])

    @abstractmethod
    def delete(self, event_id: str) -> None:
        """Remove an event so it takes no part in future scoring."""

    def fetch_in_range(self, start: datetime, end: datetime) -> list[Event]:
        events = [event for event in self.fetch_all() if start <= event.date <= end]
        return sorted(events, key=lambda e: e.date)


class InMemoryEventStore(EventStore):
    """Dict-backed store that hands out copies, so callers never alias stored rows."""

    def __init__(self, events: Sequence[Event] = ()):
        self._events: dict[str, Event] = {}
        if events:
            self.save(events)

    def fetch_all(self) -> list[Event]:
        return [copy.copy(event) for event in self._events.values()]

    def save(self, events: Sequence[Event]) -> None:
        updated = dict(self._events)
        for event in events:
            updated[event.event_id] = copy.copy(event)
        self._events = updated

    def delete(self, event_id: str) -> None:
        if event_id not in self._events:
            raise KeyError(event_id)
        updated = dict(self._events)
        del updated[event_id]
        self._events = updated


class JsonFileEventStore(EventStore):
    """Store backed by a single JSON document on disk."""

    def __init__(self, path):
        self.path = Path(path)

    def _read(self) -> dict[str, Event]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageUnavailableError(f"cannot read {self.path}: {exc}") from exc

        try:
            events = json_adapter.load_events(json.loads(text), keep_significance=True)
        except ValueError as exc:
            raise StorageSerializationError(f"corrupt event store {self.path}: {exc}") from exc
        return {event.event_id: event for event in events}

    def _write(self, events: dict[str, Event]) -> None:
        ordered = sorted(events.values(), key=lambda e: (e.date, e.event_id))
        try:
            payload = json_adapter.dump(ordered)
        except (TypeError, ValueError) as exc:
            raise StorageSerializationError(f"cannot encode events: {exc}") from exc

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(temp_path, self.path)
            except BaseException:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise
        except OSError as exc:
            raise StorageUnavailableError(f"cannot write {self.path}: {exc}") from exc

        logger.debug("Wrote %d events to %s", len(ordered), self.path)

    def fetch_all(self) -> list[Event]:
        return list(self._read().values())

    def save(self, events: Sequence[Event]) -> None:
        stored = self._read()
        for event in events:
            stored[event.event_id] = event
        self._write(stored)

    def delete(self, event_id: str) -> None:
        stored = self._read()
        if event_id not in stored:
            raise KeyError(event_id)
        del stored[event_id]
        self._write(stored)
