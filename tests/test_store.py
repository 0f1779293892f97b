from datetime import datetime

import pytest

from lifelapse.schema import Event, EventType
from lifelapse.store import (
    InMemoryEventStore,
    JsonFileEventStore,
    StorageSerializationError,
    StorageUnavailableError,
)


def sample_events():
    return [
        Event("a", datetime(2024, 1, 1), EventType.JOB, title="Job"),
        Event("b", datetime(2024, 3, 1), EventType.PHOTO, title="Photo"),
        Event("c", datetime(2024, 6, 1), EventType.RESIDENCE, title="Move"),
    ]


def test_in_memory_crud():
    store = InMemoryEventStore(sample_events())
    assert {e.event_id for e in store.fetch_all()} == {"a", "b", "c"}

    event = store.get("b")
    event.title = "Edited"
    assert store.get("b").title == "Photo"
    store.update(event)
    assert store.get("b").title == "Edited"

    store.delete("a")
    assert store.get("a") is None
    with pytest.raises(KeyError):
        store.delete("a")
    with pytest.raises(KeyError):
        store.update(Event("zz", datetime(2024, 1, 1), EventType.MICRO))


def test_fetch_in_range_is_inclusive_and_sorted():
    store = InMemoryEventStore(list(reversed(sample_events())))
    result = store.fetch_in_range(datetime(2024, 1, 1), datetime(2024, 3, 1))
    assert [e.event_id for e in result] == ["a", "b"]


def test_json_store_round_trip(tmp_path):
    path = tmp_path / "data" / "events.json"
    store = JsonFileEventStore(path)
    assert store.fetch_all() == []

    events = sample_events()
    events[0].significance = 0.9
    store.save(events)
    store.add(Event("d", datetime(2024, 9, 1), EventType.MICRO))

    reopened = JsonFileEventStore(path)
    assert reopened.get("a").significance == 0.9
    assert len(reopened.fetch_all()) == 4

    reopened.delete("d")
    assert reopened.get("d") is None
    assert not list(path.parent.glob("*.tmp"))


def test_json_store_corrupt_file(tmp_path):
    path = tmp_path / "events.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageSerializationError):
        JsonFileEventStore(path).fetch_all()

    path.write_text('[{"date": "2024-01-01"}]', encoding="utf-8")
    with pytest.raises(StorageSerializationError):
        JsonFileEventStore(path).fetch_all()


def test_json_store_unreadable_path(tmp_path):
    with pytest.raises(StorageUnavailableError):
        JsonFileEventStore(tmp_path).fetch_all()
