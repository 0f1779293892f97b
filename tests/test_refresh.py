import threading
import time
from datetime import datetime, timedelta

from lifelapse.refresh import ScoreRefresher
from lifelapse.schema import Event, EventType
from lifelapse.store import InMemoryEventStore, StorageUnavailableError


def sample_store():
    start = datetime(2024, 1, 1)
    return InMemoryEventStore(
        [
            Event("a", start, EventType.RELATIONSHIP),
            Event("b", start + timedelta(days=30), EventType.PHOTO),
        ]
    )


class FlakyStore(InMemoryEventStore):
    fail_save = False

    def save(self, events):
        if self.fail_save:
            raise StorageUnavailableError("disk offline")
        super().save(events)


class SlowStore(InMemoryEventStore):
    """Records the highest number of overlapping fetch/save cycles."""

    def __init__(self, events):
        super().__init__(events)
        self.active = 0
        self.max_active = 0
        self.guard = threading.Lock()

    def fetch_all(self):
        with self.guard:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(0.01)
        return super().fetch_all()

    def save(self, events):
        super().save(events)
        if hasattr(self, "guard"):
            with self.guard:
                self.active -= 1


def test_refresh_persists_scores():
    store = sample_store()
    refresher = ScoreRefresher(store)
    events = refresher.refresh()

    assert len(events) == 2
    assert store.get("a").significance > store.get("b").significance > 0.0
    assert refresher.scores == {e.event_id: e.significance for e in events}


def test_refresh_empty_store():
    refresher = ScoreRefresher(InMemoryEventStore())
    assert refresher.refresh() == []
    assert refresher.scores == {}


def test_failed_save_keeps_previous_scores(caplog):
    store = FlakyStore(sample_store().fetch_all())
    refresher = ScoreRefresher(store)
    refresher.refresh()
    previous = refresher.scores

    store.add(Event("c", datetime(2023, 1, 1), EventType.JOB))
    store.fail_save = True
    assert refresher.refresh() is None
    assert refresher.scores == previous
    assert "keeping previous scores" in caplog.text


def test_concurrent_refreshes_do_not_interleave():
    store = SlowStore(sample_store().fetch_all())
    refresher = ScoreRefresher(store)
    threads = [threading.Thread(target=refresher.refresh) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.max_active == 1
    assert store.active == 0
