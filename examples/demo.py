"""Demo script for lifelapse."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from lifelapse.adapters.csv_adapter import parse
from lifelapse.explain import explain_event
from lifelapse.metrics import compute_metrics
from lifelapse.refresh import ScoreRefresher
from lifelapse.store import InMemoryEventStore
from lifelapse.timeline import most_significant


def main() -> None:
    store = InMemoryEventStore(parse(str(Path(__file__).with_name("sample_events.csv"))))
    events = ScoreRefresher(store).refresh()
    print("Metrics:", compute_metrics(events))
    for event in most_significant(events, 3):
        print(f"{event.significance:.4f}  {event.date:%Y-%m-%d}  {event.title}")
    print("Why:", explain_event(most_significant(events, 1)[0], events))


if __name__ == "__main__":
    main()
