from datetime import datetime

import pytest

from lifelapse.metrics import compute_metrics
from lifelapse.schema import Event, EventType


def test_empty_metrics():
    assert compute_metrics([])["total_events"] == 0


def test_metrics_summary():
    events = [
        Event("a", datetime(2024, 1, 1), EventType.JOB, favorite=True, significance=0.9),
        Event("b", datetime(2024, 2, 1), EventType.PHOTO, significance=0.5),
        Event("c", datetime(2024, 3, 1), EventType.PHOTO, significance=0.7),
        Event("d", datetime(2024, 4, 1), EventType.MICRO, significance=0.3),
    ]
    metrics = compute_metrics(events)
    assert metrics["total_events"] == 4
    assert metrics["mean_significance"] == pytest.approx(0.6)
    assert metrics["median_significance"] == pytest.approx(0.6)
    assert 0.7 <= metrics["p90_significance"] <= 0.9
    assert metrics["favorite_share"] == 0.25
    assert metrics["by_type"] == {"job": 1, "micro": 1, "photo": 2}
