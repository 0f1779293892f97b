from datetime import datetime, timedelta, timezone

import pytest

from lifelapse.schema import EventType, new_event, parse_event_type


def test_default_weights():
    assert EventType.RELATIONSHIP.default_weight == 0.95
    assert EventType.PROJECT.default_weight == 0.88
    assert EventType.PHOTO.default_weight == 0.40
    assert all(0.0 <= t.default_weight <= 1.0 for t in EventType)


def test_parse_event_type_accepts_names():
    assert parse_event_type(" Residence ") is EventType.RESIDENCE
    assert parse_event_type(EventType.JOB) is EventType.JOB
    with pytest.raises(ValueError):
        parse_event_type("holiday")


def test_new_event_defaults():
    event = new_event(datetime(2024, 5, 1), "micro", title="Coffee", coordinate=(41.1, -8.6))
    assert event.significance == 0.0
    assert len(event.event_id) == 32
    assert event.coordinate == (41.1, -8.6)
    assert new_event(datetime(2024, 5, 1), "micro").coordinate is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"user_weight": float("nan")},
        {"user_weight": 1.5},
        {"engagement": -1},
        {"engagement": 1.5},
        {"coordinate": (float("inf"), 0.0)},
    ],
)
def test_new_event_rejects_malformed_fields(kwargs):
    with pytest.raises(ValueError):
        new_event(datetime(2024, 5, 1), "photo", **kwargs)


def test_new_event_normalizes_aware_dates_to_naive_utc():
    aware = new_event(datetime(2024, 5, 1, 12, tzinfo=timezone(timedelta(hours=-5))), "job")
    naive = new_event(datetime(2024, 5, 1, 12), "job")
    assert aware.date == datetime(2024, 5, 1, 17)
    assert aware.date.tzinfo is None
    assert naive.date == datetime(2024, 5, 1, 12)
    with pytest.raises(ValueError):
        new_event("2024-05-01", "job")
