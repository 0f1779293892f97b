"""Score explainability helpers."""

from __future__ import annotations

import numpy as np

from lifelapse.schema import Event
from lifelapse.significance import DEFAULT_COEFFICIENTS, Coefficients, score_components, sort_key

FEATURE_NAMES = ["weight", "engagement", "recency", "favorite"]


def contribution_table(
    events: list[Event], coefficients: Coefficients = DEFAULT_COEFFICIENTS
) -> tuple[np.ndarray, list[str]]:
    """Per-event weighted term contributions, one row per event in input order."""

    if not events:
        return np.empty((0, len(FEATURE_NAMES))), list(FEATURE_NAMES)

    min_date = min(events, key=sort_key).date
    rows = []
    for event in events:
        components = score_components(event, min_date, coefficients)
        rows.append([components[name] for name in FEATURE_NAMES])
    return np.asarray(rows, dtype=float), list(FEATURE_NAMES)


def explain_event(
    event: Event, events: list[Event], coefficients: Coefficients = DEFAULT_COEFFICIENTS
) -> dict:
    """Rank the terms behind one event's score by absolute contribution."""

    table, names = contribution_table(events, coefficients)
    index = next((i for i, candidate in enumerate(events) if candidate.event_id == event.event_id), None)
    if index is None:
        raise ValueError(f"event {event.event_id} is not part of the scored set")
    values = table[index]
    order = np.argsort(-np.abs(values), kind="stable")

    return {
        "event_id": event.event_id,
        "raw": float(values.sum()),
        "top_features": [{"feature": names[i], "contribution": float(values[i])} for i in order],
    }
