"""Significance summary metrics."""

from __future__ import annotations

from collections import Counter

import numpy as np

from lifelapse.schema import Event


def compute_metrics(events: list[Event]) -> dict:
    """Compute count, significance distribution, favorite share and type mix."""

    if not events:
        return {
            "total_events": 0,
            "mean_significance": 0.0,
            "median_significance": 0.0,
            "p90_significance": 0.0,
            "favorite_share": 0.0,
            "by_type": {},
        }

    scores = np.asarray([event.significance for event in events], dtype=float)
    by_type = Counter(event.type.value for event in events)

    return {
        "total_events": len(events),
        "mean_significance": float(np.mean(scores)),
        "median_significance": float(np.median(scores)),
        "p90_significance": float(np.percentile(scores, 90)),
        "favorite_share": sum(1 for event in events if event.favorite) / len(events),
        "by_type": dict(sorted(by_type.items())),
    }
