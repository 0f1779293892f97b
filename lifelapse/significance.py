"""Logistic significance scoring over the full event set."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from math import exp, log1p
from typing import Sequence

from lifelapse.schema import Event

_SECONDS_PER_DAY = 86_400.0


@dataclass(frozen=True)
class Coefficients:
    """Linear coefficients fed into the logistic squash."""

    alpha: float = 4.2
    engagement: float = 0.07
    recency: float = 1.3
    favorite: float = 2.0


DEFAULT_COEFFICIENTS = Coefficients()


def _sigmoid(value: float) -> float:
    return 1.0 / (1.0 + exp(-value))


def sort_key(event: Event):
    return (event.date, event.event_id)


def gap_days(event: Event, min_date: datetime) -> float:
    """Days since the earliest event, floored at one."""

    return max(1.0, (event.date - min_date).total_seconds() / _SECONDS_PER_DAY)


def score_components(
    event: Event, min_date: datetime, coefficients: Coefficients = DEFAULT_COEFFICIENTS
) -> dict:
    """Break an event's score into its weighted terms."""

    weight = coefficients.alpha * (event.type.default_weight + event.user_weight)
    engagement = coefficients.engagement * log1p(event.engagement)
    recency = coefficients.recency / gap_days(event, min_date)
    favorite = coefficients.favorite * (1.0 if event.favorite else 0.0)

    raw = weight + engagement + recency + favorite
    return {
        "weight": weight,
        "engagement": engagement,
        "recency": recency,
        "favorite": favorite,
        "raw": raw,
        "score": max(0.0, min(1.0, _sigmoid(raw))),
    }


def recompute(events: Sequence[Event], coefficients: Coefficients = DEFAULT_COEFFICIENTS) -> list[Event]:
    """Overwrite ``significance`` on every event and return them in input order."""

    if not events:
        return list(events)

    ordered = sorted(events, key=sort_key)
    min_date = ordered[0].date
    for event in ordered:
        event.significance = score_components(event, min_date, coefficients)["score"]

    return list(events)
