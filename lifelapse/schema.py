"""Core data schema for life events."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class EventType(str, Enum):
    """Fixed event categories."""

    RESIDENCE = "residence"
    JOB = "job"
    EDUCATION = "education"
    VACATION = "vacation"
    PHOTO = "photo"
    FITNESS = "fitness"
    FINANCE = "finance"
    RELATIONSHIP = "relationship"
    MEDICAL = "medical"
    CULTURAL = "cultural"
    MICRO = "micro"
    PROJECT = "project"

    @property
    def default_weight(self) -> float:
        return _DEFAULT_WEIGHTS[self]


_DEFAULT_WEIGHTS = {
    EventType.RESIDENCE: 0.90,
    EventType.JOB: 0.85,
    EventType.EDUCATION: 0.75,
    EventType.VACATION: 0.70,
    EventType.PHOTO: 0.40,
    EventType.FITNESS: 0.55,
    EventType.FINANCE: 0.60,
    EventType.RELATIONSHIP: 0.95,
    EventType.MEDICAL: 0.80,
    EventType.CULTURAL: 0.45,
    EventType.MICRO: 0.50,
    EventType.PROJECT: 0.88,
}


@dataclass
class Event:
    """A single timestamped life event."""

    event_id: str
    date: datetime
    type: EventType
    title: str = ""
    subtitle: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    user_weight: float = 0.0
    engagement: int = 0
    favorite: bool = False
    asset_local_id: Optional[str] = None
    significance: float = 0.0

    @property
    def coordinate(self) -> Optional[tuple[float, float]]:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)


def parse_event_type(value) -> EventType:
    """Resolve an EventType from an enum member or its name."""

    if isinstance(value, EventType):
        return value
    try:
        return EventType(str(value).strip().lower())
    except ValueError as exc:
        raise ValueError(f"unknown event type '{value}'") from exc


def normalize_date(value: datetime) -> datetime:
    """Return ``value`` as a naive UTC datetime so all event dates compare."""

    if not isinstance(value, datetime):
        raise ValueError(f"date must be a datetime, got {value!r}")
    if value.tzinfo is not None and value.utcoffset() is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _finite(name: str, value) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return number


def new_event(
    date: datetime,
    type,
    title: str = "",
    subtitle: Optional[str] = None,
    coordinate: Optional[tuple[float, float]] = None,
    user_weight: float = 0.0,
    engagement: int = 0,
    favorite: bool = False,
    asset_local_id: Optional[str] = None,
    event_id: Optional[str] = None,
) -> Event:
    """Create a validated event with an unset significance.

    Malformed numeric fields are rejected here so that scoring only ever
    sees well-formed events.
    """

    weight = _finite("user_weight", user_weight)
    if not 0.0 <= weight <= 1.0:
        raise ValueError(f"user_weight must be within [0, 1], got {weight}")

    if isinstance(engagement, bool) or int(engagement) != engagement:
        raise ValueError(f"engagement must be an integer, got {engagement!r}")
    if engagement < 0:
        raise ValueError(f"engagement must be non-negative, got {engagement}")

    latitude = longitude = None
    if coordinate is not None:
        latitude = _finite("latitude", coordinate[0])
        longitude = _finite("longitude", coordinate[1])

    return Event(
        event_id=event_id or uuid.uuid4().hex,
        date=normalize_date(date),
        type=parse_event_type(type),
        title=title,
        subtitle=subtitle,
        latitude=latitude,
        longitude=longitude,
        user_weight=weight,
        engagement=int(engagement),
        favorite=bool(favorite),
        asset_local_id=asset_local_id,
        significance=0.0,
    )
