"""Timeline queries and playback position."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from lifelapse.schema import Event
from lifelapse.significance import sort_key

Span = tuple[datetime, datetime]


def timeline_span(events: Sequence[Event]) -> Optional[Span]:
    if not events:
        return None
    dates = [event.date for event in events]
    return min(dates), max(dates)


def events_in_range(events: Sequence[Event], start: datetime, end: datetime) -> list[Event]:
    """Events dated within ``[start, end]``, oldest first."""

    return sorted((e for e in events if start <= e.date <= end), key=sort_key)


def most_significant(events: Sequence[Event], limit: Optional[int] = None) -> list[Event]:
    ranked = sorted(events, key=sort_key)
    ranked.sort(key=lambda e: e.significance, reverse=True)
    return ranked if limit is None else ranked[:limit]


@dataclass
class Playhead:
    """Playback cursor that sweeps the timeline at ``speed_days`` days per second."""

    position: datetime
    speed_days: float = 7.0
    playing: bool = False

    def seek(self, date: datetime, span: Span) -> datetime:
        start, end = span
        self.position = max(start, min(end, date))
        return self.position

    def toggle(self) -> bool:
        self.playing = not self.playing
        return self.playing

    def advance(self, elapsed_seconds: float, span: Span) -> datetime:
        """Move forward; running off the end rewinds to the start and stops."""

        if not self.playing:
            return self.position

        start, end = span
        target = self.position + timedelta(days=self.speed_days * elapsed_seconds)
        if target > end:
            self.position = start
            self.playing = False
        else:
            self.position = target
        return self.position
