"""CSV adapter for life events."""

from __future__ import annotations

import csv
from datetime import datetime

from lifelapse.schema import Event, new_event

_REQUIRED_FIELDS = {"date", "type"}
_TRUE_VALUES = {"1", "true", "yes", "y"}


def _optional_float(row: dict, field: str, row_number: int):
    raw = row.get(field)
    if raw in (None, ""):
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: invalid {field}") from exc


def _parse_row(row: dict, row_number: int) -> Event:
    missing = sorted(field for field in _REQUIRED_FIELDS if not row.get(field))
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    try:
        date = datetime.fromisoformat(row["date"].strip())
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: malformed date") from exc

    latitude = _optional_float(row, "latitude", row_number)
    longitude = _optional_float(row, "longitude", row_number)
    user_weight = _optional_float(row, "user_weight", row_number)

    engagement_raw = (row.get("engagement") or "").strip()
    try:
        engagement = int(engagement_raw) if engagement_raw else 0
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: invalid engagement") from exc

    coordinate = (latitude, longitude) if latitude is not None and longitude is not None else None

    try:
        return new_event(
            date=date,
            type=row["type"],
            title=(row.get("title") or "").strip(),
            subtitle=(row.get("subtitle") or "").strip() or None,
            coordinate=coordinate,
            user_weight=user_weight or 0.0,
            engagement=engagement,
            favorite=(row.get("favorite") or "").strip().lower() in _TRUE_VALUES,
            asset_local_id=(row.get("asset_local_id") or "").strip() or None,
            event_id=(row.get("event_id") or "").strip() or None,
        )
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: {exc}") from exc


def parse(file_path: str) -> list[Event]:
    """Parse CSV file into a list of events."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        events: list[Event] = []
        for row_number, row in enumerate(reader, start=2):
            events.append(_parse_row(row, row_number))
        return events
