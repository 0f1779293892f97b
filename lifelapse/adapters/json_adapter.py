"""JSON adapter for life events and photo asset manifests."""

from __future__ import annotations

import json
import math
from datetime import datetime

from lifelapse.photo_import import PhotoAsset
from lifelapse.schema import Event, new_event

_REQUIRED_FIELDS = {"date", "type"}
_TRUE_VALUES = {"1", "true", "yes", "y"}
_FALSE_VALUES = {"", "0", "false", "no", "n"}


def _parse_date(value, label: str) -> datetime:
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"{label}: malformed date") from exc


def _parse_flag(value, name: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE_VALUES | _FALSE_VALUES:
        return value.strip().lower() in _TRUE_VALUES
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"invalid {name} {value!r}")


def _optional_float(value, name: str):
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"invalid {name} {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return number


def _parse_item(item: dict, index: int, keep_significance: bool = False) -> Event:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")

    missing = sorted(field for field in _REQUIRED_FIELDS if not item.get(field))
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    date = _parse_date(item["date"], f"Item {index}")

    coordinate = None
    if item.get("latitude") is not None and item.get("longitude") is not None:
        coordinate = (item["latitude"], item["longitude"])

    try:
        event = new_event(
            date=date,
            type=item["type"],
            title=str(item.get("title") or ""),
            subtitle=item.get("subtitle"),
            coordinate=coordinate,
            user_weight=item.get("user_weight", 0.0),
            engagement=item.get("engagement", 0),
            favorite=_parse_flag(item.get("favorite"), "favorite"),
            asset_local_id=item.get("asset_local_id"),
            event_id=item.get("event_id"),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Item {index}: {exc}") from exc

    if keep_significance:
        try:
            event.significance = float(item.get("significance", 0.0))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Item {index}: invalid significance") from exc
    return event


def load_events(payload, keep_significance: bool = False) -> list[Event]:
    """Build events from an already-decoded JSON payload."""

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i, keep_significance) for i, item in enumerate(payload, start=1)]


def parse(file_path: str) -> list[Event]:
    """Parse JSON file into events with unset significance."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    return load_events(payload)


def event_to_dict(event: Event) -> dict:
    return {
        "event_id": event.event_id,
        "date": event.date.isoformat(),
        "type": event.type.value,
        "title": event.title,
        "subtitle": event.subtitle,
        "latitude": event.latitude,
        "longitude": event.longitude,
        "user_weight": event.user_weight,
        "engagement": event.engagement,
        "favorite": event.favorite,
        "asset_local_id": event.asset_local_id,
        "significance": event.significance,
    }


def dump(events: list[Event]) -> str:
    """Serialize events to a JSON document."""

    return json.dumps([event_to_dict(event) for event in events], indent=2)


def _parse_asset(item: dict, index: int) -> PhotoAsset:
    if not isinstance(item, dict) or not item.get("local_id"):
        raise ValueError(f"Asset {index}: missing local_id")

    created = item.get("creation_date")
    try:
        return PhotoAsset(
            local_id=str(item["local_id"]),
            creation_date=_parse_date(created, f"Asset {index}") if created else None,
            latitude=_optional_float(item.get("latitude"), "latitude"),
            longitude=_optional_float(item.get("longitude"), "longitude"),
            favorite=_parse_flag(item.get("favorite"), "favorite"),
            subtypes=frozenset(item.get("subtypes") or ()),
            represents_burst=_parse_flag(item.get("represents_burst"), "represents_burst"),
            pixel_width=int(item.get("pixel_width", 0)),
            pixel_height=int(item.get("pixel_height", 0)),
            original_filename=item.get("original_filename"),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Asset {index}: {exc}") from exc


def parse_assets(file_path: str) -> list[PhotoAsset]:
    """Parse a photo asset manifest (a JSON list of asset metadata objects)."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_asset(item, i) for i, item in enumerate(payload, start=1)]
