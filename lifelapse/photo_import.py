"""Turn photo asset metadata into timeline events."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from lifelapse.dedup import ImportedAssetSet
from lifelapse.schema import Event, EventType, new_event, normalize_date

logger = logging.getLogger(__name__)

SCREENSHOT = "screenshot"
PANORAMA = "panorama"
DEPTH_EFFECT = "depth_effect"
LIVE = "live"
HDR = "hdr"


@dataclass
class PhotoAsset:
    """Metadata extracted from a photo library asset."""

    local_id: str
    creation_date: Optional[datetime]
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    favorite: bool = False
    subtypes: frozenset = field(default_factory=frozenset)
    represents_burst: bool = False
    pixel_width: int = 0
    pixel_height: int = 0
    original_filename: Optional[str] = None

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass
class ImportReport:
    total: int = 0
    imported: int = 0
    skipped: int = 0


def event_type_for(asset: PhotoAsset) -> EventType:
    if SCREENSHOT in asset.subtypes or asset.represents_burst:
        return EventType.MICRO
    return EventType.PHOTO


def photo_weight(asset: PhotoAsset) -> float:
    """User weight for an imported photo, clamped to [0, 1]."""

    weight = 0.3
    if asset.favorite:
        weight += 0.4
    if PANORAMA in asset.subtypes or DEPTH_EFFECT in asset.subtypes:
        weight += 0.2
    if SCREENSHOT in asset.subtypes:
        weight -= 0.2
    if asset.represents_burst:
        weight -= 0.1
    if asset.has_location:
        weight += 0.1
    return max(0.0, min(1.0, weight))


def _by_hour(hour: int, slots: list[tuple[int, int, str]], fallback: str) -> str:
    for start, end, label in slots:
        if start <= hour < end:
            return label
    return fallback


_WEEKEND_SLOTS = [
    (6, 10, "Weekend Morning Adventure"),
    (10, 14, "Weekend Outing"),
    (14, 18, "Weekend Afternoon"),
    (18, 22, "Weekend Evening"),
]
_TRAVEL_SLOTS = [
    (6, 10, "Morning Journey"),
    (10, 14, "Midday Adventure"),
    (14, 18, "Afternoon Exploration"),
    (18, 22, "Evening Out"),
]
_DAY_SLOTS = [
    (5, 10, "Morning Moment"),
    (10, 12, "Late Morning"),
    (12, 14, "Midday Capture"),
    (14, 17, "Afternoon Photo"),
    (17, 20, "Evening Light"),
    (20, 22, "Evening Moment"),
]

_SUBTYPE_TITLES = [
    (SCREENSHOT, "Screenshot"),
    (PANORAMA, "Panoramic View"),
    (DEPTH_EFFECT, "Portrait Photo"),
    (LIVE, "Live Photo"),
    (HDR, "HDR Photo"),
]


def photo_title(asset: PhotoAsset) -> str:
    if asset.represents_burst:
        return "Burst Photo Series"
    for subtype, title in _SUBTYPE_TITLES:
        if subtype in asset.subtypes:
            return title
    if asset.favorite:
        return "Favorite Memory"

    created = asset.creation_date or datetime.now()
    hour = created.hour
    if asset.has_location and created.weekday() >= 5:
        return _by_hour(hour, _WEEKEND_SLOTS, "Weekend Night")
    if asset.has_location:
        return _by_hour(hour, _TRAVEL_SLOTS, "Night Adventure")
    return _by_hour(hour, _DAY_SLOTS, "Night Photo")


def photo_subtitle(asset: PhotoAsset) -> Optional[str]:
    created = asset.creation_date or datetime.now()
    parts = [created.strftime("%b %d, %Y at %I:%M %p")]

    if asset.has_location:
        parts.append(f"{asset.latitude:.4f}, {asset.longitude:.4f}")
    if asset.favorite:
        parts.append("Favorite")
    for subtype, label in ((HDR, "HDR"), (LIVE, "Live"), (DEPTH_EFFECT, "Portrait"), (PANORAMA, "Panorama")):
        if subtype in asset.subtypes:
            parts.append(label)

    if asset.original_filename:
        stem = asset.original_filename.split(".")[0]
        if stem.startswith("IMG_"):
            parts.append("iPhone")
        elif stem.startswith("DSC"):
            parts.append("Camera")

    if asset.pixel_width > 4000 and asset.pixel_height > 3000:
        parts.append("High-res")
    parts.append(f"{asset.pixel_width}x{asset.pixel_height}")
    return " | ".join(parts)


def event_from_asset(asset: PhotoAsset) -> Optional[Event]:
    """Build an event for a photo; assets without a creation date are skipped."""

    if asset.creation_date is None:
        return None

    return new_event(
        date=asset.creation_date,
        type=event_type_for(asset),
        title=photo_title(asset),
        subtitle=photo_subtitle(asset),
        coordinate=(asset.latitude, asset.longitude) if asset.has_location else None,
        user_weight=photo_weight(asset),
        engagement=0,
        favorite=asset.favorite,
        asset_local_id=asset.local_id,
    )


def _created_key(asset: PhotoAsset):
    if asset.creation_date is None:
        return (True, datetime.min)
    return (False, normalize_date(asset.creation_date))


def _in_window(asset: PhotoAsset, since: Optional[datetime], until: Optional[datetime]) -> bool:
    if since is None and until is None:
        return True
    if asset.creation_date is None:
        return False
    created = normalize_date(asset.creation_date)
    if since is not None and created <= since:
        return False
    if until is not None and created > until:
        return False
    return True


def import_assets(
    assets: Iterable[PhotoAsset],
    store,
    imported: ImportedAssetSet,
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
    batch_size: int = 50,
) -> ImportReport:
    """Add events for assets not yet imported, saving to ``store`` in batches.

    ``since`` keeps assets created strictly after it and ``until`` those
    created at or before it. Asset ids enter ``imported`` only once their
    batch is saved, so a failed save leaves them importable.
    Scores are not recomputed here; callers refresh once the import ends.
    """

    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    since = normalize_date(since) if since is not None else None
    until = normalize_date(until) if until is not None else None

    report = ImportReport()
    batch: list[Event] = []
    pending: set[str] = set()

    def flush() -> None:
        store.save(batch)
        for event in batch:
            imported.add(event.asset_local_id)
        report.imported += len(batch)
        pending.clear()

    for asset in sorted(assets, key=_created_key):
        report.total += 1
        if asset.local_id in pending or asset.local_id in imported or not _in_window(asset, since, until):
            report.skipped += 1
            continue

        event = event_from_asset(asset)
        if event is None:
            report.skipped += 1
            continue

        batch.append(event)
        pending.add(asset.local_id)
        if len(batch) >= batch_size:
            flush()
            logger.info("Imported %d/%d photos", report.imported, report.total)
            batch = []

    if batch:
        flush()

    logger.info(
        "Processed %d photos (%d new imports, %d skipped)", report.total, report.imported, report.skipped
    )
    return report
