"""Import a photo asset manifest into the event store and refresh scores."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from lifelapse.adapters.json_adapter import parse_assets
from lifelapse.config import load_settings
from lifelapse.dedup import ImportedAssetSet
from lifelapse.photo_import import import_assets
from lifelapse.refresh import ScoreRefresher
from lifelapse.store import JsonFileEventStore


def _load_imported(path: Path, cap: int) -> ImportedAssetSet:
    if not path.exists():
        return ImportedAssetSet(max_size=cap)
    return ImportedAssetSet(json.loads(path.read_text(encoding="utf-8")), max_size=cap)


def main() -> None:
    parser = argparse.ArgumentParser(description="Import photo metadata as timeline events")
    parser.add_argument("--manifest", required=True, help="JSON list of photo asset metadata")
    parser.add_argument("--config", help="Optional JSON settings file")
    parser.add_argument("--store", help="Event store path (overrides settings)")
    parser.add_argument("--since", help="Only import assets created after this ISO timestamp")
    parser.add_argument("--until", help="Only import assets created at or before this ISO timestamp")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings(args.config)
    store_path = Path(args.store) if args.store else settings.store_path
    state_path = store_path.with_name(store_path.name + ".imported.json")

    store = JsonFileEventStore(store_path)
    imported = _load_imported(state_path, settings.imported_cap)
    since = datetime.fromisoformat(args.since) if args.since else None
    until = datetime.fromisoformat(args.until) if args.until else None

    try:
        report = import_assets(
            parse_assets(args.manifest),
            store,
            imported,
            since=since,
            until=until,
            batch_size=settings.import_batch_size,
        )
    finally:
        state_path.parent.mkdir(parents=True, exist_ok=True)
        state_path.write_text(json.dumps(imported.to_list()), encoding="utf-8")

    refreshed = ScoreRefresher(store, settings.coefficients).refresh()
    summary = asdict(report)
    summary["scores_refreshed"] = refreshed is not None
    print(json.dumps(summary, indent=2))
    if refreshed is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
