"""Score a CSV/JSON event dataset and report significance."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from lifelapse.adapters import csv_adapter, json_adapter
from lifelapse.config import load_settings
from lifelapse.metrics import compute_metrics
from lifelapse.significance import recompute
from lifelapse.timeline import most_significant


def _load_events(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Compute event significance scores")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON events file")
    parser.add_argument("--config", help="Optional JSON settings file")
    parser.add_argument("--top", type=int, default=10, help="Number of top events to list")
    parser.add_argument("--output", default="outputs/scored_events.json", help="Where to write scored events")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings(args.config)
    events = recompute(_load_events(Path(args.data)), settings.coefficients)

    report = compute_metrics(events)
    report["top_events"] = [
        {"event_id": e.event_id, "title": e.title, "date": e.date.isoformat(), "significance": e.significance}
        for e in most_significant(events, args.top)
    ]
    print(json.dumps(report, indent=2))

    out_path = Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json_adapter.dump(events), encoding="utf-8")
    print(f"Saved scored events to {out_path}")


if __name__ == "__main__":
    main()
