"""Runtime settings: defaults, optional JSON file, then environment."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from lifelapse.significance import Coefficients

STORE_ENV_VAR = "LIFELAPSE_STORE"


@dataclass
class Settings:
    store_path: Path = Path("lifelapse_events.json")
    coefficients: Coefficients = field(default_factory=Coefficients)
    imported_cap: int = 10_000
    import_batch_size: int = 50


def load_settings(path: Optional[str] = None, environ: Optional[dict] = None) -> Settings:
    """Build settings from defaults, an optional JSON file and ``LIFELAPSE_STORE``."""

    environ = os.environ if environ is None else environ
    settings = Settings()

    if path:
        with open(path, encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValueError("Settings file must contain a JSON object")

        if "store_path" in payload:
            settings.store_path = Path(payload["store_path"])
        if "imported_cap" in payload:
            settings.imported_cap = int(payload["imported_cap"])
        if "import_batch_size" in payload:
            settings.import_batch_size = int(payload["import_batch_size"])

        overrides = payload.get("coefficients") or {}
        known = {f.name for f in fields(Coefficients)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown coefficients {unknown}")
        settings.coefficients = Coefficients(**{name: float(value) for name, value in overrides.items()})

    if environ.get(STORE_ENV_VAR):
        settings.store_path = Path(environ[STORE_ENV_VAR])

    return settings
