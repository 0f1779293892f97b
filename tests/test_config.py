import json
from pathlib import Path

import pytest

from lifelapse.config import load_settings


def test_defaults():
    settings = load_settings(environ={})
    assert settings.coefficients.alpha == 4.2
    assert settings.imported_cap == 10_000


def test_file_then_environment(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"store_path": "events.json", "coefficients": {"recency": 2.0}, "import_batch_size": 10}),
        encoding="utf-8",
    )
    settings = load_settings(str(path), environ={})
    assert settings.store_path == Path("events.json")
    assert settings.coefficients.recency == 2.0
    assert settings.coefficients.favorite == 2.0
    assert settings.import_batch_size == 10

    overridden = load_settings(str(path), environ={"LIFELAPSE_STORE": "/tmp/other.json"})
    assert overridden.store_path == Path("/tmp/other.json")


def test_unknown_coefficient(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"coefficients": {"gamma": 1}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(str(path), environ={})
