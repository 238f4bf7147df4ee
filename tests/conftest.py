"""Shared fixtures: settings files written to a temporary deployment root."""

import json

import pytest

from justitia.config import SettingsStore


FULL_SETTINGS = {
    "node": {"id": "127.0.0.1:8080"},
    "txpool": {"globalSlots": "4096"},
    "participates": {"policy": "solo"},
    "role": {"policy": "solo"},
    "consensus": {"policy": "fbft"},
    "blockchain": {
        "plugin": "memorydb",
        "statePath": "./data/state",
        "dataPath": "./data/block",
    },
}


@pytest.fixture
def write_settings(tmp_path):
    """Write a dict as config/config.json under tmp_path; returns the root."""
    def _write(data, name="config.json"):
        config_dir = tmp_path / "config"
        config_dir.mkdir(exist_ok=True)
        path = config_dir / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return tmp_path
    return _write


@pytest.fixture
def full_settings():
    return json.loads(json.dumps(FULL_SETTINGS))


@pytest.fixture
def full_store(write_settings, full_settings):
    return SettingsStore(root=write_settings(full_settings))
