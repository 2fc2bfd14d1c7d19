"""Shared test fixtures."""

import json
import time
from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml

from weathercast.config.schema import AppConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def now() -> datetime:
    """2024-06-01 08:30 UTC, the reference instant for fixture data."""
    return datetime(2024, 6, 1, 8, 30, tzinfo=UTC)


@pytest.fixture
def weatherapi_payload() -> dict:
    with open(FIXTURE_DIR / "weatherapi_forecast_london.json") as f:
        return json.load(f)


@pytest.fixture
def owm_payload() -> dict:
    with open(FIXTURE_DIR / "owm_forecast_delhi.json") as f:
        return json.load(f)


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig(timezone="UTC")


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": "openweathermap",
        "timezone": "UTC",
        "default_days": 2,
        "http": {"timeout_seconds": 5.0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def london_system_zone(monkeypatch):
    """Run with Europe/London as the process time zone (BST ends 2024-10-27)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Europe/London")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
