"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from unit_availability.config import Settings


def test_unknown_timezone_rejected_at_startup():
    with pytest.raises(ValidationError):
        Settings(timezone="Mars/Olympus_Mons")


def test_unknown_timezone_from_env_rejected(monkeypatch):
    monkeypatch.setenv("AVAILABILITY_TIMEZONE", "Not/AZone")

    with pytest.raises(ValidationError):
        Settings.from_env()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("AVAILABILITY_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("AVAILABILITY_BATCH_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("AVAILABILITY_SEED_DEMO_DATA", "no")

    loaded = Settings.from_env()

    assert loaded.tzinfo is not None
    assert loaded.batch_timeout_seconds == 2.5
    assert loaded.seed_demo_data is False
