"""Tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from backend.app.config import Settings, get_settings
from backend.app.models.defaults import STORAGE_KEY


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATABASE_URL", "SYNC_DEBOUNCE_S", "STORAGE_KEY"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.sync_debounce_s == 1.5
    assert settings.sync_status_timeout_s == 3.0
    assert settings.storage_key == STORAGE_KEY
    assert settings.local_state_dir == Path(".itinerary")


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNC_DEBOUNCE_S", "0.25")
    monkeypatch.setenv("PROFILE_ID", "alice")

    settings = Settings(_env_file=None)

    assert settings.sync_debounce_s == 0.25
    assert settings.profile_id == "alice"


@pytest.mark.parametrize("field", ["sync_debounce_s", "sync_status_timeout_s", "gateway_timeout_s"])
def test_timers_must_be_positive(field: str) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: 0})


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
