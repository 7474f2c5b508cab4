"""
Tests for resolving Cal.com settings once at startup.
"""

from __future__ import annotations

from app.core.config import (
    DEFAULT_CAL_EVENT_TYPE_SLUG,
    DEFAULT_CAL_USERNAME,
    Settings,
    resolve_cal_com_config,
)


def test_literal_defaults_when_unset():
    config = resolve_cal_com_config(Settings(_env_file=None, CAL_USERNAME=None, CAL_EVENT_TYPE_SLUG=None))

    assert config.username == DEFAULT_CAL_USERNAME == "zinyando"
    assert config.event_type_slug == DEFAULT_CAL_EVENT_TYPE_SLUG == "salon-appointment"


def test_blank_values_count_as_unset():
    config = resolve_cal_com_config(Settings(_env_file=None, CAL_USERNAME="  ", CAL_EVENT_TYPE_SLUG="", CAL_API_KEY=" "))

    assert config.username == "zinyando"
    assert config.event_type_slug == "salon-appointment"
    assert config.api_key is None


def test_configured_values_win():
    config = resolve_cal_com_config(
        Settings(
            _env_file=None,
            CAL_USERNAME="my-salon",
            CAL_EVENT_TYPE_SLUG="cut-and-color",
            CAL_API_KEY="cal_live_x",
            CAL_API_BASE_URL="https://cal.example/",
            SALON_LOCATION="12 Main St",
        )
    )

    assert config.username == "my-salon"
    assert config.event_type_slug == "cut-and-color"
    assert config.api_key == "cal_live_x"
    assert config.base_url == "https://cal.example"
    assert config.location_address == "12 Main St"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("CAL_USERNAME", "env-salon")
    monkeypatch.delenv("CAL_EVENT_TYPE_SLUG", raising=False)

    config = resolve_cal_com_config(Settings(_env_file=None))

    assert config.username == "env-salon"
    assert config.event_type_slug == "salon-appointment"
