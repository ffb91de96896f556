import logging

import pytest

from findride.core import config
from findride.core.config import Settings, load_provider_config
from findride.utils.errors import ConfigError


def test_load_provider_config_from_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "  env-key  ")
    monkeypatch.setenv("GOOGLE_MAPS_TIMEOUT", "4.5")
    cfg = load_provider_config()
    assert cfg.api_key == "env-key"
    assert cfg.timeout == 4.5
    assert cfg.distance_matrix_url.endswith("/distancematrix/json")


def test_load_provider_config_falls_back_to_settings(monkeypatch):
    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_MAPS_TIMEOUT", raising=False)
    monkeypatch.setattr(config.settings, "GOOGLE_MAPS_API_KEY", "settings-key")
    cfg = load_provider_config()
    assert cfg.api_key == "settings-key"
    assert cfg.timeout == config.settings.GOOGLE_MAPS_TIMEOUT


def test_load_provider_config_missing_key(no_maps_key):
    with pytest.raises(ConfigError) as exc:
        load_provider_config()
    assert exc.value.message == "Google Maps API key is not configured"


def test_provider_config_repr_hides_key(maps_key):
    cfg = load_provider_config()
    assert "test-key" not in repr(cfg)


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_timeout_in_env_is_ignored(monkeypatch, maps_key, caplog, raw):
    caplog.set_level(logging.WARNING, logger="findride.core.config")
    monkeypatch.setenv("GOOGLE_MAPS_TIMEOUT", raw)
    assert load_provider_config().timeout == config.settings.GOOGLE_MAPS_TIMEOUT
    assert any(
        f"GOOGLE_MAPS_TIMEOUT={raw!r}" in r.getMessage() for r in caplog.records
    )


def test_cors_origins_parsing():
    assert Settings(CORS_ORIGINS="https://a.test, https://b.test").CORS_ORIGINS == [
        "https://a.test",
        "https://b.test",
    ]
    assert Settings(CORS_ORIGINS='["https://c.test"]').CORS_ORIGINS == ["https://c.test"]
    assert Settings(CORS_ALLOW_ALL=True).CORS_ORIGINS == ["*"]


def test_api_base_prefers_env(monkeypatch):
    monkeypatch.setenv("FINDRIDE_API_BASE", "https://rides.example/")
    assert config.api_base() == "https://rides.example"
