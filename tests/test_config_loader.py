import logging

import pytest
from pydantic import ValidationError

from ygl_proxy.utils.config_loader import DEFAULT_YGL_BASE_URL, load_settings


def test_defaults():
    settings = load_settings({"YGL_API_KEY": "k"})
    assert settings.port == 5050
    assert settings.env == "production"
    assert settings.allowed_origins == []
    assert settings.ygl_base_url == DEFAULT_YGL_BASE_URL
    assert settings.ygl_timeout_seconds == 10.0
    assert settings.cache_ttl_seconds == 120.0
    assert settings.rate_limit_per_minute == 60


def test_reads_environment_values():
    settings = load_settings(
        {
            "PORT": "8080",
            "NODE_ENV": "development",
            "YGL_API_KEY": "secret",
            "ALLOWED_ORIGINS": "https://a.example.org, https://b.example.org,",
            "YGL_BASE_URL": "https://staging.ygl.test/api/",
            "CACHE_TTL_SECONDS": "30",
        }
    )
    assert settings.port == 8080
    assert settings.is_development is True
    assert settings.allowed_origins == ["https://a.example.org", "https://b.example.org"]
    assert settings.ygl_base_url == "https://staging.ygl.test/api"
    assert settings.cache_ttl_seconds == 30.0


def test_missing_api_key_warns_but_loads(caplog):
    with caplog.at_level(logging.WARNING, logger="ygl_proxy.utils.config_loader"):
        settings = load_settings({})
    assert settings.ygl_api_key == ""
    assert any("YGL_API_KEY" in r.getMessage() for r in caplog.records)


def test_invalid_port_is_rejected():
    with pytest.raises(ValidationError):
        load_settings({"PORT": "not-a-port"})
