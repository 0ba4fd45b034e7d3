"""Tests for environment-driven configuration."""

import pytest

from timemachine.config import YAHOO_CHART_URL, Config

ENV_VARS = [
    "PRICE_PROVIDER", "YAHOO_CHART_URL", "HTTP_USER_AGENT", "HISTORICAL_WINDOW_DAYS",
    "CURRENT_WINDOW_DAYS", "HTTP_TIMEOUT", "MAX_CONCURRENT_REQUESTS", "MAX_RETRIES",
    "RETRY_BACKOFF_FACTOR", "REQUEST_DEADLINE", "API_HOST", "API_PORT", "CORS_ORIGINS",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Config.from_env()
    assert config.price_provider == "yahoo"
    assert config.yahoo_chart_url == YAHOO_CHART_URL
    assert config.historical_window_days == 7
    assert config.current_window_days == 1
    assert config.http_timeout == 10.0
    assert config.max_retries == 3
    assert config.request_deadline == 30.0
    assert config.api_port == 5001
    assert config.cors_origins == ["*"]
    assert config.log_level == "INFO"


def test_overrides(monkeypatch):
    monkeypatch.setenv("PRICE_PROVIDER", " YFinance ")
    monkeypatch.setenv("YAHOO_CHART_URL", "http://localhost:9000/chart/")
    monkeypatch.setenv("HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("MAX_RETRIES", "1")
    monkeypatch.setenv("REQUEST_DEADLINE", "12.5")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://example.com")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = Config.from_env()
    assert config.price_provider == "yfinance"
    assert config.yahoo_chart_url == "http://localhost:9000/chart"
    assert config.http_timeout == 2.5
    assert config.max_retries == 1
    assert config.request_deadline == 12.5
    assert config.cors_origins == ["http://localhost:3000", "https://example.com"]
    assert config.log_level == "DEBUG"


def test_unknown_provider_rejected(monkeypatch):
    monkeypatch.setenv("PRICE_PROVIDER", "bloomberg")
    with pytest.raises(ValueError, match="PRICE_PROVIDER"):
        Config.from_env()


def test_non_numeric_timeout_rejected(monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        Config.from_env()


@pytest.mark.parametrize("kwargs", [
    {"http_timeout": 0},
    {"max_retries": 0},
    {"request_deadline": 0},
    {"historical_window_days": 0},
])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs)
