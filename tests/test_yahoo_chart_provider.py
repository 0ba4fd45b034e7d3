"""Tests for the Yahoo chart provider payload handling and error mapping."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from timemachine.config import Config
from timemachine.errors import NoDataError, UpstreamUnavailableError
from timemachine.models import PriceQuery
from timemachine.providers import YahooChartProvider, YFinanceProvider, build_provider

CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart"
START = datetime(2024, 1, 6, tzinfo=timezone.utc)
END = datetime(2024, 1, 13, tzinfo=timezone.utc)


def _response(status_code: int, payload=None, text=None) -> httpx.Response:
    request = httpx.Request("GET", f"{CHART_URL}/AAPL")
    if payload is not None:
        return httpx.Response(status_code, json=payload, request=request)
    return httpx.Response(status_code, text=text or "", request=request)


def _chart(timestamps, closes):
    return {
        "chart": {
            "result": [
                {
                    "meta": {"symbol": "AAPL", "currency": "USD"},
                    "timestamp": timestamps,
                    "indicators": {"quote": [{"close": closes, "open": closes}]},
                }
            ],
            "error": None,
        }
    }


NOT_FOUND = {
    "chart": {
        "result": None,
        "error": {"code": "Not Found", "description": "No data found, symbol may be delisted"},
    }
}


@pytest.fixture
def config():
    return Config(max_retries=3, retry_backoff_factor=0.0, http_timeout=5.0)


@pytest.fixture
def http_client():
    return AsyncMock()


@pytest.fixture
def provider(config, http_client):
    return YahooChartProvider(config, http_client)


def _fetch(provider, symbol="aapl"):
    return asyncio.run(provider.fetch_daily_closes(PriceQuery(symbol, START, END)))


class TestYahooChartParsing:
    def test_parses_parallel_arrays(self, provider, http_client):
        http_client.get.return_value = _response(
            200, _chart([1704724200, 1704810600, 1704897000], [185.56, None, 186.19])
        )

        series = _fetch(provider)
        assert series.symbol == "AAPL"
        assert len(series) == 2
        assert series.first_close() == 185.56
        assert series.last_close() == 186.19

    def test_request_uses_unix_window_and_daily_interval(self, provider, http_client, config):
        http_client.get.return_value = _response(200, _chart([1704724200], [185.56]))

        _fetch(provider)
        args, kwargs = http_client.get.call_args
        assert args[0] == f"{CHART_URL}/AAPL"
        assert kwargs["params"] == {
            "period1": int(START.timestamp()),
            "period2": int(END.timestamp()),
            "interval": "1d",
        }
        assert kwargs["timeout"] == config.http_timeout
        assert "User-Agent" in kwargs["headers"]

    def test_no_timestamps_is_empty_series(self, provider, http_client):
        payload = _chart([], [])
        del payload["chart"]["result"][0]["timestamp"]
        http_client.get.return_value = _response(200, payload)

        assert _fetch(provider).empty

    def test_chart_not_found_error_is_no_data(self, provider, http_client):
        http_client.get.return_value = _response(200, NOT_FOUND)

        with pytest.raises(NoDataError):
            _fetch(provider, "ZZZZZNOTREAL")

    def test_empty_result_is_no_data(self, provider, http_client):
        http_client.get.return_value = _response(200, {"chart": {"result": [], "error": None}})

        with pytest.raises(NoDataError):
            _fetch(provider)

    def test_other_chart_error_is_upstream(self, provider, http_client):
        payload = {"chart": {"result": None, "error": {"code": "Internal", "description": "boom"}}}
        http_client.get.return_value = _response(200, payload)

        with pytest.raises(UpstreamUnavailableError):
            _fetch(provider)

    def test_string_chart_error_is_upstream(self, provider, http_client):
        http_client.get.return_value = _response(200, {"chart": {"result": None, "error": "boom"}})

        with pytest.raises(UpstreamUnavailableError):
            _fetch(provider)

    def test_null_result_entry_is_upstream(self, provider, http_client):
        http_client.get.return_value = _response(200, {"chart": {"result": [None], "error": None}})

        with pytest.raises(UpstreamUnavailableError):
            _fetch(provider)

    def test_missing_indicators_is_upstream(self, provider, http_client):
        payload = _chart([1704724200], [185.56])
        del payload["chart"]["result"][0]["indicators"]
        http_client.get.return_value = _response(200, payload)

        with pytest.raises(UpstreamUnavailableError):
            _fetch(provider)

    def test_mismatched_arrays_is_upstream(self, provider, http_client):
        http_client.get.return_value = _response(200, _chart([1704724200, 1704810600], [185.56]))

        with pytest.raises(UpstreamUnavailableError):
            _fetch(provider)

    def test_invalid_json_is_upstream(self, provider, http_client):
        http_client.get.return_value = _response(200, text="<html>oops</html>")

        with pytest.raises(UpstreamUnavailableError):
            _fetch(provider)


class TestYahooChartTransport:
    def test_http_404_is_no_data(self, provider, http_client):
        http_client.get.return_value = _response(404, NOT_FOUND)

        with pytest.raises(NoDataError):
            _fetch(provider, "ZZZZZNOTREAL")
        assert http_client.get.call_count == 1

    def test_other_4xx_is_upstream_without_retry(self, provider, http_client):
        http_client.get.return_value = _response(401, {"finance": {"error": "Unauthorized"}})

        with pytest.raises(UpstreamUnavailableError):
            _fetch(provider)
        assert http_client.get.call_count == 1

    def test_timeout_is_upstream_after_retries(self, provider, http_client):
        http_client.get.side_effect = httpx.ReadTimeout("timed out")

        with patch("asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(UpstreamUnavailableError):
                _fetch(provider)
        assert http_client.get.call_count == 3

    def test_server_error_then_success(self, provider, http_client):
        http_client.get.side_effect = [
            _response(503, text="unavailable"),
            _response(200, _chart([1704724200], [185.56])),
        ]

        with patch("asyncio.sleep", new_callable=AsyncMock):
            series = _fetch(provider)
        assert series.first_close() == 185.56

    def test_persistent_server_error_is_upstream(self, provider, http_client):
        http_client.get.return_value = _response(502, text="bad gateway")

        with patch("asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(UpstreamUnavailableError):
                _fetch(provider)
        assert http_client.get.call_count == 3

    def test_connect_error_is_upstream(self, provider, http_client):
        http_client.get.side_effect = httpx.ConnectError("connection refused")

        with patch("asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(UpstreamUnavailableError):
                _fetch(provider)

    def test_stalled_lookup_hits_request_deadline(self, http_client):
        async def _stall(*args, **kwargs):
            await asyncio.Event().wait()

        http_client.get.side_effect = _stall
        provider = YahooChartProvider(Config(request_deadline=0.05, http_timeout=5.0), http_client)

        with pytest.raises(UpstreamUnavailableError, match="did not answer"):
            _fetch(provider)
        assert http_client.get.call_count == 1


class TestBuildProvider:
    def test_default_is_yahoo_chart(self):
        assert isinstance(build_provider(Config(), AsyncMock()), YahooChartProvider)

    def test_yfinance_selected_by_config(self):
        provider = build_provider(Config(price_provider="yfinance"), AsyncMock())
        assert isinstance(provider, YFinanceProvider)
