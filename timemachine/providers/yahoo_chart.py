"""Yahoo Finance chart API provider."""

import asyncio
import logging
from typing import Any, Optional

import httpx

from ..config import Config
from ..errors import NoDataError, UpstreamUnavailableError
from ..http_client import http_get
from ..models import PriceQuery, PriceSeries
from .base import PriceSeriesProvider

logger = logging.getLogger(__name__)

NOT_FOUND_CODE = "Not Found"


class YahooChartProvider(PriceSeriesProvider):
    """
    Daily closes from the Yahoo Finance v8 chart endpoint.

    The endpoint is keyed by a Unix-timestamp window (``period1``/``period2``)
    and returns parallel ``timestamp`` and ``close`` arrays where closes may be
    null for non-trading days.
    """

    name = "yahoo"

    def __init__(
        self,
        config: Config,
        http_client: httpx.AsyncClient,
        semaphore: Optional[asyncio.Semaphore] = None,
    ):
        self.config = config
        self.http_client = http_client
        self.semaphore = semaphore or asyncio.Semaphore(config.max_concurrent_requests)

    async def fetch_daily_closes(self, query: PriceQuery) -> PriceSeries:
        url = f"{self.config.yahoo_chart_url}/{query.symbol}"
        params = {
            "period1": query.period1,
            "period2": query.period2,
            "interval": "1d",
        }

        logger.info(
            "Fetching daily closes for %s (%s to %s)",
            query.symbol,
            query.range_start.date().isoformat(),
            query.range_end.date().isoformat(),
        )

        async def _get() -> httpx.Response:
            async with self.semaphore:
                return await http_get(
                    self.http_client,
                    url,
                    params=params,
                    headers={"User-Agent": self.config.user_agent},
                    timeout=self.config.http_timeout,
                    retries=self.config.max_retries,
                    backoff_factor=self.config.retry_backoff_factor,
                )

        try:
            response = await asyncio.wait_for(_get(), timeout=self.config.request_deadline)
        except asyncio.TimeoutError as exc:
            logger.warning(
                "Lookup for %s exceeded %.1fs deadline", query.symbol, self.config.request_deadline
            )
            raise UpstreamUnavailableError(
                f"Market data provider did not answer within {self.config.request_deadline}s"
            ) from exc
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                raise NoDataError(f"No data found for stock symbol {query.symbol}") from exc
            raise UpstreamUnavailableError(
                f"Market data provider returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailableError(
                f"Market data provider timed out after {self.config.http_timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"Market data provider unreachable: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamUnavailableError("Market data provider returned invalid JSON") from exc

        return self._parse_chart(query.symbol, payload)

    def _parse_chart(self, symbol: str, payload: Any) -> PriceSeries:
        """Turn a chart payload into a PriceSeries."""
        if not isinstance(payload, dict) or not isinstance(payload.get("chart"), dict):
            raise UpstreamUnavailableError("Malformed chart payload: missing 'chart'")

        chart = payload["chart"]
        error = chart.get("error")
        if error:
            if not isinstance(error, dict):
                raise UpstreamUnavailableError(f"Market data provider error: {error}")
            if error.get("code") == NOT_FOUND_CODE:
                raise NoDataError(f"No data found for stock symbol {symbol}")
            raise UpstreamUnavailableError(
                f"Market data provider error: {error.get('description') or error.get('code')}"
            )

        results = chart.get("result")
        if not results:
            raise NoDataError(f"No data found for stock symbol {symbol}")
        if not isinstance(results, list) or not isinstance(results[0], dict):
            raise UpstreamUnavailableError(f"Malformed chart payload for {symbol}: bad 'result'")

        result = results[0]
        timestamps = result.get("timestamp") or []
        if not timestamps:
            # Valid symbol, no trading days in the window
            logger.debug("Chart for %s has no timestamps in window", symbol)
            return PriceSeries(symbol=symbol)

        try:
            closes = result["indicators"]["quote"][0]["close"]
            series = PriceSeries.from_arrays(symbol, timestamps, closes)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise UpstreamUnavailableError(f"Malformed chart payload for {symbol}: {exc}") from exc

        logger.debug("Yahoo chart: %d valid closes for %s", len(series), symbol)
        return series
