"""yfinance-backed provider (alternate to the raw chart API)."""

import asyncio
import logging
from typing import Optional

import pandas as pd
import yfinance as yf

from ..config import Config
from ..errors import UpstreamUnavailableError
from ..models import PriceQuery, PriceSeries
from .base import PriceSeriesProvider

logger = logging.getLogger(__name__)


class YFinanceProvider(PriceSeriesProvider):
    """Daily closes through ``yfinance.Ticker.history`` (runs in thread pool)."""

    name = "yfinance"

    def __init__(self, config: Config, semaphore: Optional[asyncio.Semaphore] = None):
        self.config = config
        self.semaphore = semaphore or asyncio.Semaphore(config.max_concurrent_requests)

    async def fetch_daily_closes(self, query: PriceQuery) -> PriceSeries:

        def _history():
            """Blocking yfinance call."""
            return yf.Ticker(query.symbol).history(
                start=query.period1,
                end=query.period2,
                interval="1d",
                auto_adjust=False,
            )

        logger.info("yfinance: fetching %s (%d to %d)", query.symbol, query.period1, query.period2)

        try:
            async with self.semaphore:
                loop = asyncio.get_running_loop()
                df = await asyncio.wait_for(
                    loop.run_in_executor(None, _history),
                    timeout=self.config.http_timeout,
                )
        except asyncio.TimeoutError as exc:
            raise UpstreamUnavailableError(
                f"yfinance timed out after {self.config.http_timeout}s"
            ) from exc
        except Exception as exc:
            raise UpstreamUnavailableError(f"yfinance request failed: {exc}") from exc

        if df is None or df.empty or "Close" not in df.columns:
            return PriceSeries(symbol=query.symbol)

        closes = df["Close"].copy()
        index = pd.DatetimeIndex(closes.index)
        closes.index = index.tz_convert("UTC") if index.tz is not None else index.tz_localize("UTC")

        series = PriceSeries.from_series(query.symbol, closes)
        logger.info("yfinance: loaded %d closes for %s", len(series), query.symbol)
        return series
