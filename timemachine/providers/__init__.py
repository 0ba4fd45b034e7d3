"""Market data providers package."""

import asyncio
from typing import Optional

import httpx

from ..config import Config
from .base import PriceSeriesProvider
from .yahoo_chart import YahooChartProvider
from .yfinance_provider import YFinanceProvider


def build_provider(
    config: Config,
    http_client: httpx.AsyncClient,
    semaphore: Optional[asyncio.Semaphore] = None,
) -> PriceSeriesProvider:
    """Select the provider named by ``config.price_provider``."""
    if config.price_provider == "yfinance":
        return YFinanceProvider(config, semaphore=semaphore)
    return YahooChartProvider(config, http_client, semaphore=semaphore)


__all__ = [
    "PriceSeriesProvider",
    "YahooChartProvider",
    "YFinanceProvider",
    "build_provider",
]
