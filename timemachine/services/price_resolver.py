"""Resolve a symbol and calendar date to a single usable closing price."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

from ..errors import NoDataError, ValidationError
from ..models import PriceQuery, PriceSeries, normalize_symbol, utc_midnight
from ..providers.base import PriceSeriesProvider

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PriceResolver:
    """
    Picks representative closes out of provider price series.

    Markets are closed on weekends and holidays, so a requested date often has
    no trading data. Historical lookups scan forward from the date and take
    the first close; current lookups scan a short trailing window and take the
    last close.
    """

    def __init__(
        self,
        provider: PriceSeriesProvider,
        historical_window_days: int = 7,
        current_window_days: int = 1,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.provider = provider
        self.historical_window = timedelta(days=historical_window_days)
        self.current_window = timedelta(days=current_window_days)
        self.clock = clock or _utc_now

    async def fetch_series(self, query: PriceQuery) -> PriceSeries:
        """Fetch closes for *query*; nulls are already filtered out."""
        series = await self.provider.fetch_daily_closes(query)
        logger.debug(
            "%s returned %d closes for %s", self.provider.name, len(series), query.symbol
        )
        return series

    async def historical_price(self, symbol: str, day: date) -> float:
        """First close on or after *day*, within the forward window."""
        start = utc_midnight(day)
        query = PriceQuery(_require_symbol(symbol), start, start + self.historical_window)

        price = (await self.fetch_series(query)).first_close()
        if price is None:
            raise NoDataError(
                f"No historical data found for {query.symbol} on or after {day.isoformat()}"
            )
        return price

    async def current_price(self, symbol: str, now: Optional[datetime] = None) -> float:
        """Last close within the trailing window ending at *now*."""
        end = now or self.clock()
        query = PriceQuery(_require_symbol(symbol), end - self.current_window, end)

        price = (await self.fetch_series(query)).last_close()
        if price is None:
            raise NoDataError(f"Unable to get current price for {query.symbol}")
        return price


def _require_symbol(symbol: Optional[str]) -> str:
    normalized = normalize_symbol(symbol or "")
    if not normalized:
        raise ValidationError("symbol must be a non-empty string")
    return normalized
