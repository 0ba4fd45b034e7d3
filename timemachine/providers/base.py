"""Base interface for daily-close market data providers."""

from abc import ABC, abstractmethod

from ..models import PriceQuery, PriceSeries


class PriceSeriesProvider(ABC):
    """Source of daily closing prices.

    Implementations return an empty PriceSeries when the symbol exists but has
    no closes in the window, raise NoDataError when the upstream reports the
    symbol unknown, and raise UpstreamUnavailableError for transport problems.
    """

    name: str = "base"

    @abstractmethod
    async def fetch_daily_closes(self, query: PriceQuery) -> PriceSeries:
        """Fetch daily closes for ``query.symbol`` over the query window."""
        pass
