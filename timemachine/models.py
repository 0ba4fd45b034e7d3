"""Domain models for investment-return calculations."""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Optional, Sequence

import pandas as pd


def utc_midnight(day: date) -> datetime:
    """Return *day* as an aware datetime at 00:00 UTC."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


@dataclass(frozen=True)
class PriceQuery:
    """Daily-close query for one symbol over [range_start, range_end]."""
    symbol: str
    range_start: datetime
    range_end: datetime

    def __post_init__(self):
        object.__setattr__(self, "symbol", normalize_symbol(self.symbol))
        if not self.symbol:
            raise ValueError("symbol must be a non-empty string")
        if self.range_start > self.range_end:
            raise ValueError(
                f"range_start {self.range_start.isoformat()} is after "
                f"range_end {self.range_end.isoformat()}"
            )

    @property
    def period1(self) -> int:
        return int(self.range_start.timestamp())

    @property
    def period2(self) -> int:
        return int(self.range_end.timestamp())


@dataclass
class PriceSeries:
    """
    Ordered daily closing prices for a symbol.

    ``closes`` is indexed by a UTC DatetimeIndex, sorted ascending, with
    null closes already dropped. It may be empty.
    """
    symbol: str
    closes: pd.Series = field(default_factory=lambda: pd.Series(dtype=float))

    @classmethod
    def from_arrays(
        cls,
        symbol: str,
        timestamps: Sequence[int],
        closes: Sequence[Optional[float]],
    ) -> "PriceSeries":
        """Build a series from parallel Unix-timestamp and close arrays."""
        if len(timestamps) != len(closes):
            raise ValueError(
                f"timestamp/close length mismatch: {len(timestamps)} != {len(closes)}"
            )
        index = pd.to_datetime(list(timestamps), unit="s", utc=True)
        values = pd.to_numeric(pd.Series(list(closes), index=index, dtype=object), errors="coerce")
        return cls.from_series(symbol, values)

    @classmethod
    def from_series(cls, symbol: str, closes: pd.Series) -> "PriceSeries":
        """Normalize an arbitrary close series: float dtype, no nulls, ascending."""
        series = closes.astype(float).dropna().sort_index()
        series.name = "Close"
        return cls(symbol=symbol, closes=series)

    @property
    def empty(self) -> bool:
        return self.closes.empty

    def __len__(self) -> int:
        return len(self.closes)

    def first_close(self) -> Optional[float]:
        if self.closes.empty:
            return None
        return float(self.closes.iloc[0])

    def last_close(self) -> Optional[float]:
        if self.closes.empty:
            return None
        return float(self.closes.iloc[-1])


@dataclass(frozen=True)
class InvestmentRequest:
    """Accepted calculation input. Built only through validation."""
    symbol: str
    investment_date: date
    amount: float


@dataclass(frozen=True)
class InvestmentResult:
    """Derived metrics for one hypothetical investment, at full precision."""
    symbol: str
    investment_date: date
    original_amount: float
    historical_price: float
    current_price: float
    shares_purchased: float
    current_value: float
    total_return: float
    return_percentage: float
    annualized_return: float
    years_held: float


@dataclass(frozen=True)
class StockQuote:
    """Most recent close for a symbol, used for symbol-validity checks."""
    symbol: str
    current_price: float
    timestamp: datetime
