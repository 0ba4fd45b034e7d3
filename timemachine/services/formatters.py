"""Output formatters for calculation results (pure functions)."""

import math
from typing import Any, Dict

from ..models import InvestmentResult, StockQuote

MONEY_PLACES = 2
SHARE_PLACES = 4


def format_fixed(value: float, places: int = MONEY_PLACES) -> str:
    """
    Fixed-decimal string; values that round to zero never print as ``-0.00``.

    Non-finite values print as ``Infinity``, ``-Infinity`` or ``NaN``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    text = f"{value:.{places}f}"
    if text.startswith("-") and float(text) == 0:
        return text[1:]
    return text


def format_investment_result(result: InvestmentResult) -> Dict[str, Any]:
    """
    Format an InvestmentResult for the JSON response.

    Money, percentages and years use 2 decimals, shares use 4. The invested
    amount stays numeric.
    """
    return {
        "symbol": result.symbol,
        "investmentDate": result.investment_date.isoformat(),
        "originalAmount": result.original_amount,
        "historicalPrice": format_fixed(result.historical_price),
        "currentPrice": format_fixed(result.current_price),
        "sharesPurchased": format_fixed(result.shares_purchased, SHARE_PLACES),
        "currentValue": format_fixed(result.current_value),
        "totalReturn": format_fixed(result.total_return),
        "returnPercentage": format_fixed(result.return_percentage),
        "annualizedReturn": format_fixed(result.annualized_return),
        "yearsHeld": format_fixed(result.years_held),
    }


def format_stock_quote(quote: StockQuote) -> Dict[str, Any]:
    return {
        "symbol": quote.symbol,
        "currentPrice": format_fixed(quote.current_price),
        "timestamp": quote.timestamp.isoformat(),
    }
