"""Investment-return use case: validate input, resolve both prices, compute."""

import asyncio
import logging
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

from ..calculator import compute
from ..errors import DegenerateInputError, ValidationError
from ..models import InvestmentRequest, InvestmentResult, StockQuote, normalize_symbol
from .price_resolver import PriceResolver

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = re.compile(r"[A-Z0-9.\-^=]{1,12}")
MISSING_FIELDS_MESSAGE = "Missing required fields: symbol, date, and amount are required"


def parse_symbol(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("symbol must be a non-empty string")
    symbol = normalize_symbol(raw)
    if not SYMBOL_PATTERN.fullmatch(symbol):
        raise ValidationError(f"Invalid stock symbol: {raw!r}")
    return symbol


def parse_investment_date(raw: Any) -> date:
    """Accept an ISO calendar date (``YYYY-MM-DD``) or full ISO timestamp."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise ValidationError("Investment date must be an ISO date string (YYYY-MM-DD)")

    text = raw.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise ValidationError(f"Invalid investment date: {raw!r}") from exc


def parse_amount(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValidationError("Investment amount must be a number")
    try:
        amount = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Investment amount must be a number") from exc
    if not math.isfinite(amount):
        raise ValidationError("Investment amount must be a finite number")
    if amount <= 0:
        raise ValidationError("Investment amount must be greater than 0")
    return amount


def validate_request(symbol: Any, investment_date: Any, amount: Any, now: datetime) -> InvestmentRequest:
    """
    Build an InvestmentRequest from raw inputs, evaluated against *now*.

    Raises:
        ValidationError: a field is missing or malformed, the amount is not
            positive, or the date is in the future
        DegenerateInputError: the date is today, which leaves no holding period
    """
    if any(value is None or (isinstance(value, str) and not value.strip())
           for value in (symbol, investment_date, amount)):
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    parsed_symbol = parse_symbol(symbol)
    parsed_amount = parse_amount(amount)
    parsed_date = parse_investment_date(investment_date)

    today = now.astimezone(timezone.utc).date() if now.tzinfo else now.date()
    if parsed_date > today:
        raise ValidationError("Investment date cannot be in the future")
    if parsed_date == today:
        raise DegenerateInputError(
            "Investment date must be before today to calculate an annualized return"
        )

    return InvestmentRequest(
        symbol=parsed_symbol,
        investment_date=parsed_date,
        amount=parsed_amount,
    )


class InvestmentService:
    """Runs the calculation flow for one request at a time; holds no request state."""

    def __init__(self, resolver: PriceResolver, clock: Optional[Callable[[], datetime]] = None):
        self.resolver = resolver
        self.clock = clock or resolver.clock

    async def calculate(self, symbol: Any, investment_date: Any, amount: Any) -> InvestmentResult:
        now = self.clock()
        request = validate_request(symbol, investment_date, amount, now)

        logger.info(
            "Calculating return for %s: %.2f invested on %s",
            request.symbol,
            request.amount,
            request.investment_date.isoformat(),
        )

        historical_price, current_price = await asyncio.gather(
            self.resolver.historical_price(request.symbol, request.investment_date),
            self.resolver.current_price(request.symbol, now),
        )

        return compute(
            historical_price,
            current_price,
            request.amount,
            request.investment_date,
            now,
            symbol=request.symbol,
        )

    async def stock_info(self, symbol: Any) -> StockQuote:
        """Current price lookup used to check that a symbol exists."""
        now = self.clock()
        parsed = parse_symbol(symbol)
        price = await self.resolver.current_price(parsed, now)
        return StockQuote(symbol=parsed, current_price=price, timestamp=now)
