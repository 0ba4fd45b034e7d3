"""
Pure calculation functions for investment returns.

No I/O, no state. All values are carried at full float precision;
rounding happens only when a result is formatted for output.
"""

import math
from datetime import date, datetime, timezone

from .errors import DegenerateInputError, ValidationError
from .models import InvestmentResult, utc_midnight

DAYS_PER_YEAR = 365.25
SECONDS_PER_DAY = 86400


def calculate_years_held(investment_date: date, evaluation_time: datetime) -> float:
    """
    Years between UTC midnight of *investment_date* and *evaluation_time*.

    Naive evaluation times are taken as UTC.
    """
    if evaluation_time.tzinfo is None:
        evaluation_time = evaluation_time.replace(tzinfo=timezone.utc)
    elapsed = evaluation_time - utc_midnight(investment_date)
    return elapsed.total_seconds() / SECONDS_PER_DAY / DAYS_PER_YEAR


def calculate_annualized_return(current_value: float, amount: float, years_held: float) -> float:
    """
    Compound annual growth rate as a percentage.

    A zero current value yields exactly -100 (0 ** x == 0 for x > 0). Growth
    too large for a float over a very short holding period yields ``inf``.
    """
    if years_held <= 0:
        raise DegenerateInputError(
            "Annualized return is undefined for a holding period of zero or less"
        )
    try:
        growth = (current_value / amount) ** (1 / years_held)
    except OverflowError:
        return math.inf
    return (growth - 1) * 100


def compute(
    historical_price: float,
    current_price: float,
    amount: float,
    investment_date: date,
    evaluation_time: datetime,
    symbol: str = "",
) -> InvestmentResult:
    """
    Derive the return metrics of buying *amount* worth at *historical_price*.

    Raises:
        ValidationError: amount is not positive or current price is negative
        DegenerateInputError: historical price is not positive, or the
            investment date is not strictly before the evaluation time
    """
    if amount <= 0:
        raise ValidationError("Investment amount must be greater than 0")
    if historical_price <= 0:
        raise DegenerateInputError("Historical price must be greater than 0")
    if current_price < 0:
        raise ValidationError("Current price cannot be negative")

    years_held = calculate_years_held(investment_date, evaluation_time)
    if years_held <= 0:
        raise DegenerateInputError("Investment date must be before the evaluation time")

    shares_purchased = amount / historical_price
    current_value = shares_purchased * current_price
    total_return = current_value - amount
    return_percentage = (current_value - amount) / amount * 100

    return InvestmentResult(
        symbol=symbol,
        investment_date=investment_date,
        original_amount=amount,
        historical_price=historical_price,
        current_price=current_price,
        shares_purchased=shares_purchased,
        current_value=current_value,
        total_return=total_return,
        return_percentage=return_percentage,
        annualized_return=calculate_annualized_return(current_value, amount, years_held),
        years_held=years_held,
    )
