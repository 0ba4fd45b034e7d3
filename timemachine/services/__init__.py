"""Application services."""

from .investment_service import InvestmentService, validate_request
from .price_resolver import PriceResolver

__all__ = ["InvestmentService", "PriceResolver", "validate_request"]
