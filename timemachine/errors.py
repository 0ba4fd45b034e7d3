"""Typed errors raised by the price resolver, calculator and service layer."""


class InvestmentError(Exception):
    """Base class for every error the web layer knows how to map."""


class ValidationError(InvestmentError):
    """Malformed or missing input (absent fields, non-positive amount, future date)."""


class DegenerateInputError(ValidationError):
    """Input that would make the return math undefined (zero holding period, zero price)."""


class NoDataError(InvestmentError):
    """Upstream returned no usable price for the requested symbol/window."""


class UpstreamUnavailableError(InvestmentError):
    """Transport, timeout or malformed-payload failure talking to the provider."""
