"""Web API - FastAPI application with the calculator endpoints and web UI."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from .errors import NoDataError, UpstreamUnavailableError, ValidationError
from .landing_page import render_calculator_page
from .services.formatters import format_investment_result, format_stock_quote
from .services.investment_service import InvestmentService

logger = logging.getLogger(__name__)

UPSTREAM_ERROR_MESSAGE = (
    "Unable to calculate investment returns. The market data provider is "
    "unavailable, please try again later."
)
SYMBOL_NOT_FOUND_MESSAGE = "Stock symbol not found or invalid"
INTERNAL_ERROR_MESSAGE = "Unexpected server error, please try again later."

# Injected by the composition root (see main.py)
_investment_service: Optional[InvestmentService] = None


def configure_api_dependencies(investment_service: InvestmentService) -> None:
    """Configure API with the service it delegates to."""
    global _investment_service
    _investment_service = investment_service


def _service() -> InvestmentService:
    if _investment_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not configured",
        )
    return _investment_service


# ============== PYDANTIC MODELS ==============

class CalculateRequest(BaseModel):
    symbol: Optional[str] = None
    date: Optional[str] = None
    amount: Optional[float] = None


# ============== FASTAPI APP ==============

web_api = FastAPI(title="Investment Time Machine API")


def enable_cors(origins: list) -> None:
    web_api.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@web_api.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")


@web_api.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return _error(exc.status_code, str(exc.detail))


@web_api.get("/", response_class=HTMLResponse)
async def web_ui_root():
    """Serve the calculator page."""
    return render_calculator_page()


@web_api.get("/healthz")
async def healthz():
    """Unauthenticated health probe endpoint for external pingers."""
    return {"status": "ok"}


@web_api.post("/api/stocks/calculate")
async def calculate(body: CalculateRequest):
    """Compute the return of a past investment."""
    try:
        result = await _service().calculate(body.symbol, body.date, body.amount)
    except ValidationError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except NoDataError as exc:
        logger.info("No data for calculation %s: %s", body.symbol, exc)
        return _error(
            status.HTTP_404_NOT_FOUND,
            f"{exc}. Please check the stock symbol and date.",
        )
    except UpstreamUnavailableError as exc:
        logger.error("Calculation error for %s: %s", body.symbol, exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, UPSTREAM_ERROR_MESSAGE)
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Unexpected calculation error for %s: %s", body.symbol, exc, exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    return format_investment_result(result)


@web_api.get("/api/stocks/info/{symbol}")
async def stock_info(symbol: str):
    """Current price for a symbol (validity check)."""
    try:
        quote = await _service().stock_info(symbol)
    except (ValidationError, NoDataError) as exc:
        logger.info("Stock info lookup failed for %s: %s", symbol, exc)
        return _error(status.HTTP_404_NOT_FOUND, SYMBOL_NOT_FOUND_MESSAGE)
    except UpstreamUnavailableError as exc:
        logger.error("Stock info error for %s: %s", symbol, exc)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Market data provider unavailable, please try again later.",
        )
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Unexpected stock info error for %s: %s", symbol, exc, exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    return format_stock_quote(quote)
