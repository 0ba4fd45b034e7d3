"""Configuration management for the Investment Time Machine."""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

YAHOO_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)
SUPPORTED_PROVIDERS = ("yahoo", "yfinance")


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Market data
    price_provider: str = "yahoo"
    yahoo_chart_url: str = YAHOO_CHART_URL
    user_agent: str = DEFAULT_USER_AGENT

    # Lookup windows (calendar days)
    historical_window_days: int = 7
    current_window_days: int = 1

    # Network settings
    http_timeout: float = 10.0
    max_concurrent_requests: int = 10
    max_retries: int = 3
    retry_backoff_factor: float = 0.5
    # Upper bound on one lookup, retries and backoff included
    request_deadline: float = 30.0

    # Web server
    api_host: str = "0.0.0.0"
    api_port: int = 5001
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    def __post_init__(self):
        if self.price_provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"PRICE_PROVIDER must be one of {', '.join(SUPPORTED_PROVIDERS)}, "
                f"got {self.price_provider!r}"
            )
        if self.http_timeout <= 0:
            raise ValueError("HTTP_TIMEOUT must be positive")
        if self.request_deadline <= 0:
            raise ValueError("REQUEST_DEADLINE must be positive")
        if self.max_retries < 1:
            raise ValueError("MAX_RETRIES must be at least 1")
        if self.historical_window_days < 1 or self.current_window_days < 1:
            raise ValueError("Lookup windows must be at least one day")

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        origins = os.getenv("CORS_ORIGINS", "*")

        return cls(
            price_provider=os.getenv("PRICE_PROVIDER", "yahoo").strip().lower() or "yahoo",
            yahoo_chart_url=os.getenv("YAHOO_CHART_URL", YAHOO_CHART_URL).strip().rstrip("/"),
            user_agent=os.getenv("HTTP_USER_AGENT", "").strip() or DEFAULT_USER_AGENT,
            historical_window_days=int(os.getenv("HISTORICAL_WINDOW_DAYS", "7")),
            current_window_days=int(os.getenv("CURRENT_WINDOW_DAYS", "1")),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "10")),
            max_concurrent_requests=int(os.getenv("MAX_CONCURRENT_REQUESTS", "10")),
            max_retries=int(os.getenv("MAX_RETRIES", "3")),
            retry_backoff_factor=float(os.getenv("RETRY_BACKOFF_FACTOR", "0.5")),
            request_deadline=float(os.getenv("REQUEST_DEADLINE", "30")),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", "5001")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
