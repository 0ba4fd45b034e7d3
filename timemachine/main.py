"""Main entry point for the Investment Time Machine web server."""

import asyncio
import logging
import sys
from datetime import datetime, timezone

import uvicorn
from dotenv import load_dotenv

from .config import Config
from .http_client import close_http_client, get_http_client
from .providers import build_provider
from .services.investment_service import InvestmentService
from .services.price_resolver import PriceResolver
from .web_api import configure_api_dependencies, enable_cors, web_api

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    load_dotenv()

    # Load configuration
    config = Config.from_env()
    logging.getLogger().setLevel(config.log_level)

    # Shared HTTP client with connection pooling
    http_client = get_http_client(config.http_timeout)
    semaphore = asyncio.Semaphore(config.max_concurrent_requests)

    provider = build_provider(config, http_client, semaphore=semaphore)
    resolver = PriceResolver(
        provider,
        historical_window_days=config.historical_window_days,
        current_window_days=config.current_window_days,
    )
    configure_api_dependencies(InvestmentService(resolver))
    enable_cors(config.cors_origins)

    logger.info("Starting server at %s", datetime.now(timezone.utc).isoformat())
    logger.info(
        "Configuration: provider=%s, http_timeout=%.1f, max_retries=%d",
        config.price_provider, config.http_timeout, config.max_retries,
    )

    server = uvicorn.Server(
        uvicorn.Config(
            web_api,
            host=config.api_host,
            port=config.api_port,
            log_level=config.log_level.lower(),
        )
    )
    try:
        await server.serve()
    finally:
        logger.info("Stopping server...")
        await close_http_client()
        logger.info("Shutdown complete")


def run() -> None:
    """Synchronous entry point for running the server."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
