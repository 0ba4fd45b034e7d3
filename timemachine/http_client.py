"""Shared HTTP client with retry logic for upstream market-data calls."""

import asyncio
import logging
import random
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# Global HTTP client (for connection pooling)
_http_client: Optional[httpx.AsyncClient] = None


def get_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """Get or create global HTTP client."""
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=50),
            follow_redirects=True,
        )
    return _http_client


async def close_http_client() -> None:
    """Close global HTTP client."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def _backoff_delay(attempt: int, backoff_factor: float) -> float:
    return backoff_factor * (2 ** attempt) + random.uniform(0, 0.2)


def _retry_after_delay(response: httpx.Response, attempt: int, backoff_factor: float) -> float:
    """Seconds to wait after a 429; falls back to backoff if Retry-After is not numeric."""
    try:
        return float(response.headers.get("Retry-After", "1"))
    except ValueError:
        return _backoff_delay(attempt, backoff_factor)


async def _wait_before_retry(delay: float, reason: str) -> None:
    logger.warning("%s. Retrying in %.2f seconds...", reason, delay)
    await asyncio.sleep(delay)


async def http_get(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout: float = 10.0,
    retries: int = 3,
    backoff_factor: float = 0.5,
) -> httpx.Response:
    """
    GET request with exponential backoff retry on transport-level failures.

    Timeouts, connection errors, 429 and 5xx responses are retried up to
    *retries* attempts. Any other non-2xx status is raised immediately.

    Args:
        client: Shared httpx.AsyncClient
        url: URL to fetch
        params: Query parameters
        headers: Custom headers
        timeout: Per-attempt timeout in seconds
        retries: Total number of attempts
        backoff_factor: Base delay for exponential backoff

    Returns:
        httpx.Response object

    Raises:
        httpx.HTTPError on persistent failure
    """
    last_exception: Optional[Exception] = None

    for attempt in range(retries):
        can_retry = attempt < retries - 1
        try:
            logger.debug("HTTP GET attempt %d/%d: %s", attempt + 1, retries, url)

            response = await client.get(
                url,
                params=params,
                headers=headers,
                timeout=timeout,
            )

            if can_retry and response.status_code == 429:
                await _wait_before_retry(
                    _retry_after_delay(response, attempt, backoff_factor),
                    "Rate limited (429)",
                )
                continue

            if can_retry and response.status_code >= 500:
                await _wait_before_retry(
                    _backoff_delay(attempt, backoff_factor),
                    f"Server error ({response.status_code})",
                )
                continue

            # Success or client error
            response.raise_for_status()
            logger.debug("HTTP GET success: %s", url)
            return response

        except (httpx.TimeoutException, httpx.ConnectError) as exc:
            last_exception = exc
            if can_retry:
                await _wait_before_retry(
                    _backoff_delay(attempt, backoff_factor),
                    f"HTTP error on attempt {attempt + 1}: {exc}",
                )
            else:
                logger.error("HTTP GET failed after %d attempts: %s", retries, exc)

        except httpx.HTTPError as exc:
            logger.warning("HTTP error: %s", exc)
            raise

    # All retries exhausted
    if last_exception:
        raise last_exception

    raise httpx.NetworkError("HTTP GET failed: max retries exceeded")
