"""
HTTP Client Module

Provides a globally shared httpx.AsyncClient for calls to Google identity
endpoints, with:
- Connection pooling for efficient reuse
- Optional retries with exponential backoff (disabled by default)
- Configurable timeouts
"""

import asyncio
import logging
from typing import Optional, Any

import httpx


logger = logging.getLogger(__name__)


# ============== Configuration ==============

# Connection pool limits
MAX_CONNECTIONS = 50
MAX_KEEPALIVE_CONNECTIONS = 10
KEEPALIVE_EXPIRY = 30  # seconds

# Timeout configuration
DEFAULT_TIMEOUT = 30.0  # seconds

# Retry configuration
MAX_RETRIES = 0
RETRY_BACKOFF_BASE = 0.5  # seconds


# ============== Global Client Instance ==============

_http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """
    Get or create the global async HTTP client.

    Returns:
        httpx.AsyncClient: Shared client instance.
    """
    global _http_client
    if _http_client is None:
        limits = httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
            keepalive_expiry=KEEPALIVE_EXPIRY,
        )
        timeout = httpx.Timeout(DEFAULT_TIMEOUT)

        _http_client = httpx.AsyncClient(
            limits=limits,
            timeout=timeout,
            http2=True,
        )
    return _http_client


async def close_http_client() -> None:
    """
    Close the global HTTP client.

    Should be called during application shutdown.
    """
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


# ============== Request Helpers ==============

async def request_with_retry(
    method: str,
    url: str,
    max_retries: Optional[int] = None,
    **kwargs: Any,
) -> httpx.Response:
    """
    Make an HTTP request, retrying on 5xx and connection errors.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        max_retries: Retry attempts; defaults to ``MAX_RETRIES`` (no retries)
        **kwargs: Additional arguments passed to httpx request

    Returns:
        httpx.Response: The response object

    Raises:
        httpx.HTTPError: If the last attempt fails with a transport error
    """
    if max_retries is None:
        max_retries = MAX_RETRIES

    client = get_http_client()

    for attempt in range(max_retries + 1):
        try:
            response = await client.request(method, url, **kwargs)

            if response.status_code >= 500 and attempt < max_retries:
                wait_time = RETRY_BACKOFF_BASE * (2 ** attempt)
                logger.warning(f"[HTTP] Server error {response.status_code}, retrying in {wait_time}s...")
                await asyncio.sleep(wait_time)
                continue

            return response

        except (httpx.ConnectError, httpx.ReadTimeout, httpx.WriteTimeout) as e:
            if attempt >= max_retries:
                raise
            wait_time = RETRY_BACKOFF_BASE * (2 ** attempt)
            logger.warning(f"[HTTP] Connection error, retrying in {wait_time}s: {e}")
            await asyncio.sleep(wait_time)

    raise httpx.HTTPError(f"Request to {url} failed after {max_retries} retries")


async def post_with_retry(url: str, **kwargs: Any) -> httpx.Response:
    """Convenience wrapper for POST requests."""
    return await request_with_retry("POST", url, **kwargs)
