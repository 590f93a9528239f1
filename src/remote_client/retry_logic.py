"""Retry logic with exponential backoff for remote HTTP endpoints.

This module provides retry functionality for GET requests against the Google
Docs and Yandex Disk endpoints. It retries on 429 rate limits, 5xx server
errors and transport failures with exponential backoff (1s, 2s, 4s, 8s, capped
at 10s), and returns every other response immediately.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import anyio
import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff settings for fetch_with_retry.

    Attributes:
        max_attempts: Total number of requests made before giving up
        base_delay: Delay in seconds after the first failed attempt
        max_delay: Upper bound for any single delay in seconds
    """
    max_attempts: int = 5
    base_delay: float = 1.0
    max_delay: float = 10.0

    def delay_for(self, attempt: int) -> float:
        """Return the sleep before retrying after the given zero-based attempt."""
        return min(self.base_delay * (2 ** attempt), self.max_delay)


DEFAULT_RETRY_POLICY = RetryPolicy()


def is_retriable_status(status_code: int) -> bool:
    """Check if an HTTP status should be retried (429 or any 5xx)."""
    return status_code == 429 or 500 <= status_code < 600


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    headers: Optional[Mapping[str, str]] = None,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> httpx.Response:
    """GET a URL, retrying rate limits, server errors and transport failures.

    Args:
        client: Shared async HTTP client
        url: URL to request
        headers: Optional extra request headers
        policy: Backoff settings

    Returns:
        The first successful or non-retriable response, or the last response
        once attempts are exhausted

    Raises:
        httpx.TransportError: If the final attempt fails at the transport level
        httpx.InvalidURL: If the URL cannot be parsed (never retried)

    Example:
        >>> async with build_client() as client:
        ...     response = await fetch_with_retry(client, export_url)
    """
    attempts = max(1, policy.max_attempts)

    for attempt in range(attempts):
        is_last = attempt == attempts - 1
        try:
            response = await client.get(url, headers=headers)
        except httpx.TransportError as e:
            if is_last:
                logger.debug(f"Request to {url} failed after {attempts} attempt(s): {e}")
                raise
            reason = f"transport error: {e}"
        else:
            if response.is_success or not is_retriable_status(response.status_code):
                return response
            if is_last:
                logger.debug(
                    f"Request to {url} still returning {response.status_code} "
                    f"after {attempts} attempt(s)"
                )
                return response
            reason = f"HTTP {response.status_code}"

        wait_time = policy.delay_for(attempt)
        logger.info(
            f"Retrying {url} in {wait_time:g}s after {reason} "
            f"(attempt {attempt + 1}/{attempts})"
        )
        await anyio.sleep(wait_time)

    # Unreachable: the final attempt always returns or raises
    raise RuntimeError("fetch_with_retry exhausted without a result")
