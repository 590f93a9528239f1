"""Shared async HTTP client construction."""

from typing import Optional

import httpx

USER_AGENT = 'docs-mirror/0.1'

# 30 second timeout to prevent hanging on unresponsive endpoints
DEFAULT_TIMEOUT = 30.0


def build_client(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> httpx.AsyncClient:
    """Create the AsyncClient used for every remote request.

    Redirects are followed because both the Google export endpoint and the
    Yandex download href answer with redirects to the actual content host.

    Args:
        transport: Optional transport override (tests pass httpx.MockTransport)
        timeout: Per-request timeout in seconds

    Returns:
        A configured httpx.AsyncClient; callers own its lifetime
    """
    return httpx.AsyncClient(
        headers={'User-Agent': USER_AGENT},
        timeout=timeout,
        follow_redirects=True,
        transport=transport,
    )
