"""Best-effort fetching and rendering of remote documents.

This module turns a sidecar descriptor into Markdown. Fetching is best effort:
every failure (non-success status, transport error, unparseable URL) becomes an
Unavailable outcome, and the rendered output then documents the failure inline
with a placeholder instead of aborting the run.
"""

import logging
from typing import Mapping, Optional

import httpx

from src.remote_client.doc_url import api_export_url, extract_doc_id, public_export_url
from src.remote_client.retry_logic import DEFAULT_RETRY_POLICY, RetryPolicy, fetch_with_retry

from .descriptor import resolve_descriptor
from .models import Content, FetchOutcome, ResolvedReference, Unavailable

logger = logging.getLogger(__name__)

PLACEHOLDER_LINE = "_Content not fetched (auth required or not public)._"


class RemoteContentFetcher:
    """Fetches remote document text and renders it as Markdown.

    Strategy, in order:
    1. Access token available and document ID derived: Drive API export
       with a bearer token
    2. Document ID derived: public export URL, unauthenticated
    3. Otherwise: no request at all

    Attributes:
        heading: Whether rendered output starts with a "# <title>" heading

    Example:
        >>> async with build_client() as client:
        ...     fetcher = RemoteContentFetcher(client, access_token=None)
        ...     markdown = await fetcher.render(sidecar_text, "Roadmap")
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        access_token: Optional[str] = None,
        heading: bool = True,
        policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    ):
        """Initialize the fetcher.

        Args:
            client: Shared async HTTP client
            access_token: Optional Google bearer token (never logged)
            heading: Prefix output with the resolved title as a heading
            policy: Retry settings for export requests
        """
        self._client = client
        self._access_token = access_token
        self._policy = policy
        self.heading = heading

    async def fetch(self, url: str) -> FetchOutcome:
        """Fetch the plain-text export of the document behind url.

        Args:
            url: Document URL from the sidecar (may be empty)

        Returns:
            Content with the response body, or Unavailable; never raises
        """
        if not url:
            return Unavailable("no url")

        doc_id = extract_doc_id(url)
        if doc_id is None:
            return Unavailable(f"no export endpoint for {url}")

        if self._access_token:
            headers = {'Authorization': f"Bearer {self._access_token}"}
            return await self._get(api_export_url(doc_id), headers)
        return await self._get(public_export_url(doc_id, 'txt'))

    async def _get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> FetchOutcome:
        try:
            response = await fetch_with_retry(self._client, url, headers=headers, policy=self._policy)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Fetch failed for {url}: {e}")
            return Unavailable(str(e))

        if not response.is_success:
            logger.debug(f"Fetch for {url} returned HTTP {response.status_code}")
            return Unavailable(f"HTTP {response.status_code}")

        return Content(response.text)

    def render_markdown(self, reference: ResolvedReference, outcome: FetchOutcome) -> str:
        """Render the Markdown document for a reference and its fetch outcome.

        The body is trimmed; an empty body is treated like a failed fetch.
        """
        parts = []
        if self.heading:
            parts.append(f"# {reference.title}\n\n")

        body = outcome.text.strip() if isinstance(outcome, Content) else ''
        if body:
            parts.append(f"{body}\n")
        else:
            if reference.url:
                parts.append(f"Source: {reference.url}\n\n")
            parts.append(f"{PLACEHOLDER_LINE}\n")

        return ''.join(parts)

    async def render(self, descriptor_text: str, fallback_title: str) -> str:
        """Parse a sidecar, fetch its document and render Markdown.

        Args:
            descriptor_text: Raw sidecar file content
            fallback_title: Title used when the sidecar names none

        Returns:
            Markdown text; always produced, even when the fetch fails
        """
        reference = resolve_descriptor(descriptor_text, fallback_title)
        outcome = await self.fetch(reference.url)
        return self.render_markdown(reference, outcome)
