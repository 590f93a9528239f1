"""Unit tests for mirror.fetcher module."""

from unittest.mock import AsyncMock

import httpx
import pytest

from src.mirror.fetcher import PLACEHOLDER_LINE, RemoteContentFetcher
from src.mirror.models import Content, ResolvedReference, Unavailable
from src.remote_client.retry_logic import RetryPolicy

DOC_URL = "https://docs.google.com/document/d/doc123/edit"
NO_RETRY = RetryPolicy(max_attempts=1)


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _unreachable(request):
    raise AssertionError(f"unexpected request to {request.url}")


class TestFetch:
    """Test cases for RemoteContentFetcher.fetch."""

    @pytest.mark.asyncio
    async def test_public_export_without_token(self):
        """Without a token the public txt export is requested."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, text="Body text")

        async with _client(handler) as client:
            outcome = await RemoteContentFetcher(client, policy=NO_RETRY).fetch(DOC_URL)

        assert outcome == Content("Body text")
        assert str(requests[0].url) == "https://docs.google.com/document/d/doc123/export?format=txt"
        assert "Authorization" not in requests[0].headers

    @pytest.mark.asyncio
    async def test_api_export_with_token(self):
        """With a token the Drive API export is requested with a bearer header."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, text="Private body")

        async with _client(handler) as client:
            fetcher = RemoteContentFetcher(client, access_token="ya29.t", policy=NO_RETRY)
            outcome = await fetcher.fetch(DOC_URL)

        assert outcome == Content("Private body")
        assert requests[0].url.host == "www.googleapis.com"
        assert requests[0].url.params["mimeType"] == "text/plain"
        assert requests[0].headers["Authorization"] == "Bearer ya29.t"

    @pytest.mark.asyncio
    async def test_empty_url_makes_no_request(self):
        async with _client(_unreachable) as client:
            outcome = await RemoteContentFetcher(client).fetch("")

        assert isinstance(outcome, Unavailable)

    @pytest.mark.asyncio
    async def test_non_google_url_makes_no_request(self):
        """URLs with no derivable export endpoint are unavailable without network access."""
        async with _client(_unreachable) as client:
            outcome = await RemoteContentFetcher(client).fetch("https://example.com/foo")

        assert isinstance(outcome, Unavailable)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403, 404])
    async def test_non_success_is_unavailable(self, status):
        def handler(request):
            return httpx.Response(status, text="denied")

        async with _client(handler) as client:
            outcome = await RemoteContentFetcher(client, policy=NO_RETRY).fetch(DOC_URL)

        assert outcome == Unavailable(f"HTTP {status}")

    @pytest.mark.asyncio
    async def test_transport_error_is_unavailable(self):
        """Network failures never escape fetch."""
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        async with _client(handler) as client:
            outcome = await RemoteContentFetcher(client, policy=NO_RETRY).fetch(DOC_URL)

        assert isinstance(outcome, Unavailable)

    @pytest.mark.asyncio
    async def test_retries_server_errors(self, mocker):
        """Server errors are retried before giving up."""
        mocker.patch("src.remote_client.retry_logic.anyio.sleep", new_callable=AsyncMock)
        statuses = iter([503, 200])

        def handler(request):
            return httpx.Response(next(statuses), text="Recovered")

        async with _client(handler) as client:
            outcome = await RemoteContentFetcher(client).fetch(DOC_URL)

        assert outcome == Content("Recovered")


class TestRenderMarkdown:
    """Test cases for RemoteContentFetcher.render_markdown."""

    def _fetcher(self, heading=True):
        return RemoteContentFetcher(client=None, heading=heading)

    def test_content_with_heading(self):
        reference = ResolvedReference(url=DOC_URL, title="Plan")
        text = self._fetcher().render_markdown(reference, Content("Line 1\nLine 2\n\n"))
        assert text == "# Plan\n\nLine 1\nLine 2\n"

    def test_content_trimmed(self):
        reference = ResolvedReference(url=DOC_URL, title="Plan")
        text = self._fetcher().render_markdown(reference, Content("  \n Body \n "))
        assert text == "# Plan\n\nBody\n"

    def test_content_without_heading(self):
        reference = ResolvedReference(url=DOC_URL, title="Plan")
        assert self._fetcher(heading=False).render_markdown(reference, Content("Body")) == "Body\n"

    def test_placeholder_with_source(self):
        """Unavailable content renders the source URL and the placeholder line."""
        reference = ResolvedReference(url="https://example.com/foo", title="Gamma Doc")
        text = self._fetcher().render_markdown(reference, Unavailable("no endpoint"))
        assert text == (
            "# Gamma Doc\n\n"
            "Source: https://example.com/foo\n\n"
            f"{PLACEHOLDER_LINE}\n"
        )

    def test_placeholder_without_url(self):
        """No Source line is written when the sidecar has no URL."""
        reference = ResolvedReference(url="", title="Notes")
        text = self._fetcher().render_markdown(reference, Unavailable("no url"))
        assert text == f"# Notes\n\n{PLACEHOLDER_LINE}\n"

    def test_empty_body_renders_placeholder(self):
        reference = ResolvedReference(url=DOC_URL, title="Plan")
        text = self._fetcher(heading=False).render_markdown(reference, Content("   \n"))
        assert text == f"Source: {DOC_URL}\n\n{PLACEHOLDER_LINE}\n"

    def test_placeholder_text(self):
        assert PLACEHOLDER_LINE == "_Content not fetched (auth required or not public)._"


class TestRender:
    """Test cases for RemoteContentFetcher.render."""

    @pytest.mark.asyncio
    async def test_malformed_sidecar_renders_fallback(self):
        """A malformed sidecar renders with the fallback title and no source."""
        async with _client(_unreachable) as client:
            text = await RemoteContentFetcher(client).render("{not json", "page")

        assert text == f"# page\n\n{PLACEHOLDER_LINE}\n"

    @pytest.mark.asyncio
    async def test_fetched_document(self):
        def handler(request):
            return httpx.Response(200, text="Hello from Docs\r\n")

        sidecar = '{"url": "%s", "title": "Hello"}' % DOC_URL
        async with _client(handler) as client:
            text = await RemoteContentFetcher(client, policy=NO_RETRY).render(sidecar, "fallback")

        assert text == "# Hello\n\nHello from Docs\n"
