"""Standalone exporters that save remote documents to a local directory.

Two sources are supported:
- Google Docs: one file per requested export format, public access only
- Yandex Disk: a single publicly shared file

Both resolve the target filename from the Content-Disposition header, sanitize
it, and write the response body unchanged. Errors are raised as typed
RemoteError subclasses so the CLI can map them to exit codes.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import anyio
import httpx

from .content_disposition import parse_filename
from .doc_url import public_export_url, require_doc_id
from .errors import MissingDownloadLinkError, RemoteExportError
from .filename_sanitizer import FilenameSanitizer
from .retry_logic import DEFAULT_RETRY_POLICY, RetryPolicy, fetch_with_retry

logger = logging.getLogger(__name__)

YANDEX_DOWNLOAD_API = 'https://cloud-api.yandex.net/v1/disk/public/resources/download'
DEFAULT_YANDEX_URL = 'https://disk.yandex.ru/d/N2xaJZWo-hhFYw'
DEFAULT_YANDEX_FILENAME = 'yadisk-file.md'

DEFAULT_EXPORT_FORMATS = ('txt', 'docx')


def parse_formats(raw: Optional[str]) -> List[str]:
    """Parse a comma-separated format list such as "txt, DOCX" into ['txt', 'docx']."""
    if not raw:
        return []
    return [fmt.strip().lower() for fmt in raw.split(',') if fmt.strip()]


def _export_target(output_dir: Path, doc_id: str, fmt: str, header_name: Optional[str]) -> Path:
    """Choose the output path for one export format.

    txt exports are saved as Markdown; other formats keep the server filename
    when one was proposed.
    """
    base = FilenameSanitizer.sanitize(FilenameSanitizer.strip_extension(header_name or ''))
    base = base or f"document-{doc_id}"
    if fmt == 'txt':
        return output_dir / f"{base}.md"
    name = FilenameSanitizer.sanitize(header_name) if header_name else ''
    return output_dir / (name or f"{base}.{fmt}")


async def _save_response(response: httpx.Response, target: Path) -> None:
    await anyio.Path(target).write_bytes(response.content)
    logger.info(f"Saved: {target}")


async def export_google_doc(
    url: str,
    formats: Sequence[str],
    output_dir: Path,
    client: httpx.AsyncClient,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> List[Path]:
    """Export a public Google Doc in each requested format.

    The URL is validated before any directory is created or request is sent.

    Args:
        url: Google Docs document URL
        formats: Export formats, e.g. ['txt', 'docx']
        output_dir: Directory receiving the exported files
        client: Shared async HTTP client
        policy: Retry settings for each request

    Returns:
        Paths of the saved files, in format order

    Raises:
        InvalidDocumentUrlError: If the URL is not a Google Docs document URL
        RemoteExportError: If an export endpoint answers with a non-success status
        httpx.TransportError: If the network fails after all retries
    """
    doc_id = require_doc_id(url)
    await anyio.Path(output_dir).mkdir(parents=True, exist_ok=True)

    saved: List[Path] = []
    for fmt in formats:
        export_url = public_export_url(doc_id, fmt)
        logger.debug(f"Exporting {doc_id} as {fmt}")
        response = await fetch_with_retry(client, export_url, policy=policy)
        if not response.is_success:
            raise RemoteExportError(
                export_url,
                response.status_code,
                response.text,
                context=f"Public export ({fmt})",
            )

        header_name = parse_filename(response.headers.get('content-disposition'))
        target = _export_target(output_dir, doc_id, fmt, header_name)
        await _save_response(response, target)
        saved.append(target)

    return saved


async def _resolve_yandex_href(
    public_url: str,
    client: httpx.AsyncClient,
    policy: RetryPolicy,
) -> str:
    api_url = str(httpx.URL(YANDEX_DOWNLOAD_API, params={'public_key': public_url}))
    response = await fetch_with_retry(client, api_url, policy=policy)
    if not response.is_success:
        raise RemoteExportError(api_url, response.status_code, response.text, context="Yandex API")

    try:
        data = response.json()
    except ValueError:
        raise MissingDownloadLinkError(public_url)

    href = data.get('href') if isinstance(data, dict) else None
    if not isinstance(href, str) or not href:
        raise MissingDownloadLinkError(public_url)
    return href


async def download_yandex_public_file(
    public_url: str,
    output_dir: Path,
    client: httpx.AsyncClient,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> Path:
    """Download a publicly shared Yandex Disk file.

    Args:
        public_url: Public share link (https://disk.yandex.ru/d/...)
        output_dir: Directory receiving the file
        client: Shared async HTTP client
        policy: Retry settings for each request

    Returns:
        Path of the saved file

    Raises:
        RemoteExportError: If the API or the download answers with a non-success status
        MissingDownloadLinkError: If the API response has no usable href
        httpx.TransportError: If the network fails after all retries
    """
    await anyio.Path(output_dir).mkdir(parents=True, exist_ok=True)
    href = await _resolve_yandex_href(public_url, client, policy)

    response = await fetch_with_retry(client, href, policy=policy)
    if not response.is_success:
        raise RemoteExportError(href, response.status_code, response.text, context="Download")

    header_name = parse_filename(response.headers.get('content-disposition'))
    safe_name = FilenameSanitizer.sanitize(header_name or DEFAULT_YANDEX_FILENAME)
    target = output_dir / (safe_name or DEFAULT_YANDEX_FILENAME)
    await _save_response(response, target)
    return target
