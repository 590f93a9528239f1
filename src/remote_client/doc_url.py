"""Google Docs URL parsing.

Extracts document IDs from Google Docs URLs and builds the export endpoints
used to download a document's rendering.
"""

import re
from typing import Optional
from urllib.parse import urlparse, quote

from .errors import InvalidDocumentUrlError

DOCS_HOST = 'docs.google.com'

PUBLIC_EXPORT_URL = 'https://docs.google.com/document/d/{doc_id}/export?format={fmt}'
API_EXPORT_URL = 'https://www.googleapis.com/drive/v3/files/{doc_id}/export?mimeType={mime_type}'

# Google document IDs only contain URL-safe base64 characters
DOC_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')

DEFAULT_DOC_URL = (
    'https://docs.google.com/document/d/1s41KPlsesw6fJR5FKVGPVniTwg6duvtluSzIakAeUZw'
    '/edit?tab=t.0#heading=h.6ghsgs5bvvge'
)


def extract_doc_id(url: str) -> Optional[str]:
    """Extract the document ID from a Google Docs URL.

    Supported path shapes:
        - /document/d/<id>
        - /document/u/<n>/d/<id>  (user shard, n numeric)
        - /a/<domain>/document/d/<id>

    Args:
        url: Any URL string

    Returns:
        The document ID, or None if the URL is not a Google Docs document URL

    Examples:
        >>> extract_doc_id("https://docs.google.com/document/d/abc123/edit")
        'abc123'
        >>> extract_doc_id("https://example.com/document/d/abc123/edit") is None
        True
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    if not parsed.hostname or DOCS_HOST not in parsed.hostname:
        return None

    segments = [s for s in parsed.path.split('/') if s]
    doc_id = None
    for i, segment in enumerate(segments):
        if segment != 'document':
            continue
        rest = segments[i + 1:]
        if len(rest) >= 2 and rest[0] == 'd':
            doc_id = rest[1]
            break
        if len(rest) >= 4 and rest[0] == 'u' and rest[1].isdigit() and rest[2] == 'd':
            doc_id = rest[3]
            break

    if not doc_id or not DOC_ID_PATTERN.match(doc_id):
        return None
    return doc_id


def require_doc_id(url: str) -> str:
    """Extract the document ID or raise InvalidDocumentUrlError."""
    doc_id = extract_doc_id(url)
    if doc_id is None:
        raise InvalidDocumentUrlError(url)
    return doc_id


def public_export_url(doc_id: str, fmt: str = 'txt') -> str:
    """Return the unauthenticated export URL for a document ID."""
    return PUBLIC_EXPORT_URL.format(doc_id=doc_id, fmt=quote(fmt, safe=''))


def api_export_url(doc_id: str, mime_type: str = 'text/plain') -> str:
    """Return the Drive API export URL for a document ID."""
    return API_EXPORT_URL.format(doc_id=doc_id, mime_type=mime_type)


def build_export_url(url: str, fmt: str = 'txt') -> Optional[str]:
    """Build the public export URL for a Google Docs URL, or None if not a doc URL."""
    doc_id = extract_doc_id(url)
    return public_export_url(doc_id, fmt) if doc_id else None
