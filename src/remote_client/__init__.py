"""Remote document client library for docs-mirror.

This package provides the HTTP side of the mirror: Google Docs URL parsing,
retrying GET requests with exponential backoff, credential loading, and the
standalone Google Docs / Yandex Disk exporters.
"""

from .errors import (
    SyncError,
    RemoteError,
    InvalidDocumentUrlError,
    RemoteExportError,
    MissingDownloadLinkError,
)
from .auth import Authenticator, Credentials
from .doc_url import extract_doc_id, build_export_url
from .filename_sanitizer import FilenameSanitizer
from .retry_logic import RetryPolicy, fetch_with_retry

__all__ = [
    "SyncError",
    "RemoteError",
    "InvalidDocumentUrlError",
    "RemoteExportError",
    "MissingDownloadLinkError",
    "Authenticator",
    "Credentials",
    "extract_doc_id",
    "build_export_url",
    "FilenameSanitizer",
    "RetryPolicy",
    "fetch_with_retry",
]
