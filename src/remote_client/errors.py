"""Typed exception hierarchy for remote document errors.

This module defines all custom exceptions used by the remote client library.
All exceptions inherit from RemoteError, which in turn inherits from SyncError,
so callers can catch any application-level failure with a single clause.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all docs-mirror errors.

    Use this to catch any application-level error from the mirror tool.
    """
    pass


class RemoteError(SyncError):
    """Base exception for all remote document errors."""
    pass


class InvalidDocumentUrlError(RemoteError):
    """Raised when a URL does not reference a Google Docs document."""

    def __init__(self, url: str):
        super().__init__(f"Invalid Google Docs URL: {url}")
        self.url = url


class RemoteExportError(RemoteError):
    """Raised when a remote endpoint answers with a non-success status."""

    def __init__(self, url: str, status_code: int, body: Optional[str] = None, context: str = "Export"):
        message = f"{context} error {status_code} for {url}"
        if body:
            message += f": {body}"
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body


class MissingDownloadLinkError(RemoteError):
    """Raised when the Yandex Disk API response carries no download href."""

    def __init__(self, public_url: str):
        super().__init__(f"Missing download href from Yandex API for {public_url}")
        self.public_url = public_url
