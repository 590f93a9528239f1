"""Test fixtures for mirror tests.

This module provides:
- Sample source trees (Markdown files, sidecars, ignored files)
- Mock HTTP transports standing in for the Google Docs export endpoints
"""

from .source_trees import (
    ALPHA_README,
    BETA_NOTES,
    GAMMA_SIDECAR,
    GAMMA_PLACEHOLDER,
    seed_sample_tree,
    write_file,
)
from .export_transport import (
    EXPORTED_BODY,
    PRIVATE_BODY,
    google_export_transport,
)

__all__ = [
    "ALPHA_README",
    "BETA_NOTES",
    "GAMMA_SIDECAR",
    "GAMMA_PLACEHOLDER",
    "seed_sample_tree",
    "write_file",
    "EXPORTED_BODY",
    "PRIVATE_BODY",
    "google_export_transport",
]
