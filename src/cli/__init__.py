"""Command-line interface for docs-mirror.

This package provides the `docs-mirror` CLI tool: `sync` mirrors a source tree
of Markdown files and Google Docs sidecars into an output directory, while
`gdoc` and `yadisk` download single remote documents.
"""

from .sync_command import SyncCommand
from .export_command import ExportCommand
from .models import ExitCode, SyncSummary
from .errors import CLIError, InvalidOptionError

__all__ = [
    'SyncCommand',
    'ExportCommand',
    'ExitCode',
    'SyncSummary',
    'CLIError',
    'InvalidOptionError',
]
