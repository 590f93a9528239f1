"""Directory mirroring engine for docs-mirror.

This package walks a source tree, copies Markdown files unchanged, renders
Google Docs sidecars to Markdown via their plain-text export, and writes the
result into an output tree idempotently under bounded concurrency.
"""

from .config_loader import ConfigLoader
from .errors import (
    MirrorError,
    SourceNotFoundError,
    UnsafeOutputError,
    FilesystemError,
    ConfigError,
    FileProcessingError,
)
from .fetcher import RemoteContentFetcher
from .models import (
    FileKind,
    SyncPhase,
    RemoteReferenceDescriptor,
    ResolvedReference,
    Content,
    Unavailable,
    FileOutcome,
    SyncResult,
    SyncOptions,
)
from .orchestrator import SyncOrchestrator, run_sync
from .writer import IdempotentWriter

__all__ = [
    'ConfigLoader',
    'MirrorError',
    'SourceNotFoundError',
    'UnsafeOutputError',
    'FilesystemError',
    'ConfigError',
    'FileProcessingError',
    'RemoteContentFetcher',
    'FileKind',
    'SyncPhase',
    'RemoteReferenceDescriptor',
    'ResolvedReference',
    'Content',
    'Unavailable',
    'FileOutcome',
    'SyncResult',
    'SyncOptions',
    'SyncOrchestrator',
    'run_sync',
    'IdempotentWriter',
]
