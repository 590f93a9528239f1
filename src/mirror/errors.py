"""Typed exception hierarchy for mirror errors.

This module defines all custom exceptions raised by the synchronization engine.
All exceptions inherit from MirrorError so the CLI can report any fatal run
condition with a single clause. Recoverable conditions (fetch failures,
malformed sidecars, unreadable output files) never surface as exceptions.
"""

from typing import Optional

from src.remote_client.errors import SyncError


class MirrorError(SyncError):
    """Base exception for all mirror errors."""
    pass


class SourceNotFoundError(MirrorError):
    """Raised when the source root does not exist."""

    def __init__(self, source_root: str):
        super().__init__(f"Source path not found: {source_root}")
        self.source_root = source_root


class UnsafeOutputError(MirrorError):
    """Raised when the output root would overwrite or delete the source tree."""

    def __init__(self, source_root: str, output_root: str, reason: str):
        super().__init__(
            f"Refusing to sync {source_root} into {output_root}: {reason}"
        )
        self.source_root = source_root
        self.output_root = output_root
        self.reason = reason


class FilesystemError(MirrorError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(MirrorError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class FileProcessingError(MirrorError):
    """Raised when a single file's pipeline fails unexpectedly, aborting the run."""

    def __init__(self, relative_path: str, reason: str):
        super().__init__(f"Failed to process {relative_path}: {reason}")
        self.relative_path = relative_path
        self.reason = reason
