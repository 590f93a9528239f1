"""Typed exception hierarchy for CLI-related errors."""

from src.remote_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class InvalidOptionError(CLIError):
    """Raised when a command-line option has an unusable value."""

    def __init__(self, option: str, reason: str):
        super().__init__(f"Invalid value for {option}: {reason}")
        self.option = option
        self.reason = reason
