"""Data models for CLI operations.

This module defines the exit codes and summary model used by the CLI.
"""

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Missing source, unsafe output, configuration error,
      file processing failure or invalid URL
    - NETWORK_ERROR (4): Remote endpoint unreachable or answering with an error

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    NETWORK_ERROR = 4


@dataclass
class SyncSummary:
    """Summary of a mirror run for display to the user.

    Attributes:
        processed_count: Number of recognized files processed
        written_count: Number of destination files written
        unchanged_count: Number of destination files already current

    Example:
        >>> summary = SyncSummary(processed_count=3, written_count=1, unchanged_count=2)
    """
    processed_count: int = 0
    written_count: int = 0
    unchanged_count: int = 0
