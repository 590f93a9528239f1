"""Data models for the mirror engine.

This module defines all data models used by the synchronization engine.
All models use dataclasses for clean, type-safe data structures. Every model
is ephemeral: it is recomputed on each run and never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class FileKind(Enum):
    """Recognized kind of a source file, derived from its extension.

    - PLAIN_TEXT: Markdown (.md, .markdown), copied byte-for-byte
    - REMOTE_REFERENCE: Google Docs sidecar (.gdoc), rendered to Markdown
    - UNRECOGNIZED: anything else, skipped silently
    """
    PLAIN_TEXT = "plain-markdown"
    REMOTE_REFERENCE = "remote-reference"
    UNRECOGNIZED = "ignored"


class SyncPhase(Enum):
    """Phases of a single orchestrator run."""
    IDLE = "idle"
    VALIDATING_SOURCE = "validating-source"
    CLEANING = "cleaning"
    PREPARING = "preparing"
    WALKING = "walking"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class RemoteReferenceDescriptor:
    """Structured content of a sidecar descriptor file.

    Attributes:
        url: Remote document URL, None when absent
        title: Display title (from "title", or "name" as alternate key), None when absent
    """
    url: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class ResolvedReference:
    """Descriptor with defaults applied, ready for fetching and rendering.

    Attributes:
        url: Remote document URL, empty string when absent
        title: Descriptor title, or the fallback title derived from the filename
    """
    url: str
    title: str


@dataclass(frozen=True)
class Content:
    """Fetch outcome carrying the remote document's plain text."""
    text: str


@dataclass(frozen=True)
class Unavailable:
    """Fetch outcome when no content could be obtained.

    Attributes:
        reason: Short human-readable explanation (for debug logging only)
    """
    reason: str = ""


FetchOutcome = Union[Content, Unavailable]


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one source file.

    Attributes:
        relative_path: POSIX path relative to the source root
        kind: Classified file kind
        processed: 1 for handled kinds, 0 for unrecognized files
        wrote: True if the destination file was (re)written
    """
    relative_path: str
    kind: FileKind
    processed: int = 0
    wrote: bool = False


@dataclass
class SyncResult:
    """Aggregate result of a run, reduced from per-file outcomes.

    Attributes:
        processed_count: Number of files handled (the count reported to users)
        written_count: Number of destination files actually written
        unchanged_count: Number of handled files whose destination was already current
        outcomes: Per-file outcomes in walk order
    """
    processed_count: int = 0
    written_count: int = 0
    unchanged_count: int = 0
    outcomes: List[FileOutcome] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: List[FileOutcome]) -> "SyncResult":
        processed = sum(outcome.processed for outcome in outcomes)
        written = sum(1 for outcome in outcomes if outcome.wrote)
        return cls(
            processed_count=processed,
            written_count=written,
            unchanged_count=processed - written,
            outcomes=list(outcomes),
        )


@dataclass
class SyncOptions:
    """Configuration for a mirror run.

    Attributes:
        source_dir: Directory to mirror (relative paths resolve against the cwd)
        output_dir: Directory receiving the mirrored tree
        clean: Remove the output directory before syncing
        heading: Prefix rendered remote documents with a "# <title>" heading
        concurrency: Maximum number of files processed at once
        exports: Formats used by the standalone Google Docs exporter
    """
    source_dir: str = "source"
    output_dir: str = "docs"
    clean: bool = True
    heading: bool = True
    concurrency: int = 4
    exports: List[str] = field(default_factory=lambda: ["txt", "docx"])
