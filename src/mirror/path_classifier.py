"""Extension-based classification of source files.

Pure functions with no I/O: given a relative path they decide how the file is
handled and where its output goes.
"""

from pathlib import Path, PurePosixPath
from typing import Optional

from .models import FileKind

PLAIN_TEXT_EXTENSIONS = frozenset({'md', 'markdown'})
REMOTE_REFERENCE_EXTENSIONS = frozenset({'gdoc'})
RECOGNIZED_EXTENSIONS = PLAIN_TEXT_EXTENSIONS | REMOTE_REFERENCE_EXTENSIONS

# Extension written for rendered remote documents
NORMALIZED_EXTENSION = 'md'


def extension_of(path: str) -> str:
    """Return the lower-cased extension without its dot.

    Dotfiles such as ".env" have no extension.

    Examples:
        >>> extension_of('notes/README.MD')
        'md'
        >>> extension_of('.env')
        ''
    """
    suffix = PurePosixPath(path.replace('\\', '/')).suffix
    return suffix[1:].lower() if suffix else ''


def classify(relative_path: str) -> FileKind:
    """Classify a source file by extension, case-insensitively."""
    ext = extension_of(relative_path)
    if ext in PLAIN_TEXT_EXTENSIONS:
        return FileKind.PLAIN_TEXT
    if ext in REMOTE_REFERENCE_EXTENSIONS:
        return FileKind.REMOTE_REFERENCE
    return FileKind.UNRECOGNIZED


def is_recognized(name: str) -> bool:
    return extension_of(name) in RECOGNIZED_EXTENSIONS


def destination_relative(relative_path: str, kind: FileKind) -> Optional[str]:
    """Return the destination path relative to the output root.

    Plain-text files keep their path (including ".markdown"); remote
    references get the normalized extension; unrecognized files have none.
    """
    if kind is FileKind.PLAIN_TEXT:
        return relative_path
    if kind is FileKind.REMOTE_REFERENCE:
        posix = PurePosixPath(relative_path)
        return str(posix.with_suffix(f".{NORMALIZED_EXTENSION}"))
    return None


def destination_for(relative_path: str, kind: FileKind, output_root: Path) -> Optional[Path]:
    """Compute the absolute destination path under output_root.

    Examples:
        >>> destination_for('a/b/page.gdoc', FileKind.REMOTE_REFERENCE, Path('/out'))
        PosixPath('/out/a/b/page.md')
        >>> destination_for('a/readme.markdown', FileKind.PLAIN_TEXT, Path('/out'))
        PosixPath('/out/a/readme.markdown')
    """
    rel = destination_relative(relative_path, kind)
    if rel is None:
        return None
    return output_root.joinpath(*PurePosixPath(rel).parts)


def fallback_title(relative_path: str) -> str:
    """Derive a display title from a sidecar's file name (extension stripped).

    Examples:
        >>> fallback_title('team/Roadmap 2025.GDOC')
        'Roadmap 2025'
    """
    name = PurePosixPath(relative_path).name
    for ext in REMOTE_REFERENCE_EXTENSIONS:
        suffix = f".{ext}"
        if name.lower().endswith(suffix):
            return name[:-len(suffix)]
    return name
