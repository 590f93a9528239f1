"""Source tree enumeration.

Walks the source root depth-first with an explicit stack, returning the
POSIX-style relative paths of every recognized file. Infrastructure
directories and the nested output directory are never entered.
"""

import logging
import os
from pathlib import Path
from typing import List, NamedTuple, Optional

import anyio

from .errors import FilesystemError
from .path_classifier import is_recognized

logger = logging.getLogger(__name__)

# Version control, dependency caches, build output and editor/CI config
SKIP_DIRS = frozenset({
    '.git',
    '.github',
    'node_modules',
    'dist',
    'build',
    '.next',
    '.vercel',
    '.cache',
})


class _Entry(NamedTuple):
    name: str
    is_dir: bool
    is_file: bool


def _scan_dir(directory: str) -> List[_Entry]:
    """List a directory without following symlinks, sorted by name."""
    with os.scandir(directory) as it:
        entries = [
            _Entry(e.name, e.is_dir(follow_symlinks=False), e.is_file(follow_symlinks=False))
            for e in it
        ]
    return sorted(entries, key=lambda e: e.name)


def _is_excluded(rel_path: str, exclude_rel_path: Optional[str]) -> bool:
    if not exclude_rel_path:
        return False
    return rel_path == exclude_rel_path or rel_path.startswith(exclude_rel_path + '/')


async def walk(source_root: Path, exclude_rel_path: Optional[str] = None) -> List[str]:
    """List recognized files under source_root.

    Directories are visited depth-first in sorted name order, so the result is
    stable for a fixed tree. Each directory read runs in a worker thread and is
    a suspension point for the event loop.

    Args:
        source_root: Absolute path of the tree to walk
        exclude_rel_path: POSIX path (relative to source_root) to skip together
                          with its descendants, typically the nested output root

    Returns:
        Relative POSIX paths of recognized regular files

    Raises:
        FilesystemError: If a directory cannot be listed
    """
    exclude = exclude_rel_path.strip('/') if exclude_rel_path else None
    found: List[str] = []
    stack: List[str] = ['']

    while stack:
        rel_dir = stack.pop()
        abs_dir = source_root / rel_dir if rel_dir else source_root

        try:
            entries = await anyio.to_thread.run_sync(_scan_dir, str(abs_dir))
        except OSError as e:
            raise FilesystemError(str(abs_dir), 'list_directory', str(e))

        subdirs: List[str] = []
        for entry in entries:
            child_rel = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
            if _is_excluded(child_rel, exclude):
                logger.debug(f"Skipping excluded path: {child_rel}")
                continue
            if entry.is_dir:
                if entry.name in SKIP_DIRS:
                    continue
                subdirs.append(child_rel)
            elif entry.is_file and is_recognized(entry.name):
                found.append(child_rel)

        # Reversed so the alphabetically first directory is popped next
        stack.extend(reversed(subdirs))

    logger.debug(f"Found {len(found)} recognized file(s) under {source_root}")
    return found
