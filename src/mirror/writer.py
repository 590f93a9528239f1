"""Idempotent file writing.

Destination files are only rewritten when their content changes, so a repeated
run with unchanged inputs leaves every modification time untouched.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import anyio

from .errors import FilesystemError

logger = logging.getLogger(__name__)


class IdempotentWriter:
    """Writes text or binary content only when it differs from what is on disk.

    Text is encoded as UTF-8 and written without newline translation, so the
    comparison is always exact, byte for byte. A destination that cannot be
    read (missing, permission denied) counts as having no prior content and is
    overwritten.

    Example:
        >>> writer = IdempotentWriter()
        >>> await writer.write_if_changed(Path("docs/a.md"), "# A\\n")
        True
        >>> await writer.write_if_changed(Path("docs/a.md"), "# A\\n")
        False
    """

    async def _read_existing(self, destination: anyio.Path) -> Optional[bytes]:
        try:
            return await destination.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.debug(f"Could not read {destination} for comparison: {e}")
            return None

    async def write_if_changed(self, destination: Path, content: Union[str, bytes]) -> bool:
        """Write content to destination unless it is already there.

        Parent directories are created first, whether or not a write follows.

        Args:
            destination: Absolute path of the output file
            content: New content; str is written as UTF-8

        Returns:
            True if the file was written, False if it was already current

        Raises:
            FilesystemError: If the directory cannot be created or the write fails
        """
        path = anyio.Path(destination)
        try:
            await path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(str(path.parent), 'create_directory', str(e))

        data = content.encode('utf-8') if isinstance(content, str) else bytes(content)

        existing = await self._read_existing(path)
        if existing is not None and len(existing) == len(data) and existing == data:
            logger.debug(f"Unchanged: {destination}")
            return False

        try:
            await path.write_bytes(data)
        except OSError as e:
            raise FilesystemError(str(destination), 'write', str(e))

        logger.debug(f"Wrote: {destination}")
        return True
