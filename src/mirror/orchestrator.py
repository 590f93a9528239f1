"""Main orchestration class for mirror runs.

This module provides the SyncOrchestrator class which drives one batch
synchronization: validating the source, cleaning and preparing the output
root, walking the source tree, and processing every recognized file under a
bounded concurrency limit.
"""

import logging
import shutil
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional

import anyio
import httpx

from src.remote_client.auth import Authenticator
from src.remote_client.http_client import build_client

from .errors import (
    FileProcessingError,
    FilesystemError,
    SourceNotFoundError,
    UnsafeOutputError,
)
from .fetcher import RemoteContentFetcher
from .models import FileKind, FileOutcome, SyncOptions, SyncPhase, SyncResult
from .path_classifier import classify, destination_for, destination_relative, fallback_title
from .tree_walker import walk
from .writer import IdempotentWriter

logger = logging.getLogger(__name__)


def _flatten_group(group: BaseExceptionGroup) -> List[BaseException]:
    errors: List[BaseException] = []
    for exc in group.exceptions:
        if isinstance(exc, BaseExceptionGroup):
            errors.extend(_flatten_group(exc))
        else:
            errors.append(exc)
    return errors


class SyncOrchestrator:
    """Runs a single source-to-output mirror pass.

    Phases:
        IDLE → VALIDATING_SOURCE → CLEANING (if enabled) → PREPARING →
        WALKING → PROCESSING → DONE, or FAILED on any fatal error

    Per-file pipelines (classify → fetch/render → write) run concurrently with
    at most options.concurrency files in flight. Fetch failures degrade to
    placeholder content; any other per-file failure aborts the run with a
    FileProcessingError naming the file.

    Example:
        >>> orchestrator = SyncOrchestrator(SyncOptions(source_dir="source", output_dir="docs"))
        >>> result = anyio.run(orchestrator.run)
        >>> print(f"Synced {result.processed_count} file(s).")
    """

    def __init__(
        self,
        options: SyncOptions,
        fetcher: Optional[RemoteContentFetcher] = None,
        writer: Optional[IdempotentWriter] = None,
        authenticator: Optional[Authenticator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        base_dir: Optional[Path] = None,
    ):
        """Initialize the orchestrator.

        Args:
            options: Run configuration
            fetcher: Optional pre-built fetcher (its client is owned by the caller)
            writer: Optional writer (defaults to IdempotentWriter)
            authenticator: Optional credential loader used when no fetcher is given
            transport: Optional HTTP transport for the default client (tests)
            base_dir: Directory that relative source/output paths resolve against
                      (defaults to the current working directory)
        """
        if options.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {options.concurrency}")

        self.options = options
        self._fetcher = fetcher
        self._writer = writer or IdempotentWriter()
        self._authenticator = authenticator
        self._transport = transport
        self._base_dir = base_dir
        self.phase = SyncPhase.IDLE

    def _set_phase(self, phase: SyncPhase) -> None:
        self.phase = phase
        logger.debug(f"Sync phase: {phase.value}")

    def _resolve(self, directory: str) -> Path:
        path = Path(directory).expanduser()
        if not path.is_absolute() and self._base_dir is not None:
            path = self._base_dir / path
        return path.resolve()

    @staticmethod
    def nested_output_path(source_root: Path, output_root: Path) -> Optional[str]:
        """Return output_root relative to source_root (POSIX), or None if not nested."""
        if output_root != source_root and output_root.is_relative_to(source_root):
            return output_root.relative_to(source_root).as_posix()
        return None

    @staticmethod
    def drop_destination_clashes(files: List[str]) -> List[str]:
        """Keep one source file per destination path.

        A Markdown file wins over a sidecar rendering to the same path; among
        files of the same kind the first in walk order wins. Dropped files are
        reported as warnings and not processed.

        Args:
            files: Relative paths in walk order

        Returns:
            The files to process, in walk order
        """
        owners: Dict[str, str] = {}
        for relative_path in files:
            kind = classify(relative_path)
            destination = destination_relative(relative_path, kind)
            if destination is None:
                continue
            current = owners.get(destination)
            if current is None or (
                kind is FileKind.PLAIN_TEXT and classify(current) is not FileKind.PLAIN_TEXT
            ):
                owners[destination] = relative_path

        kept = set(owners.values())
        for relative_path in files:
            destination = destination_relative(relative_path, classify(relative_path))
            if destination is not None and relative_path not in kept:
                logger.warning(
                    f"Skipping {relative_path}: {destination} is already produced by "
                    f"{owners[destination]}"
                )
        return [relative_path for relative_path in files if relative_path in kept]

    async def _validate(self, source_root: Path, output_root: Path) -> None:
        source = anyio.Path(source_root)
        if not await source.exists():
            raise SourceNotFoundError(str(source_root))
        if not await source.is_dir():
            raise FilesystemError(str(source_root), 'read', 'Path exists but is not a directory')

        if output_root == source_root:
            raise UnsafeOutputError(
                str(source_root), str(output_root),
                "output directory is the source directory",
            )
        if self.options.clean and source_root.is_relative_to(output_root):
            raise UnsafeOutputError(
                str(source_root), str(output_root),
                "source directory is inside the output directory, which is cleaned before syncing",
            )

    async def _clean(self, output_root: Path) -> None:
        if not await anyio.Path(output_root).exists():
            return
        logger.info(f"Cleaning output directory {output_root}")
        try:
            await anyio.to_thread.run_sync(shutil.rmtree, output_root)
        except OSError as e:
            raise FilesystemError(str(output_root), 'remove_directory', str(e))

    async def _prepare(self, output_root: Path) -> None:
        try:
            await anyio.Path(output_root).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(str(output_root), 'create_directory', str(e))

    @asynccontextmanager
    async def _fetcher_scope(self) -> AsyncIterator[RemoteContentFetcher]:
        if self._fetcher is not None:
            yield self._fetcher
            return

        authenticator = self._authenticator or Authenticator()
        credentials = authenticator.get_credentials()
        async with build_client(transport=self._transport) as client:
            yield RemoteContentFetcher(
                client,
                access_token=credentials.access_token,
                heading=self.options.heading,
            )

    async def _process_file(
        self,
        relative_path: str,
        source_root: Path,
        output_root: Path,
        fetcher: RemoteContentFetcher,
    ) -> FileOutcome:
        kind = classify(relative_path)
        destination = destination_for(relative_path, kind, output_root)
        if kind is FileKind.UNRECOGNIZED or destination is None:
            return FileOutcome(relative_path, kind)

        source = anyio.Path(source_root.joinpath(*relative_path.split('/')))
        if kind is FileKind.PLAIN_TEXT:
            wrote = await self._writer.write_if_changed(destination, await source.read_bytes())
        else:
            descriptor_text = await source.read_text(encoding='utf-8', errors='replace')
            markdown = await fetcher.render(descriptor_text, fallback_title(relative_path))
            wrote = await self._writer.write_if_changed(destination, markdown)

        logger.info(f"{'Wrote' if wrote else 'Unchanged'}: {relative_path}")
        return FileOutcome(relative_path, kind, processed=1, wrote=wrote)

    async def _process_all(
        self,
        files: List[str],
        source_root: Path,
        output_root: Path,
        fetcher: RemoteContentFetcher,
    ) -> List[FileOutcome]:
        limiter = anyio.Semaphore(self.options.concurrency)
        results: List[Optional[FileOutcome]] = [None] * len(files)

        async def _worker(index: int, relative_path: str) -> None:
            async with limiter:
                try:
                    results[index] = await self._process_file(
                        relative_path, source_root, output_root, fetcher
                    )
                except Exception as e:
                    logger.debug(f"Failed to process {relative_path}: {e}")
                    raise FileProcessingError(relative_path, str(e)) from e

        try:
            async with anyio.create_task_group() as tg:
                for index, relative_path in enumerate(files):
                    tg.start_soon(_worker, index, relative_path)
        except BaseExceptionGroup as group:
            failures = [e for e in _flatten_group(group) if isinstance(e, FileProcessingError)]
            if not failures:
                raise
            if len(failures) > 1:
                logger.debug(f"{len(failures)} file(s) failed to process")
            raise failures[0]

        return [outcome for outcome in results if outcome is not None]

    async def run(self) -> SyncResult:
        """Execute the mirror run.

        Returns:
            SyncResult with the processed-file count and per-file outcomes

        Raises:
            SourceNotFoundError: If the source root does not exist
            UnsafeOutputError: If the output root overlaps the source root unsafely
            FilesystemError: If cleaning or preparing the output root fails
            FileProcessingError: If any file's pipeline fails unexpectedly
        """
        source_root = self._resolve(self.options.source_dir)
        output_root = self._resolve(self.options.output_dir)

        try:
            self._set_phase(SyncPhase.VALIDATING_SOURCE)
            await self._validate(source_root, output_root)

            if self.options.clean:
                self._set_phase(SyncPhase.CLEANING)
                await self._clean(output_root)

            self._set_phase(SyncPhase.PREPARING)
            await self._prepare(output_root)

            self._set_phase(SyncPhase.WALKING)
            exclude = self.nested_output_path(source_root, output_root)
            files = self.drop_destination_clashes(await walk(source_root, exclude))
            logger.info(f"Found {len(files)} file(s) to sync in {source_root}")

            self._set_phase(SyncPhase.PROCESSING)
            async with self._fetcher_scope() as fetcher:
                outcomes = await self._process_all(files, source_root, output_root, fetcher)

        except BaseException:
            self._set_phase(SyncPhase.FAILED)
            raise

        result = SyncResult.from_outcomes(outcomes)
        self._set_phase(SyncPhase.DONE)
        logger.info(
            f"Synced {result.processed_count} file(s): "
            f"{result.written_count} written, {result.unchanged_count} unchanged"
        )
        return result


def run_sync(options: SyncOptions, **kwargs) -> SyncResult:
    """Run a mirror pass to completion on a fresh event loop.

    Args:
        options: Run configuration
        **kwargs: Forwarded to SyncOrchestrator

    Returns:
        SyncResult of the run
    """
    orchestrator = SyncOrchestrator(options, **kwargs)
    return anyio.run(orchestrator.run)
