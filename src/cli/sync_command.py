"""Sync command orchestration for CLI.

This module provides the SyncCommand class that runs one mirror pass for the
CLI. It loads the optional configuration file, applies command-line overrides,
drives the SyncOrchestrator and translates failures into exit codes.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import httpx

from src.cli.errors import CLIError, InvalidOptionError
from src.cli.models import ExitCode, SyncSummary
from src.cli.output import OutputHandler
from src.mirror.config_loader import ConfigLoader
from src.mirror.errors import (
    ConfigError,
    FileProcessingError,
    FilesystemError,
    MirrorError,
    SourceNotFoundError,
    UnsafeOutputError,
)
from src.mirror.models import SyncOptions
from src.mirror.orchestrator import run_sync
from src.remote_client.auth import Authenticator

logger = logging.getLogger(__name__)


class SyncCommand:
    """Runs a mirror pass from the command line.

    The workflow:
        1. Load .docs-mirror/config.yaml (defaults when absent)
        2. Apply command-line overrides
        3. Run the orchestrator to completion
        4. Print "Synced <n> file(s)." and return an exit code

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> sync_cmd = SyncCommand(output_handler=output)
        >>> exit_code = sync_cmd.run(source_dir="source", output_dir="docs")
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        config_path: str = ConfigLoader.DEFAULT_CONFIG_PATH,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        base_dir: Optional[Path] = None,
    ):
        """Initialize sync command with dependencies.

        Args:
            config_path: Path to configuration YAML file
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Credential loader for remote fetches (optional)
            transport: HTTP transport override (tests)
            base_dir: Directory that relative paths resolve against (optional)
        """
        self.config_path = config_path
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.transport = transport
        self.base_dir = base_dir

    def load_options(
        self,
        source_dir: Optional[str] = None,
        output_dir: Optional[str] = None,
        clean: Optional[bool] = None,
        heading: Optional[bool] = None,
        concurrency: Optional[int] = None,
    ) -> SyncOptions:
        """Build run options from the config file and command-line overrides.

        Arguments left as None keep the configured (or default) value.

        Raises:
            ConfigError: If the config file is invalid
            InvalidOptionError: If an override is out of range
            FilesystemError: If the config file exists but cannot be read
        """
        config_path = Path(self.config_path)
        if self.base_dir is not None and not config_path.is_absolute():
            config_path = self.base_dir / config_path

        logger.info(f"Loading configuration from {config_path}")
        options = ConfigLoader.load_or_default(str(config_path))

        overrides = {
            'source_dir': source_dir,
            'output_dir': output_dir,
            'clean': clean,
            'heading': heading,
            'concurrency': concurrency,
        }
        overrides = {key: value for key, value in overrides.items() if value is not None}
        if 'concurrency' in overrides and overrides['concurrency'] < 1:
            raise InvalidOptionError(
                '--concurrency',
                f"must be at least 1, got {overrides['concurrency']}"
            )

        return replace(options, **overrides)

    @staticmethod
    def _unsafe_output_hint(error: UnsafeOutputError) -> str:
        source_root = Path(error.source_root)
        output_root = Path(error.output_root)
        if source_root == output_root:
            return "Choose an output directory different from the source directory"
        return (
            "Choose an output directory that does not contain the source directory, "
            "or pass --no-clean"
        )

    def run(
        self,
        source_dir: Optional[str] = None,
        output_dir: Optional[str] = None,
        clean: Optional[bool] = None,
        heading: Optional[bool] = None,
        concurrency: Optional[int] = None,
    ) -> ExitCode:
        """Execute a mirror pass.

        Args:
            source_dir: Override for the source root
            output_dir: Override for the output root
            clean: Override for cleaning the output root first
            heading: Override for the "# <title>" heading on rendered docs
            concurrency: Override for the number of files in flight

        Returns:
            ExitCode indicating success or the failure type
        """
        try:
            options = self.load_options(source_dir, output_dir, clean, heading, concurrency)
            self.output_handler.info(
                f"Mirroring {options.source_dir} → {options.output_dir}"
            )
            self.output_handler.debug(
                f"clean={options.clean} heading={options.heading} "
                f"concurrency={options.concurrency}"
            )

            result = run_sync(
                options,
                authenticator=self.authenticator,
                transport=self.transport,
                base_dir=self.base_dir,
            )

            summary = SyncSummary(
                processed_count=result.processed_count,
                written_count=result.written_count,
                unchanged_count=result.unchanged_count,
            )
            self.output_handler.print_summary(
                processed_count=summary.processed_count,
                written_count=summary.written_count,
                unchanged_count=summary.unchanged_count,
            )
            return ExitCode.SUCCESS

        except (ConfigError, SourceNotFoundError) as e:
            logger.debug(str(e))
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except UnsafeOutputError as e:
            logger.debug(str(e))
            self.output_handler.error(str(e))
            self.output_handler.info(self._unsafe_output_hint(e))
            return ExitCode.GENERAL_ERROR

        except FileProcessingError as e:
            logger.debug(f"Sync aborted: {e}")
            self.output_handler.error(f"Sync aborted: {e}")
            return ExitCode.GENERAL_ERROR

        except (FilesystemError, MirrorError, CLIError) as e:
            logger.debug(f"Error: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.debug("Unexpected error during sync", exc_info=True)
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR
