"""Export commands for CLI.

This module provides the ExportCommand class behind `docs-mirror gdoc` and
`docs-mirror yadisk`. Both download a single remote document into a local
directory; URLs and formats fall back to environment variables (loaded from
.env) and then to built-in defaults.
"""

import logging
import os
from pathlib import Path
from typing import Callable, List, Optional

import anyio
import httpx
from dotenv import load_dotenv

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.mirror.config_loader import ConfigLoader
from src.mirror.errors import MirrorError
from src.remote_client.doc_url import DEFAULT_DOC_URL
from src.remote_client.errors import InvalidDocumentUrlError, RemoteError
from src.remote_client.exporters import (
    DEFAULT_EXPORT_FORMATS,
    DEFAULT_YANDEX_URL,
    download_yandex_public_file,
    export_google_doc,
    parse_formats,
)
from src.remote_client.http_client import build_client

logger = logging.getLogger(__name__)

GDOC_OUTPUT_DIR = 'gdocs'
YADISK_OUTPUT_DIR = 'yadisk'


class ExportCommand:
    """Downloads Google Docs exports and Yandex Disk public files.

    Resolution order for the document URL:
        command-line argument → GDOC_URL → GDRIVE_URL → built-in default
        (YADISK_URL for the Yandex downloader)

    Example:
        >>> cmd = ExportCommand(output_handler=OutputHandler())
        >>> exit_code = cmd.run_gdoc("https://docs.google.com/document/d/abc/edit")
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        config_path: str = ConfigLoader.DEFAULT_CONFIG_PATH,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        load_env_file: bool = True,
    ):
        """Initialize export command.

        Args:
            output_handler: OutputHandler for terminal output (optional)
            config_path: Configuration file supplying the default export formats
            transport: HTTP transport override (tests)
            load_env_file: Whether to load .env into the environment
        """
        if load_env_file:
            load_dotenv()
        self.output_handler = output_handler or OutputHandler()
        self.config_path = config_path
        self.transport = transport

    @staticmethod
    def resolve_gdoc_url(url: Optional[str]) -> str:
        return url or os.getenv('GDOC_URL') or os.getenv('GDRIVE_URL') or DEFAULT_DOC_URL

    @staticmethod
    def resolve_yadisk_url(url: Optional[str]) -> str:
        return url or os.getenv('YADISK_URL') or DEFAULT_YANDEX_URL

    def resolve_formats(self, formats: Optional[str]) -> List[str]:
        """Pick export formats: --formats, then GDOC_EXPORTS, then the config file."""
        parsed = parse_formats(formats or os.getenv('GDOC_EXPORTS'))
        if parsed:
            return parsed
        configured = ConfigLoader.load_or_default(self.config_path).exports
        return list(configured) or list(DEFAULT_EXPORT_FORMATS)

    async def _export_gdoc(self, url: str, formats: List[str], output_dir: Path) -> List[Path]:
        async with build_client(transport=self.transport) as client:
            return await export_google_doc(url, formats, output_dir, client)

    async def _download_yadisk(self, url: str, output_dir: Path) -> Path:
        async with build_client(transport=self.transport) as client:
            return await download_yandex_public_file(url, output_dir, client)

    def run_gdoc(
        self,
        url: Optional[str] = None,
        output_dir: str = GDOC_OUTPUT_DIR,
        formats: Optional[str] = None,
    ) -> ExitCode:
        """Export a Google Doc in each requested format.

        Args:
            url: Document URL (falls back to GDOC_URL / GDRIVE_URL / default)
            output_dir: Directory receiving the exports
            formats: Comma-separated formats (falls back to GDOC_EXPORTS, then config exports)

        Returns:
            ExitCode indicating success or the failure type
        """
        doc_url = self.resolve_gdoc_url(url)
        try:
            export_formats = self.resolve_formats(formats)
        except MirrorError as e:
            logger.debug(str(e))
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR
        logger.info(f"Exporting {doc_url} as {', '.join(export_formats)}")

        def _run() -> List[Path]:
            return anyio.run(self._export_gdoc, doc_url, export_formats, Path(output_dir))

        return self._execute(_run, f"Exporting {doc_url}...")

    def run_yadisk(
        self,
        url: Optional[str] = None,
        output_dir: str = YADISK_OUTPUT_DIR,
    ) -> ExitCode:
        """Download a public Yandex Disk file.

        Args:
            url: Public share link (falls back to YADISK_URL / default)
            output_dir: Directory receiving the file

        Returns:
            ExitCode indicating success or the failure type
        """
        public_url = self.resolve_yadisk_url(url)
        logger.info(f"Downloading {public_url}")

        def _run() -> List[Path]:
            return [anyio.run(self._download_yadisk, public_url, Path(output_dir))]

        return self._execute(_run, f"Downloading {public_url}...")

    def _execute(self, action: Callable[[], List[Path]], spinner_message: str) -> ExitCode:
        try:
            with self.output_handler.spinner(spinner_message):
                saved = action()

            self.output_handler.success(f"Saved {len(saved)} file(s)")
            self.output_handler.print_saved(saved)
            return ExitCode.SUCCESS

        except InvalidDocumentUrlError as e:
            logger.debug(str(e))
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except (RemoteError, httpx.HTTPError) as e:
            logger.debug(f"Remote error: {e}")
            self.output_handler.error(f"Remote error: {e}")
            self.output_handler.info("Check that the document is public and try again")
            return ExitCode.NETWORK_ERROR

        except OSError as e:
            logger.debug(f"Filesystem error: {e}")
            self.output_handler.error(f"Filesystem error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.debug("Unexpected error during export", exc_info=True)
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR
