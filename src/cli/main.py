"""Main CLI entry point for the docs-mirror command.

This module provides the Typer application that serves as the entry point
for the docs-mirror command-line tool. `sync` mirrors a source tree into an
output tree; `gdoc` and `yadisk` download a single remote document.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.export_command import GDOC_OUTPUT_DIR, YADISK_OUTPUT_DIR, ExportCommand
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.sync_command import SyncCommand
from src.mirror.config_loader import ConfigLoader

VERSION = "0.1.0"

app = typer.Typer(
    name="docs-mirror",
    help="""Mirror a tree of Markdown files and Google Docs references into a docs directory.

QUICK START:
  docs-mirror sync                                  # source/ -> docs/
  docs-mirror sync --source notes --output site     # Custom directories
  docs-mirror gdoc <google_doc_url>                 # Export a Google Doc
  docs-mirror yadisk <public_url>                   # Download a Yandex Disk file""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)8s] %(message)s"
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged. Handlers from a previous
    invocation in the same process are replaced.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"docs-mirror_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=DATE_FORMAT))
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"docs-mirror version {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Mirror a tree of Markdown files and Google Docs references into a docs directory."""


@app.command()
def sync(
    source: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Source directory (default: config source_dir, then 'source')",
        metavar="DIR",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (default: config output_dir, then 'docs')",
        metavar="DIR",
    ),
    no_clean: bool = typer.Option(
        False,
        "--no-clean",
        help="Keep existing files in the output directory",
    ),
    no_heading: bool = typer.Option(
        False,
        "--no-heading",
        help="Omit the '# <title>' heading from rendered Google Docs",
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        "-j",
        help="Maximum number of files processed at once",
    ),
    config: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        help="Path to the YAML configuration file (optional)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Mirror the source tree into the output directory.

    \b
    Markdown files (.md, .markdown) are copied unchanged. Google Docs sidecars
    (.gdoc) are rendered to Markdown using the document's plain-text export;
    documents that cannot be fetched get a placeholder instead.
    Set GOOGLE_ACCESS_TOKEN to fetch private documents.
    """
    _configure_logging(verbosity, logdir)
    output_handler = OutputHandler(verbosity=verbosity, no_color=no_color)

    sync_cmd = SyncCommand(config_path=config, output_handler=output_handler)
    exit_code = sync_cmd.run(
        source_dir=source,
        output_dir=output,
        clean=False if no_clean else None,
        heading=False if no_heading else None,
        concurrency=concurrency,
    )
    raise typer.Exit(exit_code)


@app.command()
def gdoc(
    url: Optional[str] = typer.Argument(
        None,
        help="Google Docs URL (default: $GDOC_URL or $GDRIVE_URL)",
    ),
    output: str = typer.Option(
        GDOC_OUTPUT_DIR,
        "--output",
        "-o",
        help="Directory receiving the exported files",
        metavar="DIR",
    ),
    formats: Optional[str] = typer.Option(
        None,
        "--formats",
        "-f",
        help="Comma-separated export formats (default: $GDOC_EXPORTS, then config exports)",
    ),
    config: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        help="Path to the YAML configuration file (optional)",
    ),
    verbosity: int = typer.Option(0, "--verbosity", "-v", help="Verbosity level: 0=summary, 1=info, 2=debug"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Export a public Google Doc in one or more formats."""
    _configure_logging(verbosity)
    output_handler = OutputHandler(verbosity=verbosity, no_color=no_color)

    export_cmd = ExportCommand(output_handler=output_handler, config_path=config)
    raise typer.Exit(export_cmd.run_gdoc(url, output_dir=output, formats=formats))


@app.command()
def yadisk(
    url: Optional[str] = typer.Argument(
        None,
        help="Yandex Disk public link (default: $YADISK_URL)",
    ),
    output: str = typer.Option(
        YADISK_OUTPUT_DIR,
        "--output",
        "-o",
        help="Directory receiving the downloaded file",
        metavar="DIR",
    ),
    verbosity: int = typer.Option(0, "--verbosity", "-v", help="Verbosity level: 0=summary, 1=info, 2=debug"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Download a publicly shared Yandex Disk file."""
    _configure_logging(verbosity)
    output_handler = OutputHandler(verbosity=verbosity, no_color=no_color)

    export_cmd = ExportCommand(output_handler=output_handler)
    raise typer.Exit(export_cmd.run_yadisk(url, output_dir=output))


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
