"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for spinners, colored output, and formatted text.
Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> with handler.spinner("Exporting..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.no_color = no_color
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green.

        Args:
            message: Success message to display
        """
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red.

        The message is kept on a single line, however long the paths in it.

        Args:
            message: Error message to display
        """
        self.console.print(f"[red]✗[/red] {message}", style="red", soft_wrap=True)

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        The spinner is skipped when color is disabled or the console is not a
        terminal, so captured output stays plain.

        Args:
            message: Message to display with spinner

        Yields:
            None
        """
        if self.no_color or not self.console.is_terminal:
            yield
            return
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_summary(
        self,
        processed_count: int = 0,
        written_count: int = 0,
        unchanged_count: int = 0,
    ) -> None:
        """Display the mirror run summary.

        The first line is always "Synced <n> file(s)."; the breakdown follows
        at verbosity >= 1.

        Args:
            processed_count: Number of recognized files processed
            written_count: Number of destination files written
            unchanged_count: Number of destination files already current
        """
        self.console.print(f"Synced {processed_count} file(s).", markup=False)

        if self.verbosity >= 1:
            if written_count > 0:
                self.console.print(f"  [green]↓[/green] Written: {written_count} file(s)")
            if unchanged_count > 0:
                self.console.print(f"  [dim]─[/dim] Unchanged: {unchanged_count} file(s)")
            if processed_count > 0 and written_count == 0:
                self.console.print("[green]Output already up to date.[/green]")

    def print_saved(self, paths: Sequence[Path]) -> None:
        """List exported files, one per line."""
        for path in paths:
            self.console.print(f"  [green]→[/green] {path}")
