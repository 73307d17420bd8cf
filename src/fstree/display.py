"""Console output helpers for the command line."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePath

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fstree.types import FileMetadata


class Display:
    """Renders command results with rich.

    Messages are plain text. Any markup-like brackets in them, such as in a
    path name, are printed literally.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_paths(self, paths: Iterable[PurePath]) -> int:
        """Print paths one per line as they arrive.

        Returns:
            Number of paths printed.
        """
        count = 0
        for path in paths:
            self.console.print(str(path), markup=False, highlight=False, soft_wrap=True)
            count += 1
        return count

    def show_metadata(self, path: PurePath, metadata: FileMetadata) -> None:
        """Display metadata for a single entry in a table."""
        table = Table(title=escape(str(path)))
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Kind", metadata.kind.value)
        if metadata.symlink_target is not None:
            table.add_row("Target", escape(str(metadata.symlink_target)))
        if metadata.size is not None:
            table.add_row("Size", f"{metadata.size} bytes")
        if metadata.modified_at is not None:
            table.add_row("Modified", metadata.modified_at.strftime("%Y-%m-%d %H:%M:%S"))

        self.console.print(table)

    def show_success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        self.console.print(f"[yellow]![/yellow] {escape(message)}")
