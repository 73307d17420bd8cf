"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from fstree.context import AppContext

import typer
from rich.console import Console

from fstree import __version__, operations
from fstree.context import create_context
from fstree.display import Display
from fstree.errors import FileSystemError

app = typer.Typer(
    name="fstree",
    help="Recursive listing, copying and deletion of filesystem trees",
    no_args_is_help=True,
)

console = Console()
display = Display(console)

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"fstree v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log every backend operation")
    ] = False,
) -> None:
    """Recursive listing, copying and deletion of filesystem trees."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _fail(message: str, error: FileSystemError) -> typer.Exit:
    """Report a backend failure and build the exit to raise."""
    logger.debug("%s", message, exc_info=error)
    display.show_error(f"{message}: {error}")
    return typer.Exit(1)


def _resolve(ctx: AppContext, path: Path) -> Path:
    return ctx.settings.resolve(path)


@app.command("ls")
def ls(
    directory: Annotated[Path, typer.Argument(help="Directory to list")],
    follow_symlinks: Annotated[
        bool | None,
        typer.Option(
            "--follow-symlinks/--no-follow-symlinks",
            "-L",
            help="Descend into symlinked directories (default from settings)",
        ),
    ] = None,
    _context=None,
) -> None:
    """List every entry beneath a directory, directories before their contents."""
    ctx = _context or create_context()
    follow = ctx.settings.follow_symlinks if follow_symlinks is None else follow_symlinks
    target = _resolve(ctx, directory)

    try:
        count = display.show_paths(
            operations.list_recursively(ctx.filesystem, target, follow_symlinks=follow)
        )
    except FileSystemError as e:
        raise _fail(f"Cannot list {target}", e) from e

    if count == 0:
        display.show_warning(f"{target} is empty")


@app.command("rm")
def rm(
    path: Annotated[Path, typer.Argument(help="File or directory to delete")],
    _context=None,
) -> None:
    """Delete a file or a whole directory tree. Symlinks are never followed."""
    ctx = _context or create_context()
    target = _resolve(ctx, path)

    try:
        operations.delete_recursively(ctx.filesystem, target)
    except FileSystemError as e:
        raise _fail(f"Cannot delete {target}", e) from e
    display.show_success(f"Deleted {target}")


@app.command("mkdir")
def mkdir(
    directory: Annotated[Path, typer.Argument(help="Directory to create")],
    _context=None,
) -> None:
    """Create a directory and any missing parents."""
    ctx = _context or create_context()
    target = _resolve(ctx, directory)

    try:
        operations.create_directories(ctx.filesystem, target)
    except FileSystemError as e:
        raise _fail(f"Cannot create {target}", e) from e
    display.show_success(f"Created {target}")


@app.command("cp")
def cp(
    source: Annotated[Path, typer.Argument(help="File to copy")],
    target: Annotated[Path, typer.Argument(help="Destination file")],
    _context=None,
) -> None:
    """Copy the contents of one file into another."""
    ctx = _context or create_context()
    source_path = _resolve(ctx, source)
    target_path = _resolve(ctx, target)

    try:
        operations.copy(ctx.filesystem, source_path, target_path)
    except FileSystemError as e:
        raise _fail(f"Cannot copy {source_path} to {target_path}", e) from e
    display.show_success(f"Copied {source_path} to {target_path}")


@app.command("stat")
def stat(
    path: Annotated[Path, typer.Argument(help="Path to inspect")],
    _context=None,
) -> None:
    """Show metadata for a path without following a final symlink."""
    ctx = _context or create_context()
    target = _resolve(ctx, path)

    try:
        metadata = operations.metadata(ctx.filesystem, target)
    except FileSystemError as e:
        raise _fail(f"Cannot stat {target}", e) from e
    display.show_metadata(target, metadata)


@app.command("exists")
def exists(
    path: Annotated[Path, typer.Argument(help="Path to check")],
    _context=None,
) -> None:
    """Exit with status 0 if the path exists, 1 otherwise."""
    ctx = _context or create_context()
    target = _resolve(ctx, path)

    try:
        found = operations.exists(ctx.filesystem, target)
    except FileSystemError as e:
        raise _fail(f"Cannot check {target}", e) from e
    if not found:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
