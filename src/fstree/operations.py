"""Tree operations built on top of any FileSystem backend.

These functions take the backend as their first argument and only use the
methods of the FileSystem protocol, so they behave identically on local
disk, in memory, or on anything else that satisfies it.
"""

from __future__ import annotations

import logging
import shutil
from collections import deque
from collections.abc import Iterator
from pathlib import PurePath
from typing import TYPE_CHECKING

from fstree.errors import NotFoundError
from fstree.walk import TreeWalker, normalize

if TYPE_CHECKING:
    from fstree.protocols import FileSystem
    from fstree.types import FileMetadata

__all__ = [
    "copy",
    "create_directories",
    "delete_recursively",
    "exists",
    "list_recursively",
    "metadata",
]

logger = logging.getLogger(__name__)


def metadata(fs: FileSystem, path: PurePath) -> FileMetadata:
    """Return metadata for ``path``.

    Raises:
        NotFoundError: If nothing exists at ``path``.
    """
    result = fs.metadata_or_none(path)
    if result is None:
        raise NotFoundError(f"no such file: {path}")
    return result


def exists(fs: FileSystem, path: PurePath) -> bool:
    """Check if anything exists at ``path``."""
    return fs.metadata_or_none(path) is not None


def create_directories(fs: FileSystem, directory: PurePath) -> None:
    """Create ``directory`` and every missing ancestor.

    Ancestors that already exist are left alone. Directories are created
    from the root down, so a failure leaves a valid partial chain behind.

    Args:
        fs: Backend to create the directories on.
        directory: Directory to create.

    Raises:
        FileSystemError: If an ancestor exists but is not a directory, or
            the backend refuses to create one of the directories.
    """
    directories: deque[PurePath] = deque()
    path: PurePath | None = directory
    while path is not None and not exists(fs, path):
        directories.appendleft(path)
        path = path.parent if path.parent != path else None

    for to_create in directories:
        logger.debug("Creating directory %s", to_create)
        fs.create_directory(to_create)


def copy(fs: FileSystem, source: PurePath, target: PurePath) -> None:
    """Copy the bytes of ``source`` into ``target``, replacing its content.

    Both streams are closed on every exit, including a failed write.
    """
    with fs.source(source) as bytes_in, fs.sink(target) as bytes_out:
        shutil.copyfileobj(bytes_in, bytes_out)


def delete_recursively(fs: FileSystem, file_or_directory: PurePath) -> None:
    """Delete a file, or a directory and everything beneath it.

    Symlinks are deleted as plain entries; whatever they point to is never
    touched. Deletion stops at the first failure and is not rolled back.

    Args:
        fs: Backend to delete from.
        file_or_directory: Root of the subtree to delete.

    Raises:
        FileSystemError: If the walk or any single delete fails.
    """
    to_delete = list(
        TreeWalker(fs, file_or_directory, follow_symlinks=False, postorder=True)
    )
    for path in to_delete:
        fs.delete(path)
    logger.debug("Deleted %d entries under %s", len(to_delete), file_or_directory)


def list_recursively(
    fs: FileSystem, directory: PurePath, follow_symlinks: bool = False
) -> Iterator[PurePath]:
    """Lazily list every entry beneath ``directory``.

    Each directory is yielded before its contents. ``directory`` itself is not
    yielded. Nothing is read from the backend until the first item is
    requested.

    Args:
        fs: Backend to list.
        directory: Directory to list.
        follow_symlinks: Descend into directories reached through symlinks.

    Yields:
        Paths of all descendants of ``directory``, in backend listing order.

    Raises:
        NotFoundError: If ``directory`` does not exist.
        FileSystemError: If ``directory`` cannot be listed.
        SymlinkCycleError: If following symlinks leads back into a
            directory that is already being listed.
    """
    stack: list[PurePath] = [normalize(directory)]
    for child in fs.list(directory):
        walker = TreeWalker(fs, child, stack=stack, follow_symlinks=follow_symlinks)
        try:
            yield from walker
        finally:
            walker.close()
