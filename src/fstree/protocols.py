"""Protocol definitions for storage backends.

The tree algorithms in this package never touch the disk directly. They are
written against the FileSystem protocol below, and any object that provides
these methods (local disk, in-memory, remote) can be walked, listed, copied
and deleted.

All concrete implementations satisfy the protocol structurally (duck typing).
"""

from __future__ import annotations

from pathlib import PurePath
from typing import BinaryIO, Protocol, runtime_checkable

from fstree.types import FileMetadata


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for a pluggable storage backend.

    Every method may raise FileSystemError (or a subclass) for genuine
    backend failures.
    """

    def list(self, path: PurePath) -> list[PurePath]:
        """List the direct children of a directory.

        Args:
            path: Directory to list.

        Returns:
            Child paths, each joined onto ``path``, in a stable order.

        Raises:
            NotFoundError: If ``path`` does not exist.
            FileSystemError: If ``path`` is not a listable directory.
        """
        ...

    def metadata_or_none(self, path: PurePath) -> FileMetadata | None:
        """Read metadata for a path without following a final symlink.

        Args:
            path: Path to inspect.

        Returns:
            FileMetadata, or None if nothing exists at ``path``.
        """
        ...

    def metadata(self, path: PurePath) -> FileMetadata:
        """Read metadata for a path that must exist.

        Raises:
            NotFoundError: If nothing exists at ``path``.
        """
        ...

    def create_directory(self, path: PurePath) -> None:
        """Create a single directory.

        Args:
            path: Directory to create. Its parent must already exist.

        Raises:
            FileSystemError: If ``path`` is occupied or its parent is missing.
        """
        ...

    def delete(self, path: PurePath) -> None:
        """Delete a file, symlink or empty directory.

        Raises:
            NotFoundError: If ``path`` does not exist.
            FileSystemError: If ``path`` cannot be removed.
        """
        ...

    def source(self, path: PurePath) -> BinaryIO:
        """Open a file for reading bytes."""
        ...

    def sink(self, path: PurePath) -> BinaryIO:
        """Open a file for writing bytes, replacing existing content."""
        ...
