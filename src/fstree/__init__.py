"""Filesystem-tree algorithms over pluggable storage backends."""

__version__ = "0.1.0"

from fstree.errors import FileSystemError, NotFoundError, SymlinkCycleError
from fstree.operations import (
    copy,
    create_directories,
    delete_recursively,
    exists,
    list_recursively,
    metadata,
)
from fstree.protocols import FileSystem
from fstree.types import FileKind, FileMetadata

__all__ = [
    "__version__",
    "FileKind",
    "FileMetadata",
    "FileSystem",
    "FileSystemError",
    "NotFoundError",
    "SymlinkCycleError",
    "copy",
    "create_directories",
    "delete_recursively",
    "exists",
    "list_recursively",
    "metadata",
]
