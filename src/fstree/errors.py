"""Errors raised by filesystem backends and tree operations."""

from __future__ import annotations

from pathlib import PurePath

__all__ = ["FileSystemError", "NotFoundError", "SymlinkCycleError"]


class FileSystemError(Exception):
    """Generic backend failure (permissions, transient I/O, bad state)."""

    pass


class NotFoundError(FileSystemError):
    """A path was absent where its presence was required."""

    pass


class SymlinkCycleError(FileSystemError):
    """Following symlinks revisited a directory that is already being walked.

    Attributes:
        path: The path whose resolution closed the cycle.
    """

    def __init__(self, path: PurePath) -> None:
        super().__init__(f"symlink cycle at {path}")
        self.path = path
