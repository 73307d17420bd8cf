"""Shared data types for fstree."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import PurePath

__all__ = ["FileKind", "FileMetadata"]


class FileKind(Enum):
    """Kind of a filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True)
class FileMetadata:
    """Metadata describing a single filesystem entry.

    Attributes:
        kind: What the entry is. Symlinks are reported as themselves,
            never as the entry they point to.
        symlink_target: Target of a symlink exactly as stored, relative or
            absolute (None unless kind is SYMLINK).
        size: Size in bytes, when known.
        modified_at: Last modification time, when known.
    """

    kind: FileKind
    symlink_target: PurePath | None = None
    size: int | None = None
    modified_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.kind is FileKind.SYMLINK and self.symlink_target is None:
            raise ValueError("kind=SYMLINK requires symlink_target")
        if self.kind is not FileKind.SYMLINK and self.symlink_target is not None:
            raise ValueError(f"kind={self.kind.value} cannot have a symlink_target")
        if self.size is not None and self.size < 0:
            raise ValueError("size cannot be negative")

    @property
    def is_regular_file(self) -> bool:
        return self.kind is FileKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is FileKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is FileKind.SYMLINK
