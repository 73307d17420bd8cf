"""Local disk backend.

RealFileSystem wraps standard library os and pathlib operations and
translates their OSErrors into FileSystemError. Satisfies the FileSystem
protocol structurally.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path, PurePath
from typing import BinaryIO

from fstree.errors import FileSystemError, NotFoundError
from fstree.types import FileKind, FileMetadata


@contextmanager
def _translate_errors(action: str, path: PurePath) -> Iterator[None]:
    try:
        yield
    except FileNotFoundError as e:
        raise NotFoundError(f"no such file: {path}") from e
    except OSError as e:
        raise FileSystemError(f"failed to {action} {path}: {e.strerror or e}") from e


def _kind(mode: int) -> FileKind:
    if stat.S_ISLNK(mode):
        return FileKind.SYMLINK
    if stat.S_ISDIR(mode):
        return FileKind.DIRECTORY
    if stat.S_ISREG(mode):
        return FileKind.FILE
    return FileKind.OTHER


class RealFileSystem:
    """Production backend over the local disk."""

    def list(self, path: PurePath) -> list[PurePath]:
        """List directory children, sorted by name."""
        with _translate_errors("list", path):
            return sorted(Path(path).iterdir())

    def metadata_or_none(self, path: PurePath) -> FileMetadata | None:
        """Read metadata without following a final symlink."""
        try:
            st = os.lstat(path)
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            raise FileSystemError(f"failed to stat {path}: {e.strerror or e}") from e

        kind = _kind(st.st_mode)
        target = None
        if kind is FileKind.SYMLINK:
            with _translate_errors("read link", path):
                target = PurePath(os.readlink(path))
        return FileMetadata(
            kind=kind,
            symlink_target=target,
            size=st.st_size if kind is FileKind.FILE else None,
            modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )

    def metadata(self, path: PurePath) -> FileMetadata:
        """Read metadata for a path that must exist."""
        result = self.metadata_or_none(path)
        if result is None:
            raise NotFoundError(f"no such file: {path}")
        return result

    def create_directory(self, path: PurePath) -> None:
        """Create a single directory; the parent must exist."""
        with _translate_errors("create directory", path):
            Path(path).mkdir()

    def delete(self, path: PurePath) -> None:
        """Remove a file, symlink or empty directory."""
        target = Path(path)
        with _translate_errors("delete", path):
            if target.is_dir() and not target.is_symlink():
                target.rmdir()
            else:
                target.unlink()

    def source(self, path: PurePath) -> BinaryIO:
        """Open a file for reading bytes."""
        with _translate_errors("open", path):
            return open(path, "rb")  # noqa: SIM115

    def sink(self, path: PurePath) -> BinaryIO:
        """Open a file for writing bytes."""
        with _translate_errors("open", path):
            return open(path, "wb")  # noqa: SIM115
