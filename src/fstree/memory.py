"""In-memory backend.

InMemoryFileSystem keeps files, directories and symlinks in a dict keyed by
absolute POSIX path. It resolves symlinks the way a local disk does (in every
path component, with a hop limit), which makes it a faithful stand-in for
RealFileSystem in tests and a useful scratch space for callers.

Mutating calls are recorded in ``operations`` so that callers can assert on
the exact sequence of directory creations and deletions.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import PurePath, PurePosixPath
from typing import BinaryIO

from fstree.errors import FileSystemError, NotFoundError
from fstree.types import FileKind, FileMetadata
from fstree.walk import normalize

__all__ = ["InMemoryFileSystem"]

# Same limit as Linux's MAXSYMLINKS.
MAX_SYMLINK_HOPS = 40

ROOT = PurePosixPath("/")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _Directory:
    modified_at: datetime = field(default_factory=_now)


@dataclass
class _File:
    content: bytes = b""
    modified_at: datetime = field(default_factory=_now)


@dataclass
class _Symlink:
    target: PurePosixPath
    modified_at: datetime = field(default_factory=_now)


_Node = _Directory | _File | _Symlink


class _MemorySink(io.BytesIO):
    """Writable buffer that stores its content in the filesystem.

    Content is persisted on every flush and on close, as long as the file
    and its directory still exist.
    """

    def __init__(self, fs: InMemoryFileSystem, key: PurePosixPath) -> None:
        super().__init__()
        self._fs = fs
        self._key = key

    def flush(self) -> None:
        if not self.closed and self._target_exists():
            self._fs._nodes[self._key] = _File(self.getvalue())
        super().flush()

    def close(self) -> None:
        if not self.closed:
            self.flush()
        super().close()

    def _target_exists(self) -> bool:
        # Writes to a file deleted while open are dropped, as with an unlinked inode.
        nodes = self._fs._nodes
        return isinstance(nodes.get(self._key), _File) and isinstance(
            nodes.get(self._key.parent), _Directory
        )


class InMemoryFileSystem:
    """Backend holding the whole tree in memory.

    All paths must be absolute. ``/`` always exists.
    """

    def __init__(self) -> None:
        self._nodes: dict[PurePosixPath, _Node] = {ROOT: _Directory()}
        self.operations: list[tuple[str, PurePosixPath]] = []

    # ------------------------------------------------------------------
    # FileSystem protocol
    # ------------------------------------------------------------------

    def list(self, path: PurePath) -> list[PurePath]:
        """List directory children in creation order, following symlinks."""
        key = self._canonical(path)
        node = self._nodes.get(key)
        if node is None:
            raise NotFoundError(f"no such file: {path}")
        if not isinstance(node, _Directory):
            raise FileSystemError(f"not a directory: {path}")
        base = self._absolute(path)
        names = [child.name for child in self._nodes if child != ROOT and child.parent == key]
        return [base / name for name in names]

    def metadata_or_none(self, path: PurePath) -> FileMetadata | None:
        """Read metadata without following a final symlink."""
        node = self._nodes.get(self._canonical(path, follow_last=False))
        if node is None:
            return None
        if isinstance(node, _Directory):
            return FileMetadata(kind=FileKind.DIRECTORY, modified_at=node.modified_at)
        if isinstance(node, _Symlink):
            return FileMetadata(
                kind=FileKind.SYMLINK,
                symlink_target=node.target,
                modified_at=node.modified_at,
            )
        return FileMetadata(
            kind=FileKind.FILE, size=len(node.content), modified_at=node.modified_at
        )

    def metadata(self, path: PurePath) -> FileMetadata:
        """Read metadata for a path that must exist."""
        result = self.metadata_or_none(path)
        if result is None:
            raise NotFoundError(f"no such file: {path}")
        return result

    def create_directory(self, path: PurePath) -> None:
        """Create a single directory; the parent must already exist."""
        key = self._new_entry(path)
        self._nodes[key] = _Directory()
        self.operations.append(("create_directory", self._absolute(path)))

    def delete(self, path: PurePath) -> None:
        """Remove a file, symlink or empty directory."""
        key = self._canonical(path, follow_last=False)
        node = self._nodes.get(key)
        if node is None:
            raise NotFoundError(f"no such file: {path}")
        if key == ROOT:
            raise FileSystemError("cannot delete the root directory")
        if isinstance(node, _Directory) and self._has_children(key):
            raise FileSystemError(f"directory not empty: {path}")
        del self._nodes[key]
        self.operations.append(("delete", self._absolute(path)))

    def source(self, path: PurePath) -> BinaryIO:
        """Open a file for reading bytes."""
        node = self._nodes.get(self._canonical(path))
        if node is None:
            raise NotFoundError(f"no such file: {path}")
        if not isinstance(node, _File):
            raise FileSystemError(f"not a regular file: {path}")
        return io.BytesIO(node.content)

    def sink(self, path: PurePath) -> BinaryIO:
        """Open a file for writing bytes, truncating it immediately."""
        key = self._canonical(path)
        node = self._nodes.get(key)
        if node is None:
            self._require_directory(key.parent, path)
        elif not isinstance(node, _File):
            raise FileSystemError(f"not a regular file: {path}")
        self._nodes[key] = _File()
        return _MemorySink(self, key)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def create_symlink(self, link: PurePath, target: PurePath | str) -> None:
        """Create a symlink at ``link`` pointing to ``target``.

        The target is stored as given and need not exist.
        """
        key = self._new_entry(link)
        self._nodes[key] = _Symlink(PurePosixPath(target))

    def write_bytes(self, path: PurePath, content: bytes) -> None:
        with self.sink(path) as sink:
            sink.write(content)

    def read_bytes(self, path: PurePath) -> bytes:
        with self.source(path) as source:
            return source.read()

    def _absolute(self, path: PurePath) -> PurePosixPath:
        posix = PurePosixPath(path)
        if not posix.is_absolute():
            raise FileSystemError(f"path must be absolute: {path}")
        return normalize(posix)

    def _canonical(self, path: PurePath, follow_last: bool = True) -> PurePosixPath:
        """Resolve symlinks in every component of ``path``.

        Args:
            path: Absolute path to resolve.
            follow_last: Also resolve the final component if it is a symlink.

        Returns:
            The path of the entry ``path`` names, which may not exist.

        Raises:
            FileSystemError: If resolution takes more than MAX_SYMLINK_HOPS.
        """
        parts = list(self._absolute(path).parts[1:])
        current = ROOT
        hops = 0
        while parts:
            candidate = current / parts.pop(0)
            node = self._nodes.get(candidate)
            if isinstance(node, _Symlink) and (parts or follow_last):
                hops += 1
                if hops > MAX_SYMLINK_HOPS:
                    raise FileSystemError(f"too many levels of symbolic links: {path}")
                target = normalize(candidate.parent / node.target)
                parts = list(target.parts[1:]) + parts
                current = ROOT
                continue
            current = candidate
        return current

    def _has_children(self, key: PurePosixPath) -> bool:
        return any(child.parent == key for child in self._nodes if child != ROOT)

    def _new_entry(self, path: PurePath) -> PurePosixPath:
        key = self._canonical(path, follow_last=False)
        if key in self._nodes:
            raise FileSystemError(f"already exists: {path}")
        self._require_directory(key.parent, path)
        return key

    def _require_directory(self, key: PurePosixPath, path: PurePath) -> None:
        parent = self._nodes.get(key)
        if parent is None:
            raise NotFoundError(f"parent directory does not exist: {path}")
        if not isinstance(parent, _Directory):
            raise FileSystemError(f"parent is not a directory: {path}")
