"""Depth-first tree traversal with symlink-cycle detection.

TreeWalker is the engine behind both recursive listing and recursive
deletion. It walks one subtree and yields paths lazily, either announcing a
directory before its contents (pre-order, for listing) or after them
(post-order, for deletion).

The walk is driven by an explicit list of pending frames instead of nested
generators, so a deep tree costs heap, not interpreter stack, and the
walker's state can be inspected or abandoned at any point.
"""

from __future__ import annotations

import logging
import ntpath
import posixpath
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath, PureWindowsPath
from typing import TYPE_CHECKING, TypeVar

from fstree.errors import FileSystemError, SymlinkCycleError

if TYPE_CHECKING:
    from fstree.protocols import FileSystem

__all__ = ["TreeWalker", "normalize", "symlink_target"]

logger = logging.getLogger(__name__)

_P = TypeVar("_P", bound=PurePath)


class _Phase(Enum):
    VISIT = "visit"
    EXPAND = "expand"
    LEAVE = "leave"


@dataclass
class _Frame:
    path: PurePath
    phase: _Phase
    pushed: bool = False


def normalize(path: _P) -> _P:
    """Collapse ``.`` and ``..`` segments lexically."""
    module = ntpath if isinstance(path, PureWindowsPath) else posixpath
    return type(path)(module.normpath(str(path)))


def symlink_target(fs: FileSystem, path: PurePath) -> PurePath | None:
    """Resolve one level of symlink indirection.

    Args:
        fs: Backend to query.
        path: Path that may be a symlink.

    Returns:
        The path the symlink points to, joined onto the link's parent when
        relative, or None if ``path`` is not a symlink or its metadata
        cannot be read.
    """
    try:
        metadata = fs.metadata_or_none(path)
    except FileSystemError as e:
        logger.debug("Cannot read metadata of %s: %s", path, e)
        return None
    if metadata is None or metadata.symlink_target is None:
        return None
    return normalize(path.parent / metadata.symlink_target)


class TreeWalker:
    """Lazy depth-first walk over one subtree.

    The walker is a single-pass iterator. Each call to ``next()`` does only
    the backend work needed to produce the next path.

    The traversal stack holds the resolved, lexically normalized directories
    currently being descended into and is used only to detect symlink cycles. A caller may
    pass in a stack that already holds ancestors (as recursive listing does
    with its root); the walker pushes and pops above that depth only.

    Args:
        fs: Backend to walk.
        path: Root of the subtree. It is yielded itself.
        stack: Traversal stack shared with the caller, or None for a fresh one.
        follow_symlinks: Descend into directories reached through symlinks.
        postorder: Yield a directory after its descendants instead of before.
    """

    def __init__(
        self,
        fs: FileSystem,
        path: PurePath,
        *,
        stack: list[PurePath] | None = None,
        follow_symlinks: bool = False,
        postorder: bool = False,
    ) -> None:
        self._fs = fs
        self.stack: list[PurePath] = stack if stack is not None else []
        self.follow_symlinks = follow_symlinks
        self.postorder = postorder
        self._base_depth = len(self.stack)
        self._pending: list[_Frame] = [_Frame(path, _Phase.VISIT)]

    def __iter__(self) -> TreeWalker:
        return self

    def __next__(self) -> PurePath:
        try:
            while self._pending:
                emitted = self._step(self._pending.pop())
                if emitted is not None:
                    return emitted
        except Exception:
            self.close()
            raise
        raise StopIteration

    def close(self) -> None:
        """Abandon the walk and unwind everything it pushed onto the stack."""
        self._pending.clear()
        del self.stack[self._base_depth :]

    def _step(self, frame: _Frame) -> PurePath | None:
        if frame.phase is _Phase.VISIT:
            if not self.postorder:
                self._pending.append(_Frame(frame.path, _Phase.EXPAND))
                return frame.path
            self._expand(frame.path)
            return None

        if frame.phase is _Phase.EXPAND:
            self._expand(frame.path)
            return None

        if frame.pushed:
            self.stack.pop()
        return frame.path if self.postorder else None

    def _expand(self, path: PurePath) -> None:
        children = self._list_or_none(path)
        pushed = False
        if children:
            resolved, symlink_count = self._resolve(path)
            if self.follow_symlinks or symlink_count == 0:
                self.stack.append(resolved)
                pushed = True
            else:
                logger.debug("Not following symlinked directory %s", path)

        if pushed or self.postorder:
            self._pending.append(_Frame(path, _Phase.LEAVE, pushed))
        if pushed:
            # Reversed so that children pop off in listing order.
            self._pending.extend(_Frame(child, _Phase.VISIT) for child in reversed(children))

    def _list_or_none(self, path: PurePath) -> list[PurePath] | None:
        try:
            return self._fs.list(path)
        except FileSystemError:
            return None

    def _resolve(self, path: PurePath) -> tuple[PurePath, int]:
        """Follow ``path`` through any symlinks to the entry it finally names.

        Returns:
            The resolved path and the number of symlink hops taken.

        Raises:
            SymlinkCycleError: If following symlinks and the resolution
                reaches a directory already on the stack, or loops on itself.
        """
        resolved = path
        symlink_count = 0
        chain = {path}
        while True:
            if self.follow_symlinks and normalize(resolved) in self.stack:
                raise SymlinkCycleError(path)
            target = symlink_target(self._fs, resolved)
            if target is None:
                break
            symlink_count += 1
            if target in chain:
                if self.follow_symlinks:
                    raise SymlinkCycleError(path)
                break
            chain.add(target)
            resolved = target
        return normalize(resolved), symlink_count
