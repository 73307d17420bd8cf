"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from unittest.mock import MagicMock

import pytest

from fstree.config import Settings
from fstree.context import AppContext
from fstree.memory import InMemoryFileSystem

P = PurePosixPath


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    """Create an empty in-memory filesystem."""
    return InMemoryFileSystem()


@pytest.fixture
def sample_tree(memory_fs: InMemoryFileSystem) -> InMemoryFileSystem:
    """Create the tree ``/a/{f1, b/{f2}}``.

    The operation log is cleared so tests only see their own calls.
    """
    memory_fs.create_directory(P("/a"))
    memory_fs.write_bytes(P("/a/f1"), b"one")
    memory_fs.create_directory(P("/a/b"))
    memory_fs.write_bytes(P("/a/b/f2"), b"two")
    memory_fs.operations.clear()
    return memory_fs


@pytest.fixture
def symlink_tree(memory_fs: InMemoryFileSystem) -> InMemoryFileSystem:
    """Create a tree with a symlinked directory.

    /t/real/inner    regular file
    /t/link          symlink to real (relative target)
    """
    memory_fs.create_directory(P("/t"))
    memory_fs.create_directory(P("/t/real"))
    memory_fs.write_bytes(P("/t/real/inner"), b"inner")
    memory_fs.create_symlink(P("/t/link"), "real")
    memory_fs.operations.clear()
    return memory_fs


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    Nothing exists and nothing can be listed unless a test says otherwise.
    """
    fs = MagicMock()
    fs.metadata_or_none.return_value = None
    fs.list.return_value = []
    return fs


@pytest.fixture
def memory_context(sample_tree: InMemoryFileSystem) -> AppContext:
    """Create an AppContext backed by the sample in-memory tree."""
    return AppContext(filesystem=sample_tree, settings=Settings())
