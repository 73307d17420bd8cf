"""Tests for application context."""

from __future__ import annotations

import json
from pathlib import Path

from fstree.config import Settings
from fstree.context import AppContext, create_context
from fstree.filesystem import RealFileSystem
from fstree.memory import InMemoryFileSystem


class TestAppContext:
    """Tests for AppContext and create_context."""

    def test_defaults(self) -> None:
        ctx = AppContext()

        assert isinstance(ctx.filesystem, RealFileSystem)
        assert ctx.settings == Settings()

    def test_accepts_test_doubles(self, memory_fs: InMemoryFileSystem) -> None:
        ctx = AppContext(filesystem=memory_fs)

        assert ctx.filesystem is memory_fs

    def test_create_context_default(self, temp_home: Path) -> None:
        ctx = create_context()

        assert isinstance(ctx.filesystem, RealFileSystem)
        assert ctx.settings == Settings()

    def test_create_context_config_path(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.json"
        config.write_text(json.dumps({"followSymlinks": True}))

        ctx = create_context(config_path=config)

        assert ctx.settings.follow_symlinks is True
