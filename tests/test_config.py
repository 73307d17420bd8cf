"""Tests for user settings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fstree.config import Settings


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.follow_symlinks is False
        assert settings.root is None

    def test_missing_file_yields_defaults(self, tmp_path: Path) -> None:
        settings = Settings.from_file(tmp_path / "missing.json")

        assert settings == Settings()

    def test_from_file_camel_case(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"followSymlinks": True, "root": "/srv"}))

        settings = Settings.from_file(config)

        assert settings.follow_symlinks is True
        assert settings.root == Path("/srv")

    def test_populate_by_name(self) -> None:
        assert Settings(follow_symlinks=True).follow_symlinks is True

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text("{not json")

        with pytest.raises(ValueError):
            Settings.from_file(config)

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"followSymlinks": "sometimes"}))

        with pytest.raises(ValueError):
            Settings.from_file(config)

    def test_load_default_reads_home(self, temp_home: Path) -> None:
        (temp_home / ".fstree").mkdir()
        (temp_home / ".fstree" / "config.json").write_text(json.dumps({"followSymlinks": True}))

        assert Settings.load_default().follow_symlinks is True

    def test_resolve_without_root(self) -> None:
        assert Settings().resolve(Path("rel")) == Path("rel")

    def test_resolve_relative_under_root(self) -> None:
        settings = Settings(root=Path("/srv"))

        assert settings.resolve(Path("data/x")) == Path("/srv/data/x")

    def test_resolve_keeps_absolute(self) -> None:
        settings = Settings(root=Path("/srv"))

        assert settings.resolve(Path("/etc")) == Path("/etc")
