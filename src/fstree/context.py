"""Application context for dependency injection.

Commands receive the backend through an AppContext instead of constructing
it themselves, so tests can hand them an InMemoryFileSystem or a mock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fstree.config import Settings
from fstree.protocols import FileSystem


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from fstree.filesystem import RealFileSystem

    return RealFileSystem()


@dataclass
class AppContext:
    """Container for the backend and settings used by CLI commands."""

    filesystem: FileSystem = field(default_factory=_default_filesystem)
    settings: Settings = field(default_factory=Settings)


def create_context(config_path: Path | None = None) -> AppContext:
    """Factory for application dependencies.

    Args:
        config_path: Override the settings file (defaults to ~/.fstree/config.json).

    Returns:
        Configured AppContext.
    """
    settings = Settings.from_file(config_path) if config_path else Settings.load_default()
    return AppContext(filesystem=_default_filesystem(), settings=settings)
