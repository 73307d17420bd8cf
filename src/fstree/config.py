"""User configuration for the fstree command line."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Default configuration location, relative to the home directory
CONFIG_DIR_NAME = ".fstree"
CONFIG_FILE = "config.json"


class Settings(BaseModel):
    """Settings read from ``~/.fstree/config.json``.

    Keys are camelCase on disk and snake_case in code.
    """

    model_config = ConfigDict(populate_by_name=True)

    follow_symlinks: bool = Field(default=False, alias="followSymlinks")
    root: Path | None = None

    @classmethod
    def from_file(cls, path: Path) -> Settings:
        """Load settings from a JSON file.

        A missing file yields the defaults.

        Args:
            path: Path to the JSON settings file.

        Returns:
            Parsed Settings.

        Raises:
            ValueError: If the file is not valid JSON or has invalid values.
        """
        if not path.exists():
            return cls()

        data = json.loads(path.read_text())
        return cls.model_validate(data)

    @classmethod
    def load_default(cls) -> Settings:
        """Load settings from the default location."""
        return cls.from_file(Path.home() / CONFIG_DIR_NAME / CONFIG_FILE)

    def resolve(self, path: Path) -> Path:
        """Anchor a relative command-line path at the configured root."""
        if self.root is None or path.is_absolute():
            return path
        return self.root / path
