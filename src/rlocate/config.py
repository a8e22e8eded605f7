"""Application configuration defaults."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

APP_NAME = "rlocate"
INDEX_FILENAME = "index"

# Mount points and the root itself are never descended into from the top level
DEFAULT_EXCLUDED_PATHS: tuple[str, ...] = ("/mnt", "/")


def _get_data_dir() -> Path:
    """Get the per-user application data directory for the current platform."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"

    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def _get_default_db_path() -> Path:
    return _get_data_dir() / APP_NAME / INDEX_FILENAME


@dataclass(slots=True)
class AppConfig:
    db_path: Path | None = None
    root: Path = Path("/")
    excluded_paths: tuple[str, ...] = field(default=DEFAULT_EXCLUDED_PATHS)

    def __post_init__(self) -> None:
        if self.db_path is None:
            self.db_path = _get_default_db_path()

    def resolve_db_path(self, base_dir: Path | None = None) -> Path:
        if self.db_path is None:
            self.db_path = _get_default_db_path()
        if Path(self.db_path).is_absolute() or base_dir is None:
            return Path(self.db_path)
        return base_dir / self.db_path
