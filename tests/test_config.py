"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from rlocate import config as config_module
from rlocate.config import DEFAULT_EXCLUDED_PATHS, AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Should default to the platform data directory."""
        monkeypatch.setattr(config_module.sys, "platform", "linux")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        config = AppConfig()

        assert config.db_path == tmp_path / "rlocate" / "index"
        assert config.root == Path("/")
        assert config.excluded_paths == DEFAULT_EXCLUDED_PATHS
        assert set(config.excluded_paths) == {"/mnt", "/"}

    def test_default_without_xdg(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(config_module.sys, "platform", "linux")
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        config = AppConfig()

        assert config.db_path == tmp_path / ".local" / "share" / "rlocate" / "index"

    def test_default_macos(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(config_module.sys, "platform", "darwin")
        monkeypatch.setenv("HOME", str(tmp_path))

        config = AppConfig()

        assert config.db_path == tmp_path / "Library" / "Application Support" / "rlocate" / "index"

    def test_custom_config(self) -> None:
        config = AppConfig(
            db_path=Path("/custom/index"),
            root=Path("/srv"),
            excluded_paths=("/srv/cache",),
        )

        assert config.db_path == Path("/custom/index")
        assert config.root == Path("/srv")
        assert config.excluded_paths == ("/srv/cache",)

    def test_resolve_db_path_absolute(self) -> None:
        config = AppConfig(db_path=Path("/absolute/index"))

        assert config.resolve_db_path(Path("/base")) == Path("/absolute/index")

    def test_resolve_db_path_relative_no_base(self) -> None:
        config = AppConfig(db_path=Path("relative/index"))

        assert config.resolve_db_path(base_dir=None) == Path("relative/index")

    def test_resolve_db_path_relative_with_base(self) -> None:
        config = AppConfig(db_path=Path("relative/index"))

        resolved = config.resolve_db_path(base_dir=Path("/base/directory"))

        assert resolved == Path("/base/directory/relative/index")
