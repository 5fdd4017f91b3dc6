"""
Tests for local data directory resolution.
"""

from pathlib import Path

import pytest

from pack.core import paths
from pack.errors import NoSuitableDirectory


class TestDataDir:

    def test_env_override(self, temp_dir, monkeypatch):
        monkeypatch.setenv("PACK_DATA_DIR", str(temp_dir))
        assert paths.get_data_dir() == temp_dir.absolute()

    def test_xdg_data_home(self, temp_dir, monkeypatch):
        monkeypatch.delenv("PACK_DATA_DIR", raising=False)
        monkeypatch.setattr("os.name", "posix")
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_DATA_HOME", str(temp_dir))
        assert paths.get_data_dir() == temp_dir

    def test_relative_xdg_ignored(self, monkeypatch):
        monkeypatch.delenv("PACK_DATA_DIR", raising=False)
        monkeypatch.setattr("os.name", "posix")
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_DATA_HOME", "relative/dir")
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: Path("/home/someone")))
        assert paths.get_data_dir() == Path("/home/someone/.local/share")

    def test_no_home_directory(self, monkeypatch):
        def no_home(cls):
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.delenv("PACK_DATA_DIR", raising=False)
        monkeypatch.setattr("os.name", "posix")
        monkeypatch.setattr(Path, "home", classmethod(no_home))
        with pytest.raises(NoSuitableDirectory):
            paths.get_data_dir()

    def test_cache_root_layout(self, temp_dir):
        root = paths.get_cache_root(temp_dir)
        assert root == temp_dir.absolute() / "pack"
        assert paths.get_packages_file(root) == root / "packages.json"
        assert paths.get_packages_dir(root) == root / "packages"
