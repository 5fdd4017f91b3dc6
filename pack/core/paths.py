"""
Local path resolution for Pack Sync.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from ..errors import NoSuitableDirectory
from .constants import CACHE_DIR_NAME, DATA_DIR_ENV, PACKAGES_DIR, PACKAGES_FILE


def get_data_dir() -> Path:
    """
    Resolve the OS-specific local data directory.

    PACK_DATA_DIR wins if set. Otherwise follows platform conventions:
    %LOCALAPPDATA% on Windows, ~/Library/Application Support on macOS,
    $XDG_DATA_HOME or ~/.local/share elsewhere.

    Raises:
        NoSuitableDirectory: if no absolute directory can be determined
    """
    override = os.environ.get(DATA_DIR_ENV, "")
    if override:
        return Path(override).expanduser().absolute()

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA", "")
        if base:
            return Path(base)
        raise NoSuitableDirectory()

    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        raise NoSuitableDirectory()

    if sys.platform == "darwin":
        return home / "Library" / "Application Support"

    xdg = os.environ.get("XDG_DATA_HOME", "")
    # XDG Base Directory: relative values are invalid and must be ignored
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".local" / "share"


def get_cache_root(data_dir: Optional[Path] = None) -> Path:
    """Get the cache root (<data_dir>/pack)."""
    base = data_dir if data_dir is not None else get_data_dir()
    return Path(base).absolute() / CACHE_DIR_NAME


def get_packages_file(root: Path) -> Path:
    """Get path to the cached package list."""
    return root / PACKAGES_FILE


def get_packages_dir(root: Path) -> Path:
    """Get the directory holding one subfolder per package."""
    return root / PACKAGES_DIR
