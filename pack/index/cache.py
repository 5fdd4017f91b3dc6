"""
Local metadata cache for Pack Sync.

The cache is a single JSON file, <root>/packages.json, holding the full
package list from the last index fetch:

    {"packages": [{"name": ..., "latest-version": ..., ...}]}
"""

import json
from pathlib import Path
from typing import Optional

from ..core.paths import get_packages_file
from ..errors import CorruptCache, DirectoryCreateFailed, FileReadFailed, FileWriteFailed
from .models import packages_from_list


class MetadataCache:
    """Reads and writes the cached package list."""

    def __init__(self, root: Path):
        """
        Args:
            root: Cache root directory (the file lives directly under it)
        """
        self.root = Path(root)
        self.path = get_packages_file(self.root)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Optional[list]:
        """
        Load the cached package list.

        Returns:
            List of Package, or None if no cache file exists

        Raises:
            FileReadFailed: the file exists but can't be read
            CorruptCache: the file doesn't parse as the expected shape
        """
        if not self.exists():
            return None

        try:
            with open(self.path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise FileReadFailed(self.path, e) from e

        try:
            data = json.loads(raw)
            if not isinstance(data, dict) or "packages" not in data:
                raise ValueError("missing field 'packages'")
            return packages_from_list(data["packages"])
        except ValueError as e:
            raise CorruptCache(e) from e

    def save(self, packages: list):
        """Write the package list, replacing any previous cache."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateFailed(self.root, e) from e

        data = {"packages": [p.to_dict() for p in packages]}
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise FileWriteFailed(self.path, e) from e
