"""
On-disk package store for Pack Sync.

Each package's extracted files live under <root>/packages/<name>/.
"""

import os
import shutil
from pathlib import Path
from typing import Iterable, List, Tuple

from ..core.paths import get_packages_dir
from ..errors import (
    DirectoryCreateFailed,
    DirectoryDeleteFailed,
    DirectoryReadFailed,
    FileReadFailed,
    FileWriteFailed,
)


class PackageStore:
    """Manages the per-package directory tree."""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.packages_dir = get_packages_dir(self.root)

    def package_dir(self, name: str) -> Path:
        return self.packages_dir / name

    def exists(self, name: str) -> bool:
        return self.package_dir(name).is_dir()

    def delete(self, name: str):
        """Remove a package directory and everything under it."""
        path = self.package_dir(name)
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise DirectoryDeleteFailed(path, e) from e

    def read_all(self, name: str) -> List[Tuple[str, bytes]]:
        """
        Read every regular file stored for a package.

        Returns:
            Sorted list of (posix path relative to the package dir, raw bytes)
        """
        files = []

        def scan_dir(dir_path: Path, prefix: str = ""):
            try:
                with os.scandir(dir_path) as it:
                    entries = list(it)
            except OSError as e:
                raise DirectoryReadFailed(dir_path, e) from e

            for entry in entries:
                rel_path = f"{prefix}{entry.name}"
                if entry.is_file(follow_symlinks=False):
                    try:
                        with open(entry.path, "rb") as f:
                            files.append((rel_path, f.read()))
                    except OSError as e:
                        raise FileReadFailed(entry.path, e) from e
                elif entry.is_dir(follow_symlinks=False):
                    scan_dir(Path(entry.path), f"{rel_path}/")

        scan_dir(self.package_dir(name))
        files.sort(key=lambda item: item[0])
        return files

    def partial_dir(self, name: str) -> Path:
        """Staging directory a package is written into before being moved in place."""
        return self.packages_dir / f".{name}.partial"

    def write_all(self, name: str, files: Iterable[Tuple[str, bytes]]):
        """
        Write a package's files, replacing whatever was stored before.

        Files are staged in a sibling directory and moved into place only after
        all of them are written. If writing fails the staging dir is removed and
        the previously stored files are left in place.
        """
        staging = self.partial_dir(name)
        shutil.rmtree(staging, ignore_errors=True)
        try:
            self._write_tree(staging, files)
            self.delete(name)
            try:
                os.replace(staging, self.package_dir(name))
            except OSError as e:
                raise DirectoryCreateFailed(self.package_dir(name), e) from e
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

    @staticmethod
    def _write_tree(base: Path, files: Iterable[Tuple[str, bytes]]):
        try:
            base.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateFailed(base, e) from e
        for rel_path, data in files:
            path = base / rel_path
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryCreateFailed(path.parent, e) from e
            try:
                path.write_bytes(data)
            except OSError as e:
                raise FileWriteFailed(path, e) from e

    def list_packages(self) -> List[str]:
        """Names of packages with a directory on disk."""
        if not self.packages_dir.is_dir():
            return []
        try:
            return sorted(
                p.name for p in self.packages_dir.iterdir()
                if p.is_dir() and not p.name.startswith(".")
            )
        except OSError as e:
            raise DirectoryReadFailed(self.packages_dir, e) from e

    def disk_usage(self) -> Tuple[int, int]:
        """
        Total size of everything under the cache root.

        Returns:
            Tuple of (file_count, total_size_bytes)
        """
        count = 0
        size = 0
        if not self.root.exists():
            return 0, 0
        for f in self.root.rglob("*"):
            if f.is_file():
                count += 1
                try:
                    size += f.stat().st_size
                except OSError:
                    pass
        return count, size
