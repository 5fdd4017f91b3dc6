"""
Sync operations for Pack Sync.

load() produces a Pack (cache root + options + package list) from the local
cache or the index. download_all() walks that list and, per package, reuses
the files on disk, deletes and re-downloads them, or skips packages that are
missing from the archive host.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..core.paths import get_cache_root
from ..core.progress import ConsoleProgress, Done, Progress, ProgressTracker, Skipped, Started
from ..index.cache import MetadataCache
from ..index.client import IndexClient
from ..index.models import Package
from .downloader import ArchiveDownloader
from .extractor import extract_files
from .files import File, classify
from .store import PackageStore

MISSING_ON_HOST = "missing on archive host"


@dataclass(frozen=True)
class Options:
    """Sync policy flags."""
    write_to_file: bool = True
    refresh_package_list: bool = False
    write_packages_to_disc: bool = True
    read_packages_from_disc: bool = True
    print_logs: bool = False
    max_workers: int = 1  # >1 fans out per-package work; results stay ordered


@dataclass(frozen=True)
class Pack:
    """Session handle returned by load(). Never mutated afterwards."""
    root: Path
    options: Options = field(default_factory=Options)
    packages: tuple = ()

    @property
    def store(self) -> PackageStore:
        return PackageStore(self.root)


def _tracker_for(options: Options, progress: Optional[ProgressTracker]) -> ProgressTracker:
    if progress is not None:
        return progress
    return ConsoleProgress() if options.print_logs else ProgressTracker()


def load(
    options: Optional[Options] = None,
    progress: Optional[ProgressTracker] = None,
    client: Optional[IndexClient] = None,
    data_dir: Optional[Path] = None,
) -> Pack:
    """
    Load the package list, from the local cache when allowed.

    Args:
        options: Sync policy (defaults to Options())
        progress: Event sink; chosen from options.print_logs if omitted
        client: Index client (a default one is created on cache miss)
        data_dir: Local data directory; resolved per-OS if omitted

    Returns:
        Pack wrapping the cache root, options and packages

    Raises:
        NoSuitableDirectory, CorruptCache, FileReadFailed, RequestFailed,
        UnexpectedStatus, InvalidResponseBody, DirectoryCreateFailed,
        FileWriteFailed
    """
    options = options or Options()
    progress = _tracker_for(options, progress)
    root = get_cache_root(data_dir)
    cache = MetadataCache(root)

    if not options.refresh_package_list:
        cached = cache.load()
        if cached is not None:
            return Pack(root=root, options=options, packages=tuple(cached))

    client = client or IndexClient()
    packages = client.fetch_index(progress)
    # Persisting is part of a refresh: a failed save fails the load
    cache.save(packages)
    return Pack(root=root, options=options, packages=tuple(packages))


class PackageSync:
    """Per-package decision logic for download_all()."""

    def __init__(self, pack: Pack, downloader: ArchiveDownloader, progress: ProgressTracker):
        self.pack = pack
        self.options = pack.options
        self.store = pack.store
        self.downloader = downloader
        self.progress = progress
        self.total = len(pack.packages)

    def sync_package(self, index: int, package: Package) -> Optional[List[Tuple[str, bytes]]]:
        """
        Produce the raw files for one package.

        Returns:
            List of (relative_path, raw_bytes), or None if the package is
            missing on the archive host
        """
        self.progress.emit(Progress("download", index + 1, self.total, package.name))

        if self.store.exists(package.name):
            if self.options.read_packages_from_disc:
                return self.store.read_all(package.name)
            self.store.delete(package.name)

        return self.download_and_extract(package)

    def download_and_extract(self, package: Package) -> Optional[List[Tuple[str, bytes]]]:
        data = self.downloader.fetch(package)
        if data is None:
            self.progress.emit(Skipped(package.name, MISSING_ON_HOST))
            return None

        files = extract_files(data)
        if self.options.write_packages_to_disc:
            self.store.write_all(package.name, files)
        return files


def download_all(
    pack: Pack,
    progress: Optional[ProgressTracker] = None,
    downloader: Optional[ArchiveDownloader] = None,
) -> Dict[str, List[File]]:
    """
    Materialize the files of every package in the pack.

    The first hard error aborts the run and nothing is returned; packages
    missing on the archive host (HTTP 404) are skipped.

    Returns:
        Mapping of package name to its files, in package-list order
    """
    progress = _tracker_for(pack.options, progress)
    syncer = PackageSync(pack, downloader or ArchiveDownloader(), progress)
    packages = list(pack.packages)
    progress.emit(Started("download", len(packages)))

    if pack.options.max_workers > 1 and len(packages) > 1:
        executor = ThreadPoolExecutor(max_workers=pack.options.max_workers)
        try:
            # map() yields in submission order, so an error surfaces at its package
            outcomes = list(executor.map(syncer.sync_package, range(len(packages)), packages))
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
    else:
        outcomes = [syncer.sync_package(i, package) for i, package in enumerate(packages)]

    result = {}
    for package, raw_files in zip(packages, outcomes):
        if raw_files is None:
            continue
        result[package.name] = [classify(name, data) for name, data in raw_files]

    progress.emit(Done("download", len(result)))
    return result
