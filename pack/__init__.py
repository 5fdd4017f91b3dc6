"""
Pack Sync - Mirror a remote package index onto local disk.

This package fetches package metadata from the index, caches it as JSON,
and downloads/extracts every package's source archive into a local tree
that can be incrementally refreshed.

Import from submodules directly:
    from pack.sync import Options, load, download_all
    from pack.index import IndexClient, MetadataCache, Package
    from pack.sync.extractor import extract_files
"""


def _get_version():
    """Read version from VERSION file, falling back to installed metadata."""
    from pathlib import Path
    version_file = Path(__file__).parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    try:
        from importlib.metadata import version, PackageNotFoundError
        return version("pack-sync")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
