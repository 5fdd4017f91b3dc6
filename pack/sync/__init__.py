"""
Sync operations module.

Handles archive downloading, extraction, the on-disk package store, and the
load/download_all pipeline.
"""

from .files import File, TextFile, BinaryFile, classify
from .extractor import extract_files
from .store import PackageStore
from .downloader import ArchiveDownloader, ArchiveDownloaderConfig
from .operations import Options, Pack, PackageSync, load, download_all

__all__ = [
    # Files
    "File",
    "TextFile",
    "BinaryFile",
    "classify",
    # Extraction
    "extract_files",
    # Store
    "PackageStore",
    # Downloader
    "ArchiveDownloader",
    "ArchiveDownloaderConfig",
    # Operations
    "Options",
    "Pack",
    "PackageSync",
    "load",
    "download_all",
]
