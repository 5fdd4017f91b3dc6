#!/usr/bin/env python3
"""
Pack Sync - Mirror every package in the index onto local disk.

Loads the package list (cached in packages.json unless --refresh), then
downloads and extracts each package's source tarball into the cache tree.
"""

import argparse
import sys

from pack import __version__
from pack.core.formatting import format_size
from pack.core.paths import get_cache_root
from pack.errors import PackError
from pack.sync import Options, PackageStore, download_all, load


def report_directory() -> int:
    """Print the cache root and what's stored under it."""
    root = get_cache_root()
    store = PackageStore(root)
    file_count, total_size = store.disk_usage()
    print(root)
    print(f"  {len(store.list_packages())} packages, {file_count} files, {format_size(total_size)}")
    return 0


def run(args: argparse.Namespace) -> int:
    options = Options(
        refresh_package_list=args.refresh,
        read_packages_from_disc=not args.redownload_all,
        print_logs=not args.quiet,
        max_workers=args.workers,
    )

    pack = load(options)
    if options.print_logs:
        print(f"Loaded {len(pack.packages)} packages into {pack.root}")

    files = download_all(pack)
    if options.print_logs:
        total_files = sum(len(f) for f in files.values())
        print(f"Synced {len(files)} packages ({total_files} files)")
    return 0


def main(argv=None) -> int:
    """Entry point."""
    parser = argparse.ArgumentParser(
        prog="pack-sync",
        description="Pack Sync - Download and extract every package in the index"
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Re-fetch the package list from the index instead of using the cache"
    )
    parser.add_argument(
        "--redownload-all",
        action="store_true",
        help="Delete and re-download packages that already exist on disk"
    )
    parser.add_argument(
        "--dir",
        action="store_true",
        help="Print the cache directory and exit"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Don't print progress"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of packages to download at once (default: 1)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    if args.workers < 1:
        parser.error("--workers must be at least 1")

    try:
        if args.dir:
            return report_directory()
        return run(args)
    except PackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nCancelled by user.")
        sys.exit(0)
