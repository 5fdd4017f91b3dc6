"""
Package index access.

Fetches package metadata over HTTP and caches it on disk as JSON.
"""

from .models import Package, Release, packages_from_list
from .client import IndexClient, IndexClientConfig
from .cache import MetadataCache

__all__ = [
    # Models
    "Package",
    "Release",
    "packages_from_list",
    # Client
    "IndexClient",
    "IndexClientConfig",
    # Cache
    "MetadataCache",
]
