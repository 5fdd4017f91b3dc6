"""
Archive downloader for Pack Sync.

Fetches package tarballs from the archive host. A 404 means the package is
listed in the index but gone from the host, which is not an error.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import requests

from ..core.constants import ARCHIVE_URL, REQUEST_TIMEOUT
from ..errors import RequestFailed, UnexpectedStatus
from ..index.models import Package


@dataclass
class ArchiveDownloaderConfig:
    """Configuration for ArchiveDownloader."""
    archive_url: str = ARCHIVE_URL
    timeout: Tuple[int, int] = REQUEST_TIMEOUT


class ArchiveDownloader:
    """Blocking, whole-body tarball fetcher."""

    def __init__(self, config: Optional[ArchiveDownloaderConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ArchiveDownloaderConfig()
        self.session = session or requests.Session()

    def archive_url(self, package: Package) -> str:
        return f"{self.config.archive_url}/{package.archive_name}"

    def fetch(self, package: Package) -> Optional[bytes]:
        """
        Download the tarball for a package's latest version.

        Returns:
            Archive bytes, or None if the host answered 404

        Raises:
            RequestFailed: transport error
            UnexpectedStatus: any status other than 200/404
        """
        url = self.archive_url(package)
        try:
            response = self.session.get(url, data=b"", timeout=self.config.timeout)
        except requests.RequestException as e:
            raise RequestFailed(url, e) from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise UnexpectedStatus(url, response.status_code)
        return response.content
